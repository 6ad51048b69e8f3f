from path_display.errors import TransformUnresolved
from path_display.geometry import IDENTITY_POSE, Pose


class FrameResolver:
    """Looks up the pose of a frame in the fixed (world) frame."""

    def resolve(self, frame_id):
        """Return the world Pose of ``frame_id`` or raise TransformUnresolved."""
        raise NotImplementedError


class StaticFrameResolver(FrameResolver):
    """Resolves frames from a fixed table, e.g. when no tf tree is running."""

    def __init__(self, fixed_frame='map', frames=None):
        self.fixed_frame = fixed_frame
        self._frames = dict(frames or {})

    def set_frame(self, frame_id, pose):
        self._frames[frame_id] = pose if isinstance(pose, Pose) else Pose.from_values(*pose)

    def remove_frame(self, frame_id):
        self._frames.pop(frame_id, None)

    def resolve(self, frame_id):
        if frame_id == self.fixed_frame:
            return IDENTITY_POSE
        try:
            return self._frames[frame_id]
        except KeyError:
            raise TransformUnresolved(frame_id, f"unknown to static table rooted at '{self.fixed_frame}'") from None
