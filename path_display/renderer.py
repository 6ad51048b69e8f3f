from enum import Enum

import numpy as np

from path_display.errors import TransformUnresolved
from path_display.geometry import ARROW_CORRECTION, Pose, quaternion_multiply
from path_display.style import DisplayMode

LINE_MATERIAL = 'Default/TransGreen'


class RenderState(Enum):
    IDLE = 'idle'
    RENDERING = 'rendering'
    FRAME_UNRESOLVED = 'frame_unresolved'


class PathRenderer:
    """Per-tick update of the line and indicators from the buffered path.

    The caller holds the display lock for the whole of ``update()``.
    """

    def __init__(self, scene, root_visual, buffer, pool, style, frames, logger):
        self.scene = scene
        self.root_visual = root_visual
        self.buffer = buffer
        self.pool = pool
        self.style = style
        self.frames = frames
        self.logger = logger
        self.line = None
        self.state = RenderState.IDLE

    def update(self):
        """Run one render pass. Returns True when the visuals were refreshed."""
        msg = self.buffer.peek()
        if msg is None:
            self.state = RenderState.IDLE
            return False

        if self.style.rebuild_line:
            self._rebuild_line()

        try:
            frame_pose = self.frames.resolve(msg.frame_id)
        except TransformUnresolved as e:
            if self.state is not RenderState.FRAME_UNRESOLVED:
                self.logger.error(str(e))
            else:
                self.logger.debug(str(e))
            self.state = RenderState.FRAME_UNRESOLVED
            return False
        if self.state is RenderState.FRAME_UNRESOLVED:
            self.logger.info(f"Frame '{msg.frame_id}' resolved again, resuming path rendering.")
        self.state = RenderState.RENDERING

        position = np.asarray(frame_pose.position) + np.asarray(self.style.offset)
        self.root_visual.set_local_position(position)
        self.root_visual.set_local_rotation(frame_pose.orientation)

        self.line.clear_points()
        self.pool.hide_from(len(msg.poses))

        mode = self.style.mode
        for i, pose in enumerate(msg.poses):
            self.pool.ensure_size(i + 1, self.style)
            self.line.add_point(pose.position, self.style.line_color)
            self._place(self.pool.slot(i), pose, mode)

        if self.style.dirty:
            self.pool.apply_style(self.style)
            self.style.dirty = False
        return True

    def _place(self, slot, pose, mode):
        slot.axis.set_local_pose(pose)
        slot.arrow.set_local_pose(
            Pose(pose.position, quaternion_multiply(pose.orientation, ARROW_CORRECTION)))

        if mode is DisplayMode.AXIS:
            slot.axis.set_visible(True)
            slot.axis.show_axis_head(self.style.axis_head_visible)
            slot.arrow.set_visible(False)
        elif mode is DisplayMode.ARROW:
            slot.axis.set_visible(False)
            slot.axis.show_axis_head(False)
            slot.arrow.set_visible(True)
        elif mode is DisplayMode.NONE:
            slot.axis.set_visible(False)
            slot.axis.show_axis_head(False)
            slot.arrow.set_visible(False)
        else:
            raise ValueError(f"Unhandled display mode {mode!r}")

    def _rebuild_line(self):
        # Point colours are fixed when the strip is created, so a colour
        # change means a new strip.
        self.root_visual.remove_geometries()
        self.line = self.scene.create_line_strip(self.scene.material(LINE_MATERIAL))
        self.root_visual.add_geometry(self.line)
        self.style.rebuild_line = False
