from typing import NamedTuple, Tuple

from path_display.geometry import Pose

PATH_MESSAGE_TYPE = 'nav_msgs/msg/Path'


class PathMessage(NamedTuple):
    frame_id: str
    poses: Tuple[Pose, ...] = ()


def pose_from_msg(pose_msg):
    """Convert a geometry_msgs/Pose (or anything shaped like one) to a Pose."""
    p = pose_msg.position
    q = pose_msg.orientation
    return Pose.from_values((p.x, p.y, p.z), (q.x, q.y, q.z, q.w))


def path_from_msg(msg):
    """Convert a nav_msgs/Path into an immutable PathMessage.

    Each entry of ``msg.poses`` is a PoseStamped; the per-pose headers are
    ignored and everything is expressed in ``msg.header.frame_id``.
    """
    return PathMessage(
        frame_id=msg.header.frame_id,
        poses=tuple(pose_from_msg(stamped.pose) for stamped in msg.poses),
    )
