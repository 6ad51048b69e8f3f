from geometry_msgs.msg import Point
from std_msgs.msg import ColorRGBA
from visualization_msgs.msg import Marker, MarkerArray

from path_display.primitives import ArrowPrimitive, CylinderPrimitive, LinePrimitive, flatten


def to_color_msg(color):
    return ColorRGBA(r=float(color.r), g=float(color.g), b=float(color.b), a=float(color.a))


def to_point_msg(p):
    return Point(x=float(p[0]), y=float(p[1]), z=float(p[2]))


def set_pose(marker, pose):
    marker.pose.position = to_point_msg(pose.position)
    x, y, z, w = pose.orientation
    marker.pose.orientation.x = float(x)
    marker.pose.orientation.y = float(y)
    marker.pose.orientation.z = float(z)
    marker.pose.orientation.w = float(w)


def clear_marker_array(frame_id, stamp, ns='path'):
    """A MarkerArray holding only a DELETEALL for ``ns``."""
    delete_marker = Marker()
    delete_marker.header.frame_id = frame_id
    delete_marker.header.stamp = stamp
    delete_marker.ns = ns
    delete_marker.action = Marker.DELETEALL
    marker_array = MarkerArray()
    marker_array.markers.append(delete_marker)
    return marker_array


def scene_to_marker_array(root_visual, frame_id, stamp, line_width=0.01, ns='path'):
    """Replace everything previously published under ``ns`` with the scene."""
    # Clear old markers first
    marker_array = clear_marker_array(frame_id, stamp, ns)

    for i, primitive in enumerate(flatten(root_visual)):
        marker = Marker()
        marker.header.frame_id = frame_id
        marker.header.stamp = stamp
        marker.ns = ns
        marker.id = i
        marker.action = Marker.ADD
        marker.pose.orientation.w = 1.0

        if isinstance(primitive, LinePrimitive):
            marker.type = Marker.LINE_STRIP
            set_pose(marker, primitive.pose)
            marker.scale.x = float(line_width)
            marker.points = [to_point_msg(p) for p in primitive.points]
            marker.colors = [to_color_msg(c) for c in primitive.colors]
            marker.color = to_color_msg(primitive.colors[0])
        elif isinstance(primitive, ArrowPrimitive):
            marker.type = Marker.ARROW
            marker.points = [to_point_msg(primitive.start), to_point_msg(primitive.end)]
            marker.scale.x = primitive.shaft_diameter
            marker.scale.y = primitive.head_diameter
            marker.scale.z = primitive.head_length
            marker.color = to_color_msg(primitive.color)
        elif isinstance(primitive, CylinderPrimitive):
            marker.type = Marker.CYLINDER
            set_pose(marker, primitive.pose)
            marker.scale.x = primitive.diameter
            marker.scale.y = primitive.diameter
            marker.scale.z = primitive.length
            marker.color = to_color_msg(primitive.color)
        else:
            raise TypeError(f"Unsupported primitive {type(primitive).__name__}")
        marker_array.markers.append(marker)

    return marker_array
