"""Retained-mode scene graph the display draws into.

Visuals form a tree under ``Scene.root_visual``. Nothing here draws pixels:
a backend (see ``path_display.markers``) walks the tree after each render
pass and turns the visible parts into whatever the viewer understands.
"""
import itertools

from path_display.geometry import IDENTITY_QUATERNION, ZERO_VECTOR, Pose, quaternion_from_euler
from path_display.style import Color

AXIS_COLORS = (
    Color(1.0, 0.0, 0.0, 1.0),
    Color(0.0, 1.0, 0.0, 1.0),
    Color(0.0, 0.0, 1.0, 1.0),
)
# Rotations taking an arrow's +Z onto the X, Y and Z axes.
AXIS_ROTATIONS = (
    quaternion_from_euler(0.0, 1.5707963267948966, 0.0),
    quaternion_from_euler(-1.5707963267948966, 0.0, 0.0),
    IDENTITY_QUATERNION,
)
AXIS_HEAD_LENGTH_RATIO = 0.25
AXIS_HEAD_RADIUS_RATIO = 2.0


class Material:
    def __init__(self, name):
        self.name = name
        self.ambient = Color(1.0, 1.0, 1.0, 1.0)
        self.diffuse = Color(1.0, 1.0, 1.0, 1.0)
        self.emissive = Color(1.0, 1.0, 1.0, 1.0)

    def set_color(self, color):
        color = Color(*color)
        self.ambient = color
        self.diffuse = color
        self.emissive = color


class LineStrip:
    """Polyline geometry with one colour per point."""

    def __init__(self, material=None):
        self.material = material
        self._points = []

    def add_point(self, position, color):
        self._points.append((tuple(position), Color(*color)))

    def clear_points(self):
        self._points.clear()

    @property
    def points(self):
        return list(self._points)

    def __len__(self):
        return len(self._points)


class Visual:
    def __init__(self, scene, visual_id):
        self.scene = scene
        self.id = visual_id
        self.parent = None
        self.children = []
        self.geometries = []
        self.material = None
        self.local_position = ZERO_VECTOR
        self.local_rotation = IDENTITY_QUATERNION
        self.local_scale = (1.0, 1.0, 1.0)
        self.visible = True
        self.destroyed = False

    @property
    def local_pose(self):
        return Pose(self.local_position, self.local_rotation)

    def set_local_pose(self, pose):
        self.set_local_position(pose.position)
        self.set_local_rotation(pose.orientation)

    def set_local_position(self, position):
        self.local_position = tuple(float(v) for v in position)

    def set_local_rotation(self, rotation):
        self.local_rotation = tuple(float(v) for v in rotation)

    def set_local_scale(self, x, y, z):
        self.local_scale = (float(x), float(y), float(z))

    def set_visible(self, visible):
        self.visible = bool(visible)

    def set_material(self, material):
        self.material = material

    def add_child(self, child):
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)

    def remove_child(self, child):
        self.children.remove(child)
        child.parent = None

    def add_geometry(self, geometry):
        self.geometries.append(geometry)

    def remove_geometries(self):
        self.geometries.clear()

    def geometry_by_index(self, index):
        return self.geometries[index]

    def world_pose(self):
        pose = self.local_pose
        node = self.parent
        while node is not None:
            pose = node.local_pose.compose(pose)
            node = node.parent
        return pose

    def is_shown(self):
        """True when this visual and all of its ancestors are visible."""
        node = self
        while node is not None:
            if not node.visible:
                return False
            node = node.parent
        return True


class ArrowVisual(Visual):
    """Arrow made of a shaft and a head, pointing along local +Z."""

    def __init__(self, scene, visual_id):
        super().__init__(scene, visual_id)
        self.shaft = scene.create_visual()
        self.head = scene.create_visual()
        self.add_child(self.shaft)
        self.add_child(self.head)
        self.set_dimensions(0.23, 0.01, 0.07, 0.03)

    def set_dimensions(self, shaft_length, shaft_radius, head_length, head_radius):
        self.shaft.set_local_scale(shaft_radius * 2.0, shaft_radius * 2.0, shaft_length)
        self.head.set_local_scale(head_radius * 2.0, head_radius * 2.0, head_length)
        self.head.set_local_position((0.0, 0.0, shaft_length))

    @property
    def shaft_length(self):
        return self.shaft.local_scale[2]

    @property
    def shaft_radius(self):
        return self.shaft.local_scale[0] / 2.0

    @property
    def head_length(self):
        return self.head.local_scale[2]

    @property
    def head_radius(self):
        return self.head.local_scale[0] / 2.0

    @property
    def head_visible(self):
        return self.head.visible

    def show_head(self, visible):
        self.head.set_visible(visible)


class AxisVisual(Visual):
    """Frame triad: red X, green Y and blue Z arrows."""

    def __init__(self, scene, visual_id):
        super().__init__(scene, visual_id)
        self.arrows = []
        for rotation, color in zip(AXIS_ROTATIONS, AXIS_COLORS):
            arrow = scene.create_arrow_visual()
            arrow.set_local_rotation(rotation)
            material = scene.create_material()
            material.set_color(color)
            arrow.set_material(material)
            self.add_child(arrow)
            self.arrows.append(arrow)
        self.set_dimensions(0.3, 0.03)

    def set_dimensions(self, length, radius):
        for arrow in self.arrows:
            arrow.set_dimensions(
                length, radius,
                length * AXIS_HEAD_LENGTH_RATIO, radius * AXIS_HEAD_RADIUS_RATIO)

    def show_axis_head(self, visible):
        for arrow in self.arrows:
            arrow.show_head(visible)

    @property
    def axis_head_visible(self):
        return all(arrow.head_visible for arrow in self.arrows)


class Scene:
    def __init__(self, name='scene'):
        self.name = name
        self._ids = itertools.count()
        self._live = set()
        self._materials = {}
        self.root_visual = self.create_visual()

    @property
    def visual_count(self):
        return len(self._live)

    def _register(self, visual):
        self._live.add(visual.id)
        return visual

    def create_visual(self):
        return self._register(Visual(self, next(self._ids)))

    def create_arrow_visual(self):
        return self._register(ArrowVisual(self, next(self._ids)))

    def create_axis_visual(self):
        return self._register(AxisVisual(self, next(self._ids)))

    def create_line_strip(self, material=None):
        return LineStrip(material)

    def create_material(self, name=None):
        if name is None:
            name = f"{self.name}::material_{len(self._materials)}"
        material = Material(name)
        self._materials[name] = material
        return material

    def material(self, name):
        if name not in self._materials:
            return self.create_material(name)
        return self._materials[name]

    def destroy_visual(self, visual, recursive=False):
        if recursive:
            for child in list(visual.children):
                self.destroy_visual(child, recursive=True)
        if visual.parent is not None:
            visual.parent.remove_child(visual)
        visual.remove_geometries()
        visual.destroyed = True
        self._live.discard(visual.id)
