from typing import NamedTuple

from path_display.geometry import IDENTITY_POSE
from path_display.scene import ArrowVisual, AxisVisual


class IndicatorSlot(NamedTuple):
    arrow: ArrowVisual
    axis: AxisVisual

    def set_visible(self, visible):
        self.arrow.set_visible(visible)
        self.axis.set_visible(visible)


class IndicatorPool:
    """Arrow and axis visuals recycled across render passes.

    Slots are created lazily and live until the parent visual is destroyed.
    When a path gets shorter the tail slots are hidden instead of removed,
    since creating visuals is much more expensive than toggling them.
    """

    def __init__(self, scene, parent, material):
        self._scene = scene
        self._parent = parent
        self._material = material
        self._slots = []

    def __len__(self):
        return len(self._slots)

    def __iter__(self):
        return iter(self._slots)

    def ensure_size(self, n, style=None):
        """Grow to at least ``n`` slots; new slots get ``style`` if given."""
        while len(self._slots) < n:
            axis = self._scene.create_axis_visual()
            axis.set_visible(False)
            self._parent.add_child(axis)

            arrow = self._scene.create_arrow_visual()
            arrow.set_material(self._material)
            arrow.set_visible(False)
            self._parent.add_child(arrow)

            slot = IndicatorSlot(arrow=arrow, axis=axis)
            if style is not None:
                self._style_slot(slot, style)
            self._slots.append(slot)

    def hide_from(self, n):
        for slot in self._slots[n:]:
            slot.set_visible(False)

    def slot(self, i):
        if not 0 <= i < len(self._slots):
            raise IndexError(f"Indicator slot {i} requested but the pool holds {len(self._slots)}")
        return self._slots[i]

    def apply_style(self, style):
        for slot in self._slots:
            self._style_slot(slot, style)

    def reset_poses(self):
        for slot in self._slots:
            slot.arrow.set_local_pose(IDENTITY_POSE)
            slot.axis.set_local_pose(IDENTITY_POSE)

    @staticmethod
    def _style_slot(slot, style):
        slot.arrow.set_dimensions(
            style.shaft_length, style.shaft_radius, style.head_length, style.head_radius)
        slot.axis.set_dimensions(style.axis_length, style.axis_radius)
