from enum import IntEnum
from typing import NamedTuple

from path_display.errors import ConfigError


class DisplayMode(IntEnum):
    NONE = 0
    ARROW = 1
    AXIS = 2


class Color(NamedTuple):
    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_sequence(cls, values):
        values = [float(v) for v in values]
        if len(values) not in (3, 4):
            raise ConfigError(f"Expected 3 or 4 color components, got {len(values)}")
        if any(v < 0.0 or v > 1.0 for v in values):
            raise ConfigError(f"Color components must be within [0, 1]: {values}")
        return cls(*values)


DEFAULT_LINE_COLOR = Color(0.098, 1.0, 0.2, 1.0)
DEFAULT_INDICATOR_COLOR = Color(1.0, 0.098, 0.0, 1.0)


class StyleState:
    """Current indicator parameters plus the flags the renderer consumes.

    ``dirty`` means the pooled indicators do not reflect the geometric
    parameters yet. ``rebuild_line`` means the line container has to be
    recreated because its colour changed.
    """

    def __init__(self):
        self.mode = DisplayMode.NONE

        self.shaft_length = 0.23
        self.shaft_radius = 0.01
        self.head_length = 0.07
        self.head_radius = 0.03

        self.axis_length = 0.3
        self.axis_radius = 0.03
        self.axis_head_visible = False

        self.line_color = DEFAULT_LINE_COLOR
        self.color = DEFAULT_INDICATOR_COLOR
        self.offset = (0.0, 0.0, 0.0)

        self.dirty = False
        # The line container does not exist until the first render pass.
        self.rebuild_line = True

    def set_shape(self, shape):
        try:
            self.mode = DisplayMode(int(shape))
        except ValueError:
            raise ConfigError(f"Unknown shape {shape!r}, expected 0 (none), 1 (arrow) or 2 (axis)") from None
        self.dirty = True

    def set_axis_head_visibility(self, visible):
        self.axis_head_visible = bool(visible)
        self.dirty = True

    def set_axis_dimensions(self, length, radius):
        length = _non_negative('axis length', length)
        radius = _non_negative('axis radius', radius)
        self.axis_length, self.axis_radius = length, radius
        self.dirty = True

    def set_arrow_dimensions(self, shaft_length, shaft_radius, head_length, head_radius):
        dims = (
            _non_negative('shaft length', shaft_length),
            _non_negative('shaft radius', shaft_radius),
            _non_negative('head length', head_length),
            _non_negative('head radius', head_radius),
        )
        self.shaft_length, self.shaft_radius, self.head_length, self.head_radius = dims
        self.dirty = True

    def set_color(self, color):
        self.color = Color.from_sequence(color)

    def set_line_color(self, color):
        self.line_color = Color.from_sequence(color)
        self.dirty = True
        self.rebuild_line = True

    def set_offset(self, x, y, z):
        self.offset = (float(x), float(y), float(z))


def _non_negative(name, value):
    value = float(value)
    if value < 0.0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value
