"""Flatten the visible part of a scene graph into drawable primitives."""
from typing import List, NamedTuple, Tuple

import numpy as np

from path_display.geometry import Pose, rotate_vector
from path_display.scene import ArrowVisual
from path_display.style import Color

WHITE = Color(1.0, 1.0, 1.0, 1.0)


class LinePrimitive(NamedTuple):
    pose: Pose
    points: List[Tuple[float, float, float]]
    colors: List[Color]


class ArrowPrimitive(NamedTuple):
    start: Tuple[float, float, float]
    end: Tuple[float, float, float]
    shaft_diameter: float
    head_diameter: float
    head_length: float
    color: Color


class CylinderPrimitive(NamedTuple):
    pose: Pose
    diameter: float
    length: float
    color: Color


def flatten(visual):
    """Return the primitives for every shown visual under ``visual``."""
    primitives = []
    _collect(visual, primitives)
    return primitives


def _collect(visual, out):
    if not visual.is_shown():
        return
    if isinstance(visual, ArrowVisual):
        out.append(_arrow(visual))
        return

    pose = None
    for geometry in visual.geometries:
        points = geometry.points
        # A strip needs at least two points to be drawn.
        if len(points) < 2:
            continue
        pose = pose or visual.world_pose()
        out.append(LinePrimitive(
            pose=pose,
            points=[p for p, _ in points],
            colors=[c for _, c in points],
        ))

    for child in visual.children:
        _collect(child, out)


def _arrow(arrow):
    pose = arrow.world_pose()
    color = arrow.material.diffuse if arrow.material is not None else WHITE
    direction = rotate_vector(pose.orientation, (0.0, 0.0, 1.0))
    start = np.asarray(pose.position, dtype=np.float64)

    if not arrow.head_visible:
        center = start + direction * (arrow.shaft_length / 2.0)
        return CylinderPrimitive(
            pose=Pose(tuple(float(v) for v in center), pose.orientation),
            diameter=arrow.shaft_radius * 2.0,
            length=arrow.shaft_length,
            color=color,
        )

    end = start + direction * (arrow.shaft_length + arrow.head_length)
    return ArrowPrimitive(
        start=tuple(float(v) for v in start),
        end=tuple(float(v) for v in end),
        shaft_diameter=arrow.shaft_radius * 2.0,
        head_diameter=arrow.head_radius * 2.0,
        head_length=arrow.head_length,
        color=color,
    )
