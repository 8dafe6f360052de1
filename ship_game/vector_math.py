"""Lightweight vector helpers for 2D craft dynamics."""
from __future__ import annotations

import math
from typing import Iterable

import numpy as np

Vector = np.ndarray


def to_vector(value: Iterable[float] | Vector) -> Vector:
    """Convert any iterable to a float64 numpy vector."""
    return np.asarray(list(value), dtype=np.float64)


def zero_vector() -> Vector:
    return np.zeros(2, dtype=np.float64)


def magnitude(vec: Vector) -> float:
    return float(np.linalg.norm(vec))


def heading(angle: float) -> Vector:
    """Unit vector pointing along angle (radians, counter-clockwise from +x)."""
    return np.array([math.cos(angle), math.sin(angle)], dtype=np.float64)


def add_at_angle(vec: Vector, scalar: float, angle: float) -> Vector:
    """Return vec plus an impulse of length scalar directed along angle.

    A negative scalar pushes against the facing direction rather than sideways.
    """
    return vec + heading(angle) * scalar


def frozen(vec: Vector) -> Vector:
    """Read-only copy of vec."""
    copy = np.array(vec, dtype=np.float64)
    copy.setflags(write=False)
    return copy
