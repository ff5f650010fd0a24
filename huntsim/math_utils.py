"""Centralized math utilities for the simulation.

Agents live on a ground plane embedded in 3D space: Y is up, headings are
yaw angles about the Y axis, and a yaw of 0 degrees looks down +Z.
"""

from __future__ import annotations

import math


class Vector3:
    """A 3D vector class for mathematical operations."""

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)
        self.z: float = float(z)

    @classmethod
    def from_yaw(cls, degrees: float) -> "Vector3":
        """Unit ground-plane vector for a yaw angle (0 degrees = +Z)."""
        radians = math.radians(degrees)
        return cls(math.sin(radians), 0.0, math.cos(radians))

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: float) -> "Vector3":
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> "Vector3":
        length = self.length()
        if length == 0:
            return Vector3(0, 0, 0)
        return Vector3(self.x / length, self.y / length, self.z / length)

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def flattened(self) -> "Vector3":
        """Return a copy with the vertical component zeroed."""
        return Vector3(self.x, 0.0, self.z)

    def yaw(self) -> float:
        """Yaw angle of the horizontal part of this vector, in degrees."""
        return math.degrees(math.atan2(self.x, self.z))

    def rotated_yaw(self, degrees: float) -> "Vector3":
        """Rotate about the vertical axis; positive angles turn +Z toward +X."""
        radians = math.radians(degrees)
        cos_a = math.cos(radians)
        sin_a = math.sin(radians)
        return Vector3(
            self.x * cos_a + self.z * sin_a,
            self.y,
            -self.x * sin_a + self.z * cos_a,
        )

    def copy(self) -> "Vector3":
        """Return a copy of this vector."""
        return Vector3(self.x, self.y, self.z)

    def __eq__(self, other: object) -> bool:
        """Check if two vectors are equal."""
        if other.__class__ is not Vector3:
            return False
        return (
            abs(self.x - other.x) < 1e-9
            and abs(self.y - other.y) < 1e-9
            and abs(self.z - other.z) < 1e-9
        )

    def __ne__(self, other: object) -> bool:
        """Check if two vectors are not equal."""
        return not self.__eq__(other)

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"


def wrap_degrees(angle: float) -> float:
    """Wrap an angle into the half-open range (-180, 180]."""
    wrapped = math.fmod(angle, 360.0)
    if wrapped <= -180.0:
        wrapped += 360.0
    elif wrapped > 180.0:
        wrapped -= 360.0
    return wrapped


def slerp_heading(current: Vector3, target: Vector3, t: float) -> Vector3:
    """Spherically interpolate a ground-plane heading toward a target heading.

    Both headings are pure yaw rotations, so slerp reduces to taking the
    shortest angular path between the two yaw angles. A zero-length target
    leaves the heading unchanged.
    """
    flat_target = target.flattened()
    if flat_target.length() == 0:
        return current.flattened().normalize()
    start = current.yaw()
    delta = wrap_degrees(flat_target.yaw() - start)
    return Vector3.from_yaw(start + delta * t)


__all__ = ["Vector3", "slerp_heading", "wrap_degrees"]
