# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Time-dependent frame rotations.

A rotation is the pair (M, dM/dt). Positions transform with M alone;
velocities pick up the transport term:

    r' = M r
    v' = dM r + M v

Composition applies ``self`` first, then ``other``:

    (M2, dM2) o (M1, dM1) = (M2 M1, dM2 M1 + M2 dM1)

For a frame spinning with angular velocity w relative to the origin frame,
dM = -S(w) M with S the skew-symmetric cross-product matrix.
"""
from dataclasses import dataclass, field

import numpy as np


def _identity() -> np.ndarray:
    return np.eye(3)


def _zero() -> np.ndarray:
    return np.zeros((3, 3))


def skew_matrix(w) -> np.ndarray:
    """Cross-product matrix S(w) such that S(w) @ r == cross(w, r)."""
    wx, wy, wz = w
    return np.array([
        [0.0, -wz, wy],
        [wz, 0.0, -wx],
        [-wy, wx, 0.0],
    ])


@dataclass(frozen=True, eq=False)
class Rotation:
    """Rotation matrix ``m`` and its time derivative ``dm`` (1/s)."""

    m: np.ndarray = field(default_factory=_identity)
    dm: np.ndarray = field(default_factory=_zero)

    @classmethod
    def identity(cls) -> "Rotation":
        return cls()

    @classmethod
    def from_matrix(cls, m: np.ndarray) -> "Rotation":
        return cls(np.asarray(m, dtype=float), _zero())

    def with_derivative(self, dm: np.ndarray) -> "Rotation":
        return Rotation(self.m, np.asarray(dm, dtype=float))

    def with_angular_velocity(self, w) -> "Rotation":
        """Attach dM = -S(w) M for angular velocity ``w`` in rad/s."""
        return Rotation(self.m, -skew_matrix(w) @ self.m)

    def compose(self, other: "Rotation") -> "Rotation":
        """Rotation applying ``self`` followed by ``other``."""
        return Rotation(other.m @ self.m, other.dm @ self.m + other.m @ self.dm)

    def transpose(self) -> "Rotation":
        """Inverse rotation."""
        return Rotation(self.m.T.copy(), self.dm.T.copy())

    def rotate_position(self, position) -> np.ndarray:
        return self.m @ np.asarray(position, dtype=float)

    def rotate_velocity(self, position, velocity) -> np.ndarray:
        r = np.asarray(position, dtype=float)
        v = np.asarray(velocity, dtype=float)
        return self.dm @ r + self.m @ v

    def rotate_state(self, position, velocity) -> tuple[np.ndarray, np.ndarray]:
        return self.rotate_position(position), self.rotate_velocity(position, velocity)

    def isclose(self, other: "Rotation", atol: float = 1e-12) -> bool:
        return bool(
            np.allclose(self.m, other.m, rtol=0.0, atol=atol)
            and np.allclose(self.dm, other.dm, rtol=0.0, atol=atol)
        )
