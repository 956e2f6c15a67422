from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .errors import BadVectorError, InvalidParameterError
from .time import Time

RAD2DEG = 57.295779513082321


@dataclass(frozen=True)
class Vector:
    """Cartesian vector (AU) valid at time t."""
    x: float
    y: float
    z: float
    t: Time

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z, self.t)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z, self.t)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y, -self.z, self.t)

    def __mul__(self, k: float) -> "Vector":
        return Vector(k * self.x, k * self.y, k * self.z, self.t)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> "Vector":
        return Vector(self.x / k, self.y / k, self.z / k, self.t)

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector") -> "Vector":
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
            self.t,
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def xyz(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Spherical:
    """Latitude/longitude in degrees, distance in AU."""
    lat: float
    lon: float
    dist: float


def angle_between(a: Vector, b: Vector) -> float:
    """Angle in degrees between two vectors; BadVectorError for near-zero input."""
    la = a.length()
    lb = b.length()
    r = la * lb
    if la < 1.0e-8 or lb < 1.0e-8 or r < 1.0e-8:
        raise BadVectorError("cannot measure an angle against a near-zero vector")

    dot = (a.x * b.x + a.y * b.y + a.z * b.z) / r
    if dot <= -1.0:
        return 180.0
    if dot >= +1.0:
        return 0.0
    return RAD2DEG * math.acos(dot)


def vector_from_sphere(sphere: Spherical, time: Time) -> Vector:
    radlat = math.radians(sphere.lat)
    radlon = math.radians(sphere.lon)
    rcoslat = sphere.dist * math.cos(radlat)
    return Vector(
        rcoslat * math.cos(radlon),
        rcoslat * math.sin(radlon),
        sphere.dist * math.sin(radlat),
        time,
    )


def sphere_from_vector(vector: Vector) -> Spherical:
    xyproj = vector.x * vector.x + vector.y * vector.y
    dist = math.sqrt(xyproj + vector.z * vector.z)
    if xyproj == 0.0:
        if vector.z == 0.0:
            raise BadVectorError("zero-length vector has no direction")
        lon = 0.0
        lat = -90.0 if vector.z < 0.0 else +90.0
    else:
        lon = math.degrees(math.atan2(vector.y, vector.x))
        if lon < 0.0:
            lon += 360.0
        lat = math.degrees(math.atan2(vector.z, math.sqrt(xyproj)))
    return Spherical(lat, lon, dist)


# ---------------------------------------------------------------------------
# Rotation matrices
# ---------------------------------------------------------------------------

Rows = Tuple[Tuple[float, float, float], Tuple[float, float, float], Tuple[float, float, float]]


@dataclass(frozen=True)
class RotationMatrix:
    """
    3x3 orthonormal frame transform.

    rot[i][j] is stored so that rotate() computes x'_j = sum_i rot[i][j] * x_i.
    """
    rot: Rows

    @staticmethod
    def identity() -> "RotationMatrix":
        return RotationMatrix(((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)))

    @staticmethod
    def from_rows(r: "list[list[float]]") -> "RotationMatrix":
        return RotationMatrix(tuple(tuple(float(v) for v in row) for row in r))  # type: ignore[arg-type]

    def inverse(self) -> "RotationMatrix":
        r = self.rot
        return RotationMatrix((
            (r[0][0], r[1][0], r[2][0]),
            (r[0][1], r[1][1], r[2][1]),
            (r[0][2], r[1][2], r[2][2]),
        ))

    def rotate(self, v: Vector) -> Vector:
        x, y, z = self.rotate_xyz((v.x, v.y, v.z))
        return Vector(x, y, z, v.t)

    def rotate_xyz(self, p: Tuple[float, float, float]) -> Tuple[float, float, float]:
        r = self.rot
        return (
            r[0][0] * p[0] + r[1][0] * p[1] + r[2][0] * p[2],
            r[0][1] * p[0] + r[1][1] * p[1] + r[2][1] * p[2],
            r[0][2] * p[0] + r[1][2] * p[1] + r[2][2] * p[2],
        )

    def pivot(self, axis: int, angle: float) -> "RotationMatrix":
        """
        Compose an extra rotation of `angle` degrees about `axis` (0=x, 1=y, 2=z)
        onto this matrix.
        """
        if axis not in (0, 1, 2):
            raise InvalidParameterError(f"pivot axis must be 0, 1 or 2; got {axis!r}")

        radians = math.radians(angle)
        c = math.cos(radians)
        s = math.sin(radians)

        # (i, j, k) is a cyclic permutation with k the pivot axis
        i = (axis + 1) % 3
        j = (axis + 2) % 3
        k = axis

        r = self.rot
        out = [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]
        for row in (i, j, k):
            out[row][i] = c * r[row][i] - s * r[row][j]
            out[row][j] = s * r[row][i] + c * r[row][j]
            out[row][k] = r[row][k]
        return RotationMatrix.from_rows(out)


def combine(a: RotationMatrix, b: RotationMatrix) -> RotationMatrix:
    """Rotation equivalent to applying `a` and then `b`."""
    ra, rb = a.rot, b.rot
    out = [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]
    for i in range(3):
        for j in range(3):
            out[i][j] = rb[0][j] * ra[i][0] + rb[1][j] * ra[i][1] + rb[2][j] * ra[i][2]
    return RotationMatrix.from_rows(out)
