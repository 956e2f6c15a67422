# tests/test_vectors.py

import math

import pytest

from astrocore.core.errors import BadVectorError, InvalidParameterError
from astrocore.core.time import Time
from astrocore.core.vectors import (
    RotationMatrix,
    Spherical,
    Vector,
    angle_between,
    combine,
    sphere_from_vector,
    vector_from_sphere,
)

T0 = Time(0.0)


def V(x, y, z):
    return Vector(x, y, z, T0)


def test_vector_arithmetic():
    a = V(1.0, 2.0, 3.0)
    b = V(-1.0, 0.5, 2.0)
    assert (a + b).xyz() == (0.0, 2.5, 5.0)
    assert (a - b).xyz() == (2.0, 1.5, 1.0)
    assert (-a).xyz() == (-1.0, -2.0, -3.0)
    assert (2 * a).xyz() == (a * 2).xyz() == (2.0, 4.0, 6.0)
    assert (a / 2).xyz() == (0.5, 1.0, 1.5)
    assert a.dot(b) == -1.0 + 1.0 + 6.0
    assert V(1, 0, 0).cross(V(0, 1, 0)).xyz() == (0, 0, 1)
    assert V(3.0, 4.0, 0.0).length() == 5.0
    assert (a + b).t is T0


@pytest.mark.parametrize(
    "a, b, angle",
    [
        ((1, 0, 0), (1, 0, 0), 0.0),
        ((1, 0, 0), (0, 1, 0), 90.0),
        ((1, 0, 0), (-1, 0, 0), 180.0),
        ((1, 0, 0), (1, 1, 0), 45.0),
        ((2, 2, 0), (0, 0, 5), 90.0),
    ],
)
def test_angle_between(a, b, angle):
    assert angle_between(V(*a), V(*b)) == pytest.approx(angle, abs=1e-12)


def test_angle_between_clamps_rounding():
    # parallel and antiparallel vectors stay inside acos domain
    v = V(0.1, 0.2, 0.3)
    assert angle_between(v, v) == pytest.approx(0.0, abs=1e-6)
    assert angle_between(v, -v) == pytest.approx(180.0, abs=1e-6)


def test_angle_between_rejects_tiny_vectors():
    with pytest.raises(BadVectorError):
        angle_between(V(0, 0, 0), V(1, 0, 0))
    with pytest.raises(BadVectorError):
        angle_between(V(1, 0, 0), V(1e-9, 0, 0))
    # each length passes but the product is too small
    with pytest.raises(BadVectorError):
        angle_between(V(1e-5, 0, 0), V(0, 1e-5, 0))


def test_sphere_conversions():
    s = Spherical(-30.0, 210.0, 2.5)
    v = vector_from_sphere(s, T0)
    back = sphere_from_vector(v)
    assert back.lat == pytest.approx(-30.0, abs=1e-12)
    assert back.lon == pytest.approx(210.0, abs=1e-12)
    assert back.dist == pytest.approx(2.5, abs=1e-12)
    assert v.t is T0


def test_sphere_from_vector_poles_and_zero():
    assert sphere_from_vector(V(0, 0, 2)) == Spherical(90.0, 0.0, 2.0)
    assert sphere_from_vector(V(0, 0, -2)) == Spherical(-90.0, 0.0, 2.0)
    with pytest.raises(BadVectorError):
        sphere_from_vector(V(0, 0, 0))


def test_pivot_about_z():
    r = RotationMatrix.identity().pivot(2, 30.0)
    c = math.cos(math.radians(30.0))
    s = math.sin(math.radians(30.0))
    assert r.rot[0] == pytest.approx((c, s, 0.0), abs=1e-15)
    assert r.rot[1] == pytest.approx((-s, c, 0.0), abs=1e-15)
    assert r.rot[2] == (0.0, 0.0, 1.0)
    x, y, z = r.rotate_xyz((1.0, 0.0, 0.0))
    assert (x, y, z) == pytest.approx((c, s, 0.0), abs=1e-15)


def test_pivot_chain():
    # +30 about z, then -90 about x
    r = RotationMatrix.identity().pivot(2, +30.0).pivot(0, -90.0)
    v = r.rotate(V(1.0, 2.0, 3.0))
    c = math.cos(math.radians(30.0))
    s = math.sin(math.radians(30.0))
    x1 = c * 1.0 - s * 2.0
    y1 = s * 1.0 + c * 2.0
    z1 = 3.0
    # -90 about x sends (y, z) to (z, -y)
    assert v.xyz() == pytest.approx((x1, z1, -y1), abs=1e-15)


def test_pivot_bad_axis():
    with pytest.raises(InvalidParameterError):
        RotationMatrix.identity().pivot(3, 10.0)


def test_inverse_undoes_rotation():
    r = RotationMatrix.identity().pivot(0, 12.0).pivot(1, -47.0).pivot(2, 101.0)
    v = V(0.3, -1.2, 4.5)
    back = r.inverse().rotate(r.rotate(v))
    assert back.xyz() == pytest.approx(v.xyz(), abs=1e-14)


def test_combine_applies_first_then_second():
    a = RotationMatrix.identity().pivot(2, 40.0)
    b = RotationMatrix.identity().pivot(0, 25.0)
    v = V(1.0, -2.0, 0.5)
    one = combine(a, b).rotate(v)
    two = b.rotate(a.rotate(v))
    assert one.xyz() == pytest.approx(two.xyz(), abs=1e-15)


def test_combine_with_inverse_is_identity():
    a = RotationMatrix.identity().pivot(1, 33.0).pivot(2, -12.0)
    m = combine(a, a.inverse())
    for i in range(3):
        for j in range(3):
            assert m.rot[i][j] == pytest.approx(1.0 if i == j else 0.0, abs=1e-15)
