import math
from dataclasses import astuple

import pytest

from eagleye.geometry import (
    Imu,
    Quaternion,
    Transform,
    TwistRelay,
    TwistType,
    Vector3,
    convert_imu,
    quaternion_from_rpy,
)


def approx_vec(vector):
    return pytest.approx(astuple(vector), abs=1e-12)


def test_identity_quaternion_keeps_vector():
    v = Vector3(1.5, -2.0, 3.25)
    assert astuple(Quaternion().rotate(v)) == approx_vec(v)


def test_yaw_quarter_turn_maps_x_to_y():
    q = quaternion_from_rpy(0.0, 0.0, math.pi / 2)
    assert astuple(q.rotate(Vector3(1.0, 0.0, 0.0))) == approx_vec(Vector3(0.0, 1.0, 0.0))


def test_zero_rpy_is_identity():
    assert astuple(quaternion_from_rpy(0.0, 0.0, 0.0)) == pytest.approx(
        astuple(Quaternion())
    )


@pytest.mark.parametrize("angles", [(0.1, 0.2, 0.3), (-1.0, 0.5, 2.5), (3.0, -0.7, 0.0)])
def test_rpy_quaternion_is_unit_and_preserves_length(angles):
    q = quaternion_from_rpy(*angles)
    assert math.sqrt(q.x**2 + q.y**2 + q.z**2 + q.w**2) == pytest.approx(1.0)
    v = Vector3(0.3, -4.0, 2.0)
    assert q.rotate(v).norm() == pytest.approx(v.norm())


def test_quaternion_product_composes_rotations():
    q1 = quaternion_from_rpy(0.3, -0.2, 1.1)
    q2 = quaternion_from_rpy(-0.5, 0.4, 0.2)
    v = Vector3(1.0, 2.0, 3.0)
    assert astuple((q1 * q2).rotate(v)) == approx_vec(q1.rotate(q2.rotate(v)))


def test_transform_apply_adds_translation():
    t = Transform(Vector3(1.0, 2.0, 3.0), Quaternion())
    v = Vector3(0.5, 0.5, 0.5)
    assert astuple(t.apply(v)) == approx_vec(v + Vector3(1.0, 2.0, 3.0))


def test_transform_product_composes():
    a = Transform(Vector3(1.0, -1.0, 0.5), quaternion_from_rpy(0.1, 0.2, 0.3))
    b = Transform(Vector3(-2.0, 0.0, 4.0), quaternion_from_rpy(0.7, -0.1, -1.2))
    v = Vector3(3.0, 1.0, -2.0)
    assert astuple((a * b).apply(v)) == approx_vec(a.apply(b.apply(v)))


def test_convert_imu_uses_rotation_only():
    imu = Imu(
        stamp=12.5,
        frame_id="imu",
        orientation=quaternion_from_rpy(0.1, 0.1, 0.1),
        angular_velocity=Vector3(0.1, 0.2, 0.3),
        linear_acceleration=Vector3(0.0, 0.0, 9.8),
    )
    rotation = quaternion_from_rpy(0.0, 0.0, 0.4)
    out = convert_imu(imu, Transform(Vector3(5.0, 5.0, 5.0), rotation))
    assert out.stamp == 12.5
    assert out.frame_id == "imu"
    assert astuple(out.angular_velocity) == approx_vec(rotation.rotate(imu.angular_velocity))
    assert astuple(out.linear_acceleration) == approx_vec(
        rotation.rotate(imu.linear_acceleration)
    )
    assert out.orientation == Quaternion()


def test_convert_imu_reverse_wz_flips_only_z():
    imu = Imu(angular_velocity=Vector3(0.1, 0.2, 0.3))
    transform = Transform(rotation=quaternion_from_rpy(0.2, 0.0, 0.5))
    plain = convert_imu(imu, transform, False)
    flipped = convert_imu(imu, transform, True)
    assert flipped.angular_velocity.x == pytest.approx(plain.angular_velocity.x)
    assert flipped.angular_velocity.y == pytest.approx(plain.angular_velocity.y)
    assert flipped.angular_velocity.z == pytest.approx(-plain.angular_velocity.z)
    assert astuple(flipped.linear_acceleration) == approx_vec(plain.linear_acceleration)


@pytest.mark.parametrize("kind", [0, 1])
def test_twist_relay_accepts_known_types(kind):
    relay = TwistRelay(kind)
    assert relay.twist_type is TwistType(kind)
    linear, angular = Vector3(3.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.1)
    out = relay.relay(7.0, linear, angular)
    assert out.stamp == 7.0
    assert out.linear == linear
    assert out.angular == angular


@pytest.mark.parametrize("kind", [2, -1])
def test_twist_relay_rejects_unknown_type(kind):
    with pytest.raises(ValueError):
        TwistRelay(kind)