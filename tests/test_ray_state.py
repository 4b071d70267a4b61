import numpy as np
import pytest

from ray_state import RayState
from sphere_field import SphereField
from typings.bounded_volume import BoundedVolume
from typings.step_outcome import OutcomeKind
from utils.vector_operations import spherical_to_cartesian


class ScriptedRng:
    """Stands in for numpy's Generator: hands out queued integers."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def integers(self, low, high):
        self.calls.append((low, high))
        return self.values.pop(0)


def make_ray(half_extent=0.5, speed=0.5, zenith=0.0, azimuth=0.0, rng=None):
    return RayState(
        volume=BoundedVolume(half_extent),
        speed=speed,
        zenith_deg=zenith,
        azimuth_deg=azimuth,
        rng=rng if rng is not None else np.random.default_rng(0),
    )


def test_exits_volume_on_second_step():
    rng = ScriptedRng([120, 200])
    ray = make_ray(half_extent=0.5, speed=0.5, zenith=0.0, azimuth=0.0, rng=rng)
    field = SphereField([])

    first = ray.advance(field)
    assert first.kind is OutcomeKind.ADVANCED
    assert ray.endpoint() == pytest.approx((0.0, 0.5, 0.0))
    assert first.position == pytest.approx((0.0, 0.5, 0.0))

    second = ray.advance(field)
    assert second.kind is OutcomeKind.EXITED_VOLUME
    assert second.sphere_index is None
    assert second.position == pytest.approx((0.0, 1.0, 0.0))
    assert ray.traveled == 0.0
    assert ray.endpoint() == (0.0, 0.0, 0.0)
    assert (ray.zenith_deg, ray.azimuth_deg) == (120.0, 200.0)
    assert rng.calls == [(0, 180), (0, 360)]


def test_hits_sphere_at_origin_on_first_step():
    field = SphereField.from_placements([(0.0, 0.0, 0.0, 0.1)])
    ray = make_ray(speed=0.05, zenith=90.0, azimuth=0.0)

    outcome = ray.advance(field)

    assert outcome.kind is OutcomeKind.HIT_SPHERE
    assert outcome.sphere_index == 0
    assert outcome.position == pytest.approx((0.05, 0.0, 0.0), abs=1e-12)
    assert ray.traveled == 0.0
    assert ray.endpoint() == (0.0, 0.0, 0.0)


def test_lowest_index_wins_when_spheres_overlap():
    field = SphereField.from_placements(
        [
            (0.4, 0.4, 0.4, 0.01),
            (0.05, 0.0, 0.0, 0.2),
            (0.05, 0.0, 0.0, 0.1),
        ]
    )
    ray = make_ray(speed=0.05, zenith=90.0, azimuth=0.0)

    outcome = ray.advance(field)

    assert outcome.kind is OutcomeKind.HIT_SPHERE
    assert outcome.sphere_index == 1


def test_sphere_hit_takes_precedence_over_exit():
    # endpoint (0, 0.5, 0) is inside the sphere and outside the 0.1 cube at the same time
    field = SphereField.from_placements([(0.0, 0.5, 0.0, 0.2)])
    ray = make_ray(half_extent=0.1, speed=0.5, zenith=0.0, azimuth=0.0)

    outcome = ray.advance(field)

    assert outcome.kind is OutcomeKind.HIT_SPHERE
    assert outcome.sphere_index == 0


def test_sphere_boundary_counts_as_hit():
    field = SphereField.from_placements([(0.0, 0.75, 0.0, 0.25)])
    ray = make_ray(half_extent=5.0, speed=0.5, zenith=0.0, azimuth=0.0)

    assert ray.advance(field).kind is OutcomeKind.HIT_SPHERE


def test_traveled_grows_by_speed_until_reset():
    ray = make_ray(half_extent=0.45, speed=0.1, zenith=90.0, azimuth=0.0)
    field = SphereField([])

    for step in range(1, 5):
        outcome = ray.advance(field)
        assert outcome.kind is OutcomeKind.ADVANCED
        assert ray.traveled == pytest.approx(0.1 * step)

    outcome = ray.advance(field)
    assert outcome.kind is OutcomeKind.EXITED_VOLUME
    assert ray.traveled == 0.0


def test_traveled_restarts_from_zero_after_reset():
    ray = make_ray(half_extent=0.5, speed=0.5, zenith=0.0, azimuth=0.0, rng=ScriptedRng([0, 0]))
    field = SphereField([])
    ray.advance(field)
    ray.advance(field)

    assert ray.advance(field).kind is OutcomeKind.ADVANCED
    assert ray.traveled == pytest.approx(0.5)


def test_position_tracks_spherical_projection_every_step():
    ray = RayState(volume=BoundedVolume.from_grid(5, 0.2), speed=0.01, rng=np.random.default_rng(42))
    field = SphereField.default()

    resets = 0
    previous = ray.traveled
    for _ in range(3000):
        outcome = ray.advance(field)
        expected = spherical_to_cartesian(ray.traveled, ray.zenith_deg, ray.azimuth_deg)
        assert np.allclose(ray.endpoint(), expected)
        if outcome.is_reset:
            resets += 1
            assert ray.traveled == 0.0
        else:
            assert ray.traveled == pytest.approx(previous + ray.speed)
        previous = ray.traveled
        assert ray.speed == 0.01

    assert resets > 0


def test_reseeded_angles_stay_in_integer_ranges():
    ray = make_ray(rng=np.random.default_rng(2024))
    zeniths = []
    azimuths = []
    for _ in range(10_000):
        ray.reseed()
        zeniths.append(ray.zenith_deg)
        azimuths.append(ray.azimuth_deg)

    zeniths = np.array(zeniths)
    azimuths = np.array(azimuths)
    assert zeniths.min() >= 0.0 and zeniths.max() < 180.0
    assert azimuths.min() >= 0.0 and azimuths.max() < 360.0
    assert np.all(zeniths == np.floor(zeniths))
    assert np.all(azimuths == np.floor(azimuths))


def test_endpoint_is_stable_between_steps():
    ray = make_ray(half_extent=5.0, speed=0.3, zenith=30.0, azimuth=60.0)
    assert ray.endpoint() == (0.0, 0.0, 0.0)

    ray.advance(SphereField([]))
    assert ray.endpoint() == ray.endpoint()
    assert ray.segment() == ((0.0, 0.0, 0.0), ray.endpoint())


def test_zero_half_extent_exits_on_first_step():
    ray = make_ray(half_extent=0.0, speed=0.001, zenith=10.0, azimuth=10.0)
    assert ray.advance(SphereField([])).kind is OutcomeKind.EXITED_VOLUME


def test_empty_field_never_hits():
    ray = RayState(speed=0.05, rng=np.random.default_rng(3))
    field = SphereField([])
    kinds = {ray.advance(field).kind for _ in range(500)}
    assert OutcomeKind.HIT_SPHERE not in kinds
    assert OutcomeKind.EXITED_VOLUME in kinds


def test_defaults_match_lattice_scene():
    ray = RayState()
    assert ray.volume.half_extent == pytest.approx(0.5)
    assert ray.speed == 0.005
    assert (ray.zenith_deg, ray.azimuth_deg) == (45.0, 45.0)
    assert ray.traveled == 0.0


@pytest.mark.parametrize("speed", [0.0, -0.1])
def test_rejects_non_positive_speed(speed):
    with pytest.raises(ValueError):
        RayState(speed=speed)
