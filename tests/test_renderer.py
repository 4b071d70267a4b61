import numpy as np
import pytest
from PIL import Image

from camera import OrbitCamera
from ray_state import RayState
from renderer import RAY_COLOR, SPHERE_COLOR, cube_grid_segments, render_frame, save_image
from sphere_field import SphereField
from typings.bounded_volume import BoundedVolume


def test_grid_segments_cover_cube():
    segments = cube_grid_segments(5, 0.2)

    # two faces of 2 * 6 lines, plus 6 * 6 lines joining them
    assert len(segments) == 2 * 12 + 36
    corners = np.array([point for segment in segments for point in segment])
    assert np.allclose(corners.min(axis=0), [-0.5, -0.5, -0.5])
    assert np.allclose(corners.max(axis=0), [0.5, 0.5, 0.5])


def test_camera_projects_origin_to_image_center():
    camera = OrbitCamera()
    pixels, visible = camera.project(np.zeros(3), 200, 100)

    assert visible.tolist() == [True]
    assert pixels[0] == pytest.approx([49.5, 99.5])


def test_camera_hides_points_behind_it():
    camera = OrbitCamera()
    _, visible = camera.project(camera.position * 2.0, 100, 100)
    assert visible.tolist() == [False]


def test_camera_rotation_clamps_vertical_angle():
    camera = OrbitCamera(phi_deg=5.0)
    camera.rotate(delta_phi_deg=-10.0)
    assert camera.phi_deg == 1.0
    camera.rotate(delta_theta_deg=2.0, delta_phi_deg=500.0)
    assert camera.phi_deg == 179.0
    assert camera.theta_deg == 47.0
    assert np.linalg.norm(camera.position) == pytest.approx(3.0)


def test_render_frame_draws_ray_and_spheres(tmp_path):
    field = SphereField.from_placements([(0.3, 0.0, 0.0, 0.05)])
    ray = RayState(volume=BoundedVolume(0.5), speed=0.4, zenith_deg=0.0, azimuth_deg=0.0)
    ray.advance(field)

    image = render_frame(OrbitCamera(), ray, field, 5, 0.2, 120, 120)

    assert image.shape == (120, 120, 3)
    assert np.any(np.all(image == RAY_COLOR, axis=2))
    assert np.any(np.all(image == SPHERE_COLOR, axis=2))

    output = tmp_path / "frame.png"
    save_image(image, str(output))
    with Image.open(output) as saved:
        assert saved.size == (120, 120)
        assert saved.mode == "RGB"
