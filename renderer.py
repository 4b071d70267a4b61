from __future__ import annotations

from typing import List, Tuple

import numpy as np
from PIL import Image

from camera import OrbitCamera
from ray_state import RayState
from sphere_field import SphereField
from utils.vector_operations import color_to_uint8

Segment = Tuple[np.ndarray, np.ndarray]

BACKGROUND_COLOR = np.array([0.0, 0.0, 0.0])
GRID_COLOR = np.array([1.0, 1.0, 1.0])
RAY_COLOR = np.array([1.0, 1.0, 0.0])
SPHERE_COLOR = np.array([0.0, 0.0, 1.0])


def save_image(image_array: np.ndarray, output_path: str) -> None:
    image = Image.fromarray(color_to_uint8(image_array))
    image.save(output_path)


def _face_lines(corner: np.ndarray, grid_size: int, cell_size: float) -> List[Segment]:
    # lines of one cube face lying in the plane z = corner[2]
    side = grid_size * cell_size
    segments: List[Segment] = []
    for i in range(grid_size + 1):
        offset = i * cell_size
        segments.append((corner + [0.0, offset, 0.0], corner + [side, offset, 0.0]))
    for i in range(grid_size + 1):
        offset = i * cell_size
        segments.append((corner + [offset, 0.0, 0.0], corner + [offset, side, 0.0]))
    return segments


def cube_grid_segments(grid_size: int, cell_size: float) -> List[Segment]:
    """Wireframe of the bounded volume: front and back faces plus the lines joining them."""
    half_size = (grid_size * cell_size) / 2.0
    front = np.array([-half_size, -half_size, -half_size])
    back = np.array([-half_size, -half_size, half_size])

    segments = _face_lines(front, grid_size, cell_size) + _face_lines(back, grid_size, cell_size)
    for i in range(grid_size + 1):
        for j in range(grid_size + 1):
            x = -half_size + i * cell_size
            y = -half_size + j * cell_size
            segments.append((np.array([x, y, -half_size]), np.array([x, y, half_size])))
    return segments


def _plot_pixels(image: np.ndarray, pixels: np.ndarray, color: np.ndarray) -> None:
    height, width = image.shape[:2]
    rows = np.rint(pixels[:, 0]).astype(int)
    cols = np.rint(pixels[:, 1]).astype(int)
    inside = (rows >= 0) & (rows < height) & (cols >= 0) & (cols < width)
    image[rows[inside], cols[inside], :] = color


def draw_segment(
    image: np.ndarray,
    camera: OrbitCamera,
    start: np.ndarray,
    end: np.ndarray,
    color: np.ndarray,
) -> None:
    height, width = image.shape[:2]
    endpoints, visible = camera.project(np.array([start, end], dtype=float), width, height)
    if not np.all(visible):
        return
    pixel_span = float(np.max(np.abs(endpoints[1] - endpoints[0])))
    sample_count = max(int(np.ceil(pixel_span)) + 1, 2)
    # samples are spaced along the world-space segment
    t = np.linspace(0.0, 1.0, sample_count)[:, None]
    samples = np.asarray(start, dtype=float) + t * (np.asarray(end, dtype=float) - np.asarray(start, dtype=float))
    pixels, _ = camera.project(samples, width, height)
    _plot_pixels(image, pixels, color)


def draw_sphere_field(image: np.ndarray, camera: OrbitCamera, field: SphereField, segments: int = 16, rings: int = 16) -> None:
    height, width = image.shape[:2]
    for sphere in field:
        pixels, visible = camera.project(sphere.tessellate(segments, rings), width, height)
        _plot_pixels(image, pixels[visible], SPHERE_COLOR)


def render_frame(
    camera: OrbitCamera,
    ray: RayState,
    field: SphereField,
    grid_size: int,
    cell_size: float,
    width: int,
    height: int,
) -> np.ndarray:
    """Draws the grid, then the ray from the origin to its endpoint, then the spheres."""
    image = np.empty((height, width, 3), dtype=float)
    image[:, :, :] = BACKGROUND_COLOR

    for start, end in cube_grid_segments(grid_size, cell_size):
        draw_segment(image, camera, start, end, GRID_COLOR)

    origin, endpoint = ray.segment()
    draw_segment(image, camera, np.array(origin), np.array(endpoint), RAY_COLOR)

    draw_sphere_field(image, camera, field)
    return image
