from __future__ import annotations

import numpy as np

EPSILON: float = 1e-5 # small epsilon value for floating point comparisons (near-zero vectors, degenerate cells)


def squared_distance(a: np.ndarray, b: np.ndarray) -> float:
    difference = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
    return float(np.dot(difference, difference))


def normalize_vector(v: np.ndarray) -> np.ndarray:
    vector_array = np.asarray(v, dtype=float)
    magnitude = np.linalg.norm(vector_array)
    if magnitude < EPSILON:
        raise ValueError("Cannot normalize near-zero vector")
    return vector_array / magnitude


def vector_cross(a: np.ndarray, b: np.ndarray) -> np.ndarray: #cross product of two vectors (3D)
    vector_a = np.asarray(a, dtype=float)
    vector_b = np.asarray(b, dtype=float)
    return np.cross(vector_a, vector_b)


def reduce_degrees(angle_deg: float) -> float:
    """Wraps an angle in degrees into [0, 360) before it goes through sin/cos."""
    return float(np.mod(angle_deg, 360.0))


def spherical_to_cartesian(distance: float, zenith_deg: float, azimuth_deg: float) -> np.ndarray:
    """Maps (distance, zenith, azimuth) to a point, with the zenith measured from the +y axis
    and the azimuth measured in the xz plane starting at +x."""
    zenith = np.radians(reduce_degrees(zenith_deg))
    azimuth = np.radians(reduce_degrees(azimuth_deg))
    sin_zenith = np.sin(zenith)
    return np.array(
        [
            distance * sin_zenith * np.cos(azimuth),
            distance * np.cos(zenith),
            distance * sin_zenith * np.sin(azimuth),
        ],
        dtype=float,
    )


def clamp_color01(color_rgb: np.ndarray) -> np.ndarray:
    """Clamps an RGB color array to the range [0.0, 1.0]."""
    color_array = np.asarray(color_rgb, dtype=float)
    return np.clip(color_array, 0.0, 1.0)


def color_to_uint8(color_rgb: np.ndarray) -> np.ndarray:
    """Converts a floating-point RGB color array (clamped to [0, 1]) to 8-bit integer [0, 255]."""
    clamped_color = clamp_color01(color_rgb)
    return (clamped_color * 255.0 + 0.5).astype(np.uint8) # 0.5 before conversion ensures correct rounding
