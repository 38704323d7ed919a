"""
vectors.py - 3D vector kernel

Vectors are plain numpy float64 arrays of shape (3,). Addition,
subtraction and scaling use the numpy operators directly; this module
adds the handful of named operations the tracer needs.

All functions are pure: they return new arrays and never modify their
inputs.
"""

import numpy as np
from typing import Optional

Vector3 = np.ndarray


def vec3(x: float, y: float, z: float) -> Vector3:
    """Build a float64 3-vector."""
    return np.array([x, y, z], dtype=np.float64)


def as_vector(value) -> Vector3:
    """
    Convert an array-like of three numbers to a float64 vector.

    Raises
    ------
    ValueError
        If the input does not have exactly three components
    """
    vector = np.array(value, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {vector.shape}")
    return vector


def dot(a: Vector3, b: Vector3) -> float:
    """
    Scalar product of two 3-vectors.

    Parameters
    ----------
    a, b : np.ndarray
        Input vectors

    Returns
    -------
    float
        a · b
    """
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: Vector3, b: Vector3) -> Vector3:
    """
    Cross product of two 3-vectors.

    The result is perpendicular to both inputs and follows the
    right-hand rule, so cross(x, y) = z.

    Parameters
    ----------
    a, b : np.ndarray
        Input vectors

    Returns
    -------
    np.ndarray
        a x b
    """
    return np.array([
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ])


def length(vector: Vector3) -> float:
    """
    Euclidean length of a vector.

    Parameters
    ----------
    vector : np.ndarray
        Input vector

    Returns
    -------
    float
        |vector| = sqrt(vector · vector)
    """
    return float(np.sqrt(dot(vector, vector)))


def normalize(vector: Vector3) -> Vector3:
    """
    Normalize a vector to unit length.

    Parameters
    ----------
    vector : np.ndarray
        Input 3-vector

    Returns
    -------
    np.ndarray
        Unit vector in same direction

    Raises
    ------
    ValueError
        If vector has zero magnitude
    """
    magnitude = length(vector)
    if magnitude < 1e-15:
        raise ValueError("Cannot normalize zero vector")
    return vector / magnitude


def reflect(direction: Vector3, normal: Vector3) -> Vector3:
    """
    Mirror a direction about a surface normal.

    r = d - 2 (d · n) n
    """
    return direction - 2.0 * dot(direction, normal) * normal


def refract(
    direction: Vector3,
    normal: Vector3,
    n_outside: float,
    n_inside: float
) -> Optional[Vector3]:
    """
    Bend a unit direction through a surface using Snell's law.

    The normal is taken to point to the outside medium. When the ray
    travels along the normal (cos > 0) it is leaving the object, so the
    normal is flipped and the indices swapped.

    Parameters
    ----------
    direction : np.ndarray
        Unit incident direction
    normal : np.ndarray
        Unit outward surface normal
    n_outside : float
        Refractive index of the surrounding medium
    n_inside : float
        Refractive index of the object

    Returns
    -------
    np.ndarray or None
        Unit refracted direction, or None on total internal reflection
    """
    cos_incidence = dot(direction, normal)
    if cos_incidence < 0:
        # Entering
        cos_incidence = -cos_incidence
        n = normal
        eta = n_outside / n_inside
    else:
        # Leaving
        n = -normal
        eta = n_inside / n_outside

    k = 1.0 - eta**2 * (1.0 - cos_incidence**2)
    if k < 0:
        return None

    refracted = eta * direction + (eta * cos_incidence - np.sqrt(k)) * n
    return normalize(refracted)
