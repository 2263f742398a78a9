"""
Parametric Bézier curve evaluation.

Quadratic (3 control points) and cubic (4 control points) curves in
Bernstein form:

    Q(t) = (1-t)^2 P0 + 2(1-t)t P1 + t^2 P2
    C(t) = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3

`t` may be a scalar or an array; arrays produce one point per parameter.
Callers supply t in [0, 1].
"""

import jax.numpy as jnp
from jax import Array


def _as_points(*points) -> list[Array]:
    return [jnp.asarray(p, dtype=jnp.float32) for p in points]


def _weights(t) -> Array:
    """Reshape t so weights broadcast against (x, y) pairs."""
    t = jnp.asarray(t, dtype=jnp.float32)
    return t[..., None]


def evaluate_quadratic(p0, p1, p2, t) -> Array:
    """
    Evaluate a quadratic Bézier curve at parameter t.

    Args:
        p0, p1, p2: Control points as (x, y) pairs
        t: Parameter in [0, 1], scalar or array

    Returns:
        Point(s) of shape (..., 2)
    """
    p0, p1, p2 = _as_points(p0, p1, p2)
    t = _weights(t)
    u = 1.0 - t
    return u**2 * p0 + 2.0 * u * t * p1 + t**2 * p2


def evaluate_cubic(p0, p1, p2, p3, t) -> Array:
    """
    Evaluate a cubic Bézier curve at parameter t.

    Args:
        p0, p1, p2, p3: Control points as (x, y) pairs
        t: Parameter in [0, 1], scalar or array

    Returns:
        Point(s) of shape (..., 2)
    """
    p0, p1, p2, p3 = _as_points(p0, p1, p2, p3)
    t = _weights(t)
    u = 1.0 - t
    return u**3 * p0 + 3.0 * u**2 * t * p1 + 3.0 * u * t**2 * p2 + t**3 * p3


def sample_quadratic(p0, p1, p2, n: int = 32) -> Array:
    """Sample n+1 evenly spaced points along a quadratic curve."""
    return evaluate_quadratic(p0, p1, p2, jnp.linspace(0.0, 1.0, n + 1))


def sample_cubic(p0, p1, p2, p3, n: int = 32) -> Array:
    """Sample n+1 evenly spaced points along a cubic curve."""
    return evaluate_cubic(p0, p1, p2, p3, jnp.linspace(0.0, 1.0, n + 1))
