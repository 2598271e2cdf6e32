"""Small parameter validation helpers for settings and estimator arguments."""

from __future__ import annotations

from numbers import Integral, Number


def check_parameter(
    param: Number,
    low: Number | None = None,
    high: Number | None = None,
    *,
    param_name: str = "parameter",
    integer: bool = False,
) -> None:
    """Validate a numeric parameter lies within the inclusive range [low, high].

    Parameters
    ----------
    param:
        The value to validate. Booleans are rejected even though they are
        numbers.
    low / high:
        Optional bounds. When `None`, the bound is not checked.
    integer:
        Require an integral value.
    param_name:
        Used in error messages.
    """

    expected = Integral if integer else Number
    if not isinstance(param, expected) or isinstance(param, bool):
        kind = "an integer" if integer else "a number"
        raise TypeError(f"{param_name} must be {kind}, got {type(param).__name__}")

    if low is not None and param < low:
        raise ValueError(f"{param_name} must be >= {low}, got {param}")
    if high is not None and param > high:
        raise ValueError(f"{param_name} must be <= {high}, got {param}")


def check_n_jobs(n_jobs: int) -> int:
    """Validate a joblib-style worker count (positive, or negative for 'all but')."""

    check_parameter(n_jobs, param_name="n_jobs", integer=True)
    if n_jobs == 0:
        raise ValueError("n_jobs must be non-zero (use -1 for all cores)")
    return int(n_jobs)
