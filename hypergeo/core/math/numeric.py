"""Precision-dependent numeric constants."""

from typing import Dict

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


class NumericTraits(BaseModel):
    """Tolerances and iteration caps for one floating-point precision."""

    model_config = ConfigDict(frozen=True)

    max_num_distortion_steps: int = Field(
        gt=0,
        description="Maximum number of Newton updates in undistort"
    )
    distortion_tolerance2: float = Field(
        gt=0,
        description="Squared residual below which undistort has converged"
    )
    small_angle_tolerance: float = Field(
        gt=0,
        description="Threshold for near-singular Jacobians and degenerate angles"
    )


_NUMERIC_TRAITS: Dict[np.dtype, NumericTraits] = {
    np.dtype(np.float64): NumericTraits(
        max_num_distortion_steps=50,
        distortion_tolerance2=1e-24,
        small_angle_tolerance=1e-10,
    ),
    np.dtype(np.float32): NumericTraits(
        max_num_distortion_steps=20,
        distortion_tolerance2=1e-10,
        small_angle_tolerance=1e-5,
    ),
}


def numeric_traits(dtype) -> NumericTraits:
    """Get numeric traits for a floating dtype.

    Args:
        dtype: NumPy dtype (or anything np.dtype accepts)

    Returns:
        Traits registered for that precision
    """
    key = np.dtype(dtype)
    if key not in _NUMERIC_TRAITS:
        raise ValueError(f"Unsupported scalar type {key}, expected one of "
                         f"{sorted(str(k) for k in _NUMERIC_TRAITS)}")
    return _NUMERIC_TRAITS[key]


def set_numeric_traits(dtype, traits: NumericTraits) -> None:
    """Replace the traits used for a floating dtype."""
    key = np.dtype(dtype)
    if not np.issubdtype(key, np.floating):
        raise ValueError(f"Numeric traits require a floating dtype, got {key}")
    _NUMERIC_TRAITS[key] = traits
