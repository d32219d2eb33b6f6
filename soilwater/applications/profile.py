"""Plant available water (PAW) profile tables for a managed soil depth."""

from typing import Optional

import numpy as np
import pandas as pd

from soilwater.applications.thresholds import ThresholdEstimate
from soilwater.models.van_genuchten import RetentionCurve

PROFILE_COLUMNS = [
    "index",
    "paw_fraction",
    "profile_volume_filled",
    "percent_paw",
    "percent_vwc",
    "corresponding_smp",
    "refill_depth",
]


def plant_available_water_depth(depth: float, estimate: ThresholdEstimate) -> Optional[float]:
    """
    Plant available water held by the profile between field capacity and wilting point.

    Args:
        depth: Managed profile depth
        estimate: Threshold estimate supplying field capacity and wilting point

    Returns:
        PAW in the units of ``depth``, or None when a threshold is unavailable
    """
    paw = estimate.plant_available_water
    if paw is None:
        return None
    return depth * paw


def build_profile(
    depth: float,
    estimate: ThresholdEstimate,
    curve: RetentionCurve,
    steps: int = 100,
) -> pd.DataFrame:
    """
    Profile table stepping PAW linearly from field capacity (row 1) to wilting point.

    Each row's volume is rescaled to a volumetric content by the basis'
    saturation content, then mapped back to the nearest grid potential.

    Args:
        depth: Managed profile depth
        estimate: Complete threshold estimate (Rosetta or Ratliff)
        curve: Retention curve used for the inverse lookup
        steps: Number of PAW decrements; the table has ``steps + 1`` rows

    Returns:
        DataFrame with PROFILE_COLUMNS
    """
    if not estimate.is_complete:
        raise ValueError(f"{estimate.basis} estimate is incomplete, cannot build a profile")
    if depth <= 0:
        raise ValueError(f"depth must be > 0, got {depth}")
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")

    max_volume = depth * estimate.field_capacity_vwc
    min_volume = depth * estimate.wilting_point_vwc

    fraction = 1 - np.arange(steps + 1) / steps
    volume = fraction * (max_volume - min_volume) + min_volume
    percent_paw = volume / max_volume
    percent_vwc = percent_paw * estimate.saturation_vwc
    smp = np.array([curve.nearest_potential(v) for v in percent_vwc], dtype=np.int64)

    return pd.DataFrame({
        "index": np.arange(1, steps + 2),
        "paw_fraction": fraction,
        "profile_volume_filled": volume,
        "percent_paw": percent_paw,
        "percent_vwc": percent_vwc,
        "corresponding_smp": smp,
        "refill_depth": max_volume - volume,
    }, columns=PROFILE_COLUMNS)
