"""Threshold tables, plot data and Rosetta-vs-Ratliff comparison for reporting."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from soilwater.applications.thresholds import ThresholdEstimate
from soilwater.features.texture import TextureClass
from soilwater.models.van_genuchten import RetentionCurve

THRESHOLD_ROWS = [
    "Texture class",
    "VWC saturation",
    "VWC field capacity",
    "VWC wilting point",
    "SMP saturation",
    "SMP field capacity",
    "SMP wilting point",
]


@dataclass(frozen=True)
class AnnotatedPoint:
    basis: str
    label: str
    potential: float
    content: float


@dataclass(frozen=True)
class ErrorBar:
    """Vertical error bar on the content axis at a fixed potential."""

    basis: str
    label: str
    potential: float
    lower: float
    upper: float


@dataclass
class CurvePlotData:
    curve: pd.DataFrame
    points: List[AnnotatedPoint] = field(default_factory=list)
    error_bars: List[ErrorBar] = field(default_factory=list)


def _or_nan(value: Optional[float]) -> float:
    return np.nan if value is None else value


def build_threshold_table(
    texture: TextureClass,
    rosetta: ThresholdEstimate,
    ratliff: ThresholdEstimate,
) -> pd.DataFrame:
    """Seven-row table of texture class and thresholds, one column per basis."""
    columns = {}
    for est in (rosetta, ratliff):
        columns[est.basis] = pd.Series([
            texture.label,
            _or_nan(est.saturation_vwc),
            _or_nan(est.field_capacity_vwc),
            _or_nan(est.wilting_point_vwc),
            _or_nan(est.saturation_smp),
            _or_nan(est.field_capacity_smp),
            _or_nan(est.wilting_point_smp),
        ], index=THRESHOLD_ROWS, dtype=object)
    return pd.DataFrame(columns)


def build_curve_plot_data(
    curve: RetentionCurve,
    rosetta: ThresholdEstimate,
    ratliff: ThresholdEstimate,
) -> CurvePlotData:
    """
    Curve series plus threshold markers and error bars for an external plotter.

    Markers or bars involving an unavailable value are left out.
    """
    data = CurvePlotData(curve=curve.to_frame()[["potential", "content"]])
    for est in (rosetta, ratliff):
        for label, smp, vwc, sd in (
            ("saturation", est.saturation_smp, est.saturation_vwc, None),
            ("field capacity", est.field_capacity_smp, est.field_capacity_vwc, est.field_capacity_sd),
            ("wilting point", est.wilting_point_smp, est.wilting_point_vwc, est.wilting_point_sd),
        ):
            if smp is None or vwc is None:
                continue
            data.points.append(AnnotatedPoint(est.basis, label, smp, vwc))
            if sd is not None:
                data.error_bars.append(ErrorBar(est.basis, label, smp, vwc - sd, vwc + sd))
    return data


def _fmt(value, digits: int) -> str:
    if isinstance(value, str):
        return value
    if pd.isna(value):
        return "N/A"
    return f"{value:.{digits}f}"


def format_threshold_table(table: pd.DataFrame, title: str = "Soil Water Thresholds") -> str:
    """Format a threshold table as printable text."""
    lines = [title, "=" * len(title)]
    header = f"{'':<20}" + "".join(f"{col:>18}" for col in table.columns)
    lines.append(header)
    lines.append("-" * len(header))
    for row_name, row in table.iterrows():
        digits = 0 if str(row_name).startswith("SMP") else 3
        lines.append(f"{row_name:<20}" + "".join(f"{_fmt(v, digits):>18}" for v in row.values))
    return "\n".join(lines)


def compare_estimates(
    rosetta: ThresholdEstimate,
    ratliff: ThresholdEstimate,
) -> Dict[str, Dict[str, Optional[float]]]:
    """
    How far the curve thresholds sit from the texture-class means.

    Returns:
        Dict mapping 'field_capacity' / 'wilting_point' to
        {difference, z_score, within_one_sd}; values are None where the
        Ratliff side is unavailable
    """
    result = {}
    for name in ("field_capacity", "wilting_point"):
        ros = getattr(rosetta, f"{name}_vwc")
        mean = getattr(ratliff, f"{name}_vwc")
        sd = getattr(ratliff, f"{name}_sd")
        diff = None if ros is None or mean is None else ros - mean
        z = None if diff is None or not sd else diff / sd
        result[name] = {
            "difference": diff,
            "z_score": z,
            "within_one_sd": None if z is None else bool(abs(z) <= 1),
        }
    return result
