"""End-to-end soil water retention and PAW estimation for a managed profile."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import pandas as pd
import yaml

from soilwater.applications.profile import build_profile
from soilwater.applications.thresholds import (
    FIELD_CAPACITY_POTENTIAL,
    WILTING_POINT_POTENTIAL,
    ThresholdEstimate,
    estimate_thresholds,
)
from soilwater.data.soil_parameters import SoilParameters, validate_parameters
from soilwater.evaluation.summary import CurvePlotData, build_curve_plot_data, build_threshold_table
from soilwater.features.texture import TextureClass, classify_texture
from soilwater.models.van_genuchten import DEFAULT_MAX_POTENTIAL, RetentionCurve, build_retention_curve


@dataclass
class EstimatorConfig:
    """Configuration for the retention curve grid and profile tables."""

    max_potential: int = DEFAULT_MAX_POTENTIAL
    field_capacity_potential: int = FIELD_CAPACITY_POTENTIAL
    wilting_point_potential: int = WILTING_POINT_POTENTIAL
    paw_steps: int = 100
    verbose: bool = True

    def __post_init__(self):
        for name in ("field_capacity_potential", "wilting_point_potential"):
            value = getattr(self, name)
            if not 0 <= value <= self.max_potential:
                raise ValueError(f"{name}={value} outside curve grid 0..{self.max_potential}")
        if self.field_capacity_potential >= self.wilting_point_potential:
            raise ValueError(
                f"field_capacity_potential={self.field_capacity_potential} must be below "
                f"wilting_point_potential={self.wilting_point_potential}"
            )
        if self.paw_steps < 1:
            raise ValueError(f"paw_steps must be >= 1, got {self.paw_steps}")


def load_estimator_config(path: Union[str, Path]) -> EstimatorConfig:
    """Read an EstimatorConfig from YAML (see configs/estimator.yaml)."""
    with open(path, encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    curve_cfg = cfg.get("curve") or {}
    profile_cfg = cfg.get("profile") or {}
    defaults = EstimatorConfig()
    return EstimatorConfig(
        max_potential=int(curve_cfg.get("max_potential", defaults.max_potential)),
        field_capacity_potential=int(
            curve_cfg.get("field_capacity_potential", defaults.field_capacity_potential)
        ),
        wilting_point_potential=int(
            curve_cfg.get("wilting_point_potential", defaults.wilting_point_potential)
        ),
        paw_steps=int(profile_cfg.get("paw_steps", defaults.paw_steps)),
        verbose=bool(cfg.get("verbose", defaults.verbose)),
    )


@dataclass
class EstimationResult:
    texture: TextureClass
    rosetta: ThresholdEstimate
    ratliff: ThresholdEstimate
    curve: RetentionCurve
    threshold_table: pd.DataFrame
    curve_plot_data: CurvePlotData
    rosetta_profile: pd.DataFrame
    ratliff_profile: Optional[pd.DataFrame]


def estimate(
    depth: float,
    params: SoilParameters,
    config: Optional[EstimatorConfig] = None,
) -> EstimationResult:
    """
    Retention curve, texture class, thresholds and PAW profiles for one soil.

    Args:
        depth: Managed profile depth (> 0)
        params: Texture fractions and Van Genuchten parameters
        config: Grid and profile settings, defaults when None

    Returns:
        EstimationResult; Ratliff fields are None (and ``ratliff_profile`` is
        None) when the texture has no reference statistics

    Raises:
        ValueError: for invalid parameters or depth
    """
    config = config or EstimatorConfig()
    validate_parameters(params, depth=depth, verbose=config.verbose)

    texture = classify_texture(params.sand, params.silt, params.clay)
    curve = build_retention_curve(params, max_potential=config.max_potential)

    rosetta, ratliff = estimate_thresholds(
        curve,
        texture,
        field_capacity_potential=config.field_capacity_potential,
        wilting_point_potential=config.wilting_point_potential,
        verbose=config.verbose,
    )

    rosetta_profile = build_profile(depth, rosetta, curve, steps=config.paw_steps)
    ratliff_profile = None
    if ratliff.is_complete:
        ratliff_profile = build_profile(depth, ratliff, curve, steps=config.paw_steps)

    return EstimationResult(
        texture=texture,
        rosetta=rosetta,
        ratliff=ratliff,
        curve=curve,
        threshold_table=build_threshold_table(texture, rosetta, ratliff),
        curve_plot_data=build_curve_plot_data(curve, rosetta, ratliff),
        rosetta_profile=rosetta_profile,
        ratliff_profile=ratliff_profile,
    )
