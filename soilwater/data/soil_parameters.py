"""Soil texture and Van Genuchten hydraulic parameters, with validation."""

import math
from dataclasses import dataclass
from typing import Mapping, Optional

# Rosetta / SSURGO style column names -> field names
PARAMETER_ALIASES = {
    "sand": "sand", "Sand": "sand", "sand_pct": "sand", "sand_percent": "sand",
    "silt": "silt", "Silt": "silt", "silt_pct": "silt", "silt_percent": "silt",
    "clay": "clay", "Clay": "clay", "clay_pct": "clay", "clay_percent": "clay",
    "ks": "ks", "Ks": "ks", "Ksat": "ks", "ksat": "ks",
    "theta_r": "theta_r", "thetar": "theta_r", "theta_res": "theta_r",
    "theta_s": "theta_s", "thetas": "theta_s", "theta_sat": "theta_s",
    "alpha": "alpha", "Alpha": "alpha",
    "n": "n", "N": "n", "npar": "n",
}


@dataclass(frozen=True)
class SoilParameters:
    """Texture fractions (%) and Rosetta-3 Van Genuchten parameters for one soil."""

    sand: float
    silt: float
    clay: float
    ks: float
    """Saturated hydraulic conductivity (cm/day)."""
    theta_r: float
    theta_s: float
    alpha: float
    """Van Genuchten alpha (1/cm)."""
    n: float

    @classmethod
    def from_record(cls, record: Mapping) -> "SoilParameters":
        """Build from a dict or pandas row, accepting common column aliases."""
        values = {}
        for key, value in record.items():
            name = PARAMETER_ALIASES.get(key)
            if name is None or name in values or value is None:
                continue
            value = float(value)
            if math.isnan(value):
                continue
            values[name] = value
        missing = [f for f in ("sand", "silt", "clay", "ks", "theta_r", "theta_s", "alpha", "n")
                   if f not in values]
        if missing:
            raise ValueError(f"Missing soil parameters: {', '.join(missing)}")
        return cls(**values)

    @classmethod
    def from_rosetta(
        cls,
        sand: float,
        silt: float,
        clay: float,
        theta_r: float,
        theta_s: float,
        log10_alpha: float,
        log10_n: float,
        log10_ksat: float,
    ) -> "SoilParameters":
        """Convert Rosetta-3 outputs (alpha, n and Ks reported as log10) to linear units."""
        return cls(
            sand=sand,
            silt=silt,
            clay=clay,
            ks=10 ** log10_ksat,
            theta_r=theta_r,
            theta_s=theta_s,
            alpha=10 ** log10_alpha,
            n=10 ** log10_n,
        )


def validate_parameters(
    params: SoilParameters,
    depth: Optional[float] = None,
    verbose: bool = True,
) -> SoilParameters:
    """
    Reject parameter sets the retention model cannot evaluate.

    Texture fractions are not required to sum to 100; out-of-range fractions
    only produce a warning.

    Raises:
        ValueError: on non-finite values, n <= 1, alpha <= 0, ks <= 0,
            theta_r < 0, theta_r >= theta_s or depth <= 0.
    """
    for name in ("sand", "silt", "clay", "ks", "theta_r", "theta_s", "alpha", "n"):
        value = getattr(params, name)
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")
    if params.n <= 1:
        raise ValueError(f"n must be > 1, got {params.n}")
    if params.alpha <= 0:
        raise ValueError(f"alpha must be > 0, got {params.alpha}")
    if params.ks <= 0:
        raise ValueError(f"ks must be > 0, got {params.ks}")
    if params.theta_r < 0:
        raise ValueError(f"theta_r must be >= 0, got {params.theta_r}")
    if params.theta_r >= params.theta_s:
        raise ValueError(
            f"theta_r must be < theta_s, got theta_r={params.theta_r}, theta_s={params.theta_s}"
        )
    if depth is not None and not (math.isfinite(depth) and depth > 0):
        raise ValueError(f"depth must be > 0, got {depth}")

    if verbose:
        for name in ("sand", "silt", "clay"):
            value = getattr(params, name)
            if value < 0 or value > 100:
                print(f"Warning: {name} fraction {value} outside 0-100%")
    return params
