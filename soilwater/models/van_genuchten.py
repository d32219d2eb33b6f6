"""Van Genuchten (1980) retention curve and Mualem conductivity on an integer potential grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import numpy as np
import pandas as pd

from soilwater.data.soil_parameters import SoilParameters

ArrayLike = Union[float, int, np.ndarray]

DEFAULT_MAX_POTENTIAL = 10000


def van_genuchten(
    potential: ArrayLike,
    theta_r: float,
    theta_s: float,
    alpha: float,
    n: float,
) -> ArrayLike:
    """
    Volumetric water content at a matric potential.

    content = theta_r + (theta_s - theta_r) / ((alpha * h)^n + 1)^(1 - 1/n)

    Args:
        potential: Matric potential magnitude (cm water), scalar or array, >= 0
        theta_r: Residual water content (cm3/cm3)
        theta_s: Saturated water content (cm3/cm3)
        alpha: Van Genuchten alpha (1/cm)
        n: Van Genuchten n (> 1)

    Returns:
        Volumetric water content, same shape as ``potential``
    """
    h = np.asarray(potential, dtype=np.float64)
    m = 1 - 1 / n
    content = theta_r + (theta_s - theta_r) / ((alpha * h) ** n + 1) ** m
    # theta_r + (theta_s - theta_r) can round away from theta_s
    content = np.where(h <= 0, theta_s, content)
    if content.ndim == 0:
        return float(content)
    return content


def effective_saturation(potential: ArrayLike, alpha: float, n: float) -> ArrayLike:
    """Se = ((alpha * h)^n + 1)^-(1 - 1/n)."""
    h = np.asarray(potential, dtype=np.float64)
    se = ((alpha * h) ** n + 1) ** -(1 - 1 / n)
    if se.ndim == 0:
        return float(se)
    return se


def mualem_conductivity(potential: ArrayLike, ks: float, alpha: float, n: float) -> ArrayLike:
    """
    Mualem-van Genuchten unsaturated hydraulic conductivity.

    K = ks * Se^0.5 * (1 - (1 - Se^(1/m))^m)^2, m = 1 - 1/n

    Returns:
        Conductivity in the units of ``ks``
    """
    m = 1 - 1 / n
    se = np.asarray(effective_saturation(potential, alpha, n), dtype=np.float64)
    k = ks * np.sqrt(se) * (1 - (1 - se ** (1 / m)) ** m) ** 2
    if k.ndim == 0:
        return float(k)
    return k


def potential_from_content(content: float, params: SoilParameters) -> float:
    """
    Continuous matric potential (cm) for a water content, inverting the closed form.

    Contents at or above theta_s map to 0; at or below theta_r to infinity.
    """
    if content >= params.theta_s:
        return 0.0
    if content <= params.theta_r:
        return float("inf")
    m = 1 - 1 / params.n
    se = (content - params.theta_r) / (params.theta_s - params.theta_r)
    return float((se ** (-1 / m) - 1) ** (1 / params.n) / params.alpha)


@dataclass
class RetentionCurve:
    """Retention curve sampled at every integer potential from 0 to ``potential[-1]``."""

    potential: np.ndarray
    content: np.ndarray
    conductivity: np.ndarray
    monotonic: bool = field(init=False)

    def __post_init__(self):
        if len(self.potential) != len(self.content):
            raise ValueError(
                f"potential length {len(self.potential)} != content length {len(self.content)}"
            )
        self.monotonic = bool(np.all(np.diff(self.content) <= 0))

    def __len__(self) -> int:
        return len(self.potential)

    @property
    def max_potential(self) -> int:
        return int(self.potential[-1])

    @property
    def saturation_content(self) -> float:
        return float(np.max(self.content))

    def content_at(self, potential: int) -> float:
        """Water content at a grid potential."""
        idx = int(potential) - int(self.potential[0])
        if idx < 0 or idx >= len(self.potential) or self.potential[idx] != potential:
            raise ValueError(
                f"Potential {potential} is not on the curve grid "
                f"({self.potential[0]}..{self.potential[-1]})"
            )
        return float(self.content[idx])

    def nearest_potential(self, content: float) -> int:
        """
        Grid potential whose content is closest to ``content``.

        Ties resolve to the lowest potential, as a forward linear scan would.
        Uses a binary search when the curve is non-increasing.
        """
        if not self.monotonic:
            return int(self.potential[np.argmin(np.abs(self.content - content))])

        descending = -self.content
        n_points = len(descending)
        # first index whose content <= target
        i = int(np.searchsorted(descending, -content, side="left"))
        if i == 0:
            return int(self.potential[0])
        if i == n_points:
            j = int(np.searchsorted(descending, descending[-1], side="left"))
            return int(self.potential[j])

        # leftmost point of the plateau just above the target
        j = int(np.searchsorted(descending, descending[i - 1], side="left"))
        if abs(self.content[j] - content) <= abs(self.content[i] - content):
            return int(self.potential[j])
        return int(self.potential[i])

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "potential": self.potential,
            "content": self.content,
            "conductivity": self.conductivity,
        })


def build_retention_curve(
    params: SoilParameters,
    max_potential: int = DEFAULT_MAX_POTENTIAL,
) -> RetentionCurve:
    """Evaluate the retention and conductivity functions at potentials 0..max_potential."""
    if max_potential < 1:
        raise ValueError(f"max_potential must be >= 1, got {max_potential}")
    potential = np.arange(0, int(max_potential) + 1, dtype=np.int64)
    content = van_genuchten(potential, params.theta_r, params.theta_s, params.alpha, params.n)
    conductivity = mualem_conductivity(potential, params.ks, params.alpha, params.n)
    return RetentionCurve(potential=potential, content=content, conductivity=conductivity)
