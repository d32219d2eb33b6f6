"""Saturation, field capacity and wilting point estimates from the curve and from Ratliff et al. (1983)."""

from dataclasses import dataclass
from typing import Optional, Tuple

from soilwater.data.ratliff import ReferenceEntry, get_reference_entry
from soilwater.features.texture import TextureClass
from soilwater.models.van_genuchten import RetentionCurve

ROSETTA = "Rosetta"
RATLIFF = "Ratliff"

FIELD_CAPACITY_POTENTIAL = 33
WILTING_POINT_POTENTIAL = 1500


@dataclass(frozen=True)
class ThresholdEstimate:
    """
    Water content (vwc, fraction) and matric potential (smp) at saturation,
    field capacity and wilting point for one basis. None marks a value that is
    unavailable for this soil.
    """

    basis: str
    saturation_vwc: Optional[float] = None
    field_capacity_vwc: Optional[float] = None
    wilting_point_vwc: Optional[float] = None
    saturation_smp: Optional[float] = None
    field_capacity_smp: Optional[float] = None
    wilting_point_smp: Optional[float] = None
    field_capacity_sd: Optional[float] = None
    wilting_point_sd: Optional[float] = None

    @property
    def is_complete(self) -> bool:
        """True when saturation, field capacity and wilting point contents are all known."""
        return None not in (self.saturation_vwc, self.field_capacity_vwc, self.wilting_point_vwc)

    @property
    def plant_available_water(self) -> Optional[float]:
        if self.field_capacity_vwc is None or self.wilting_point_vwc is None:
            return None
        return self.field_capacity_vwc - self.wilting_point_vwc


def _percent_to_fraction(value: Optional[float]) -> Optional[float]:
    return None if value is None else value / 100


def rosetta_estimate(
    curve: RetentionCurve,
    entry: Optional[ReferenceEntry] = None,
    field_capacity_potential: int = FIELD_CAPACITY_POTENTIAL,
    wilting_point_potential: int = WILTING_POINT_POTENTIAL,
) -> ThresholdEstimate:
    """
    Thresholds read directly off the retention curve.

    The curve has no error estimate of its own, so the pressure-plate standard
    deviations of the texture class are attached as its error band.
    """
    return ThresholdEstimate(
        basis=ROSETTA,
        saturation_vwc=curve.saturation_content,
        field_capacity_vwc=curve.content_at(field_capacity_potential),
        wilting_point_vwc=curve.content_at(wilting_point_potential),
        saturation_smp=0,
        field_capacity_smp=field_capacity_potential,
        wilting_point_smp=wilting_point_potential,
        field_capacity_sd=_percent_to_fraction(entry.fc_lower_sd) if entry else None,
        wilting_point_sd=_percent_to_fraction(entry.wp_lower_sd) if entry else None,
    )


def ratliff_estimate(curve: RetentionCurve, entry: Optional[ReferenceEntry]) -> ThresholdEstimate:
    """
    Thresholds from the texture-class means, located on the curve by nearest content.

    Saturation is shared with the curve estimate since the table has none.
    """
    fc_vwc = _percent_to_fraction(entry.fc_upper_mean) if entry else None
    wp_vwc = _percent_to_fraction(entry.wp_upper_mean) if entry else None
    return ThresholdEstimate(
        basis=RATLIFF,
        saturation_vwc=curve.saturation_content,
        field_capacity_vwc=fc_vwc,
        wilting_point_vwc=wp_vwc,
        saturation_smp=0,
        field_capacity_smp=None if fc_vwc is None else curve.nearest_potential(fc_vwc),
        wilting_point_smp=None if wp_vwc is None else curve.nearest_potential(wp_vwc),
        field_capacity_sd=_percent_to_fraction(entry.fc_upper_sd) if entry else None,
        wilting_point_sd=_percent_to_fraction(entry.wp_upper_sd) if entry else None,
    )


def estimate_thresholds(
    curve: RetentionCurve,
    texture: TextureClass,
    field_capacity_potential: int = FIELD_CAPACITY_POTENTIAL,
    wilting_point_potential: int = WILTING_POINT_POTENTIAL,
    verbose: bool = True,
) -> Tuple[ThresholdEstimate, ThresholdEstimate]:
    """
    Rosetta and Ratliff threshold estimates for one soil.

    Args:
        curve: Retention curve of the soil
        texture: USDA texture class of the soil
        field_capacity_potential: Grid potential read as field capacity
        wilting_point_potential: Grid potential read as wilting point
        verbose: Print a warning when Ratliff statistics are unavailable

    Returns:
        (rosetta, ratliff) estimates
    """
    entry = get_reference_entry(texture)
    if entry is None and verbose:
        if texture is TextureClass.UNCLASSIFIED:
            print("Warning: texture unclassified, Ratliff estimate unavailable")
        else:
            print(f"Warning: no Ratliff statistics for {texture.label}, Ratliff estimate unavailable")

    rosetta = rosetta_estimate(curve, entry, field_capacity_potential, wilting_point_potential)
    ratliff = ratliff_estimate(curve, entry)
    return rosetta, ratliff
