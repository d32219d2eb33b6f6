"""
Field capacity and wilting point statistics by texture class.

Data source:
    Ratliff, L.F., Ritchie, J.T. & Cassel, D.K. (1983). Field-measured limits
    of soil water availability as related to laboratory-measured properties.
    Soil Sci. Soc. Am. J. 47, 770-775.

All values are volumetric water content in percent. ``*_upper_*`` columns are
the laboratory-derived limits used for the Ratliff estimate; ``*_lower_*``
columns are the pressure-plate limits used as the error band around the
curve-derived estimate.

The values below have not been checked line by line against the printed
tables of the paper. Compare them with the publication before relying on the
Ratliff estimate; Sandy Clay is empty because the source has no samples for it.
"""

from dataclasses import dataclass, fields
from typing import Dict, Optional, Union

import numpy as np
import pandas as pd

from soilwater.features.texture import TextureClass, parse_texture

REFERENCE_FIELDS = (
    "fc_upper_mean", "fc_upper_sd", "fc_lower_mean", "fc_lower_sd",
    "wp_upper_mean", "wp_upper_sd", "wp_lower_mean", "wp_lower_sd",
)


@dataclass(frozen=True)
class ReferenceEntry:
    """Field capacity (fc) and wilting point (wp) means and standard deviations (%)."""

    fc_upper_mean: Optional[float] = None
    fc_upper_sd: Optional[float] = None
    fc_lower_mean: Optional[float] = None
    fc_lower_sd: Optional[float] = None
    wp_upper_mean: Optional[float] = None
    wp_upper_sd: Optional[float] = None
    wp_lower_mean: Optional[float] = None
    wp_lower_sd: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


RATLIFF_1983: Dict[TextureClass, ReferenceEntry] = {
    TextureClass.SAND: ReferenceEntry(10.6, 4.2, 8.1, 3.4, 3.3, 1.6, 3.6, 1.9),
    TextureClass.LOAMY_SAND: ReferenceEntry(13.4, 3.7, 11.5, 3.8, 5.1, 2.1, 5.4, 2.2),
    TextureClass.SANDY_LOAM: ReferenceEntry(19.2, 4.8, 18.0, 5.9, 8.3, 3.4, 9.2, 3.6),
    TextureClass.LOAM: ReferenceEntry(26.9, 4.4, 26.8, 5.5, 11.9, 3.8, 13.3, 4.2),
    TextureClass.SILT_LOAM: ReferenceEntry(30.7, 4.8, 31.9, 5.0, 12.4, 3.9, 13.2, 4.3),
    TextureClass.SILT: ReferenceEntry(31.8, 3.5, 33.4, 3.9, 7.8, 2.7, 8.7, 3.0),
    TextureClass.SILTY_CLAY_LOAM: ReferenceEntry(34.2, 3.9, 35.7, 4.1, 19.8, 3.5, 21.1, 3.6),
    TextureClass.CLAY_LOAM: ReferenceEntry(32.1, 4.4, 33.8, 5.2, 18.4, 4.6, 20.3, 4.8),
    TextureClass.SANDY_CLAY_LOAM: ReferenceEntry(26.4, 5.1, 26.7, 5.6, 15.6, 4.0, 16.5, 4.4),
    TextureClass.SANDY_CLAY: ReferenceEntry(),  # no samples in the source data
    TextureClass.SILTY_CLAY: ReferenceEntry(39.4, 4.5, 40.3, 4.1, 26.3, 4.7, 27.9, 5.1),
    TextureClass.CLAY: ReferenceEntry(42.1, 5.2, 43.6, 6.2, 28.7, 6.1, 30.4, 6.8),
}


def get_reference_entry(texture: Union[TextureClass, str]) -> Optional[ReferenceEntry]:
    """Reference entry for a texture class, None when the class has no statistics."""
    if isinstance(texture, str):
        texture = parse_texture(texture)
    entry = RATLIFF_1983.get(texture)
    if entry is None or entry.is_empty:
        return None
    return entry


def lookup_reference(texture: Union[TextureClass, str], field_name: str) -> Optional[float]:
    """
    A single statistic for a texture class.

    Returns:
        The value in percent, or None when the class or statistic is unavailable
    """
    if field_name not in REFERENCE_FIELDS:
        raise ValueError(f"Unknown reference field '{field_name}', expected one of {REFERENCE_FIELDS}")
    entry = get_reference_entry(texture)
    if entry is None:
        return None
    return getattr(entry, field_name)


def reference_table() -> pd.DataFrame:
    """The full table indexed by texture label, NaN where unavailable."""
    rows = {
        texture.label: [np.nan if getattr(entry, f) is None else getattr(entry, f)
                        for f in REFERENCE_FIELDS]
        for texture, entry in RATLIFF_1983.items()
    }
    df = pd.DataFrame.from_dict(rows, orient="index", columns=list(REFERENCE_FIELDS))
    df.index.name = "texture"
    return df
