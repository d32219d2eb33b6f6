"""USDA soil texture classification from sand/silt/clay percentages."""

from enum import Enum
from typing import Callable, Tuple

import numpy as np
import pandas as pd


class TextureClass(Enum):
    SAND = "Sand"
    LOAMY_SAND = "Loamy Sand"
    SANDY_LOAM = "Sandy Loam"
    LOAM = "Loam"
    SILT_LOAM = "Silt Loam"
    SILT = "Silt"
    SILTY_CLAY_LOAM = "Silty Clay Loam"
    CLAY_LOAM = "Clay Loam"
    SANDY_CLAY_LOAM = "Sandy Clay Loam"
    SANDY_CLAY = "Sandy Clay"
    SILTY_CLAY = "Silty Clay"
    CLAY = "Clay"
    UNCLASSIFIED = "Unclassified"

    @property
    def label(self) -> str:
        return self.value


Rule = Tuple[Callable[[float, float, float], bool], TextureClass]

# Evaluated top to bottom, first match wins. Ranges overlap, so order matters:
# the Silty Clay rule can never fire because the clay >= 40 / sand <= 45 rule
# above it already covers sand <= 20. Soils at exactly 50% silt that also fit
# the Loam ranges are left for the Loam rule.
TEXTURE_RULES: Tuple[Rule, ...] = (
    (lambda sand, silt, clay: clay >= 60, TextureClass.CLAY),
    (lambda sand, silt, clay: clay >= 40 and sand <= 45, TextureClass.CLAY),
    (lambda sand, silt, clay: clay >= 40 and sand <= 20, TextureClass.SILTY_CLAY),
    (lambda sand, silt, clay: 28 <= clay <= 40 and sand < 20, TextureClass.SILTY_CLAY_LOAM),
    (lambda sand, silt, clay: 28 <= clay <= 40 and 20 <= sand <= 45, TextureClass.CLAY_LOAM),
    (lambda sand, silt, clay: (clay <= 28 and sand <= 50 and 50 <= silt <= 86
                               and not (silt == 50 and 8 <= clay and 24 <= sand <= 52)),
     TextureClass.SILT_LOAM),
    (lambda sand, silt, clay: clay <= 14 and silt >= 80, TextureClass.SILT),
    (lambda sand, silt, clay: 8 <= clay <= 28 and silt <= 50 and 24 <= sand <= 52, TextureClass.LOAM),
    (lambda sand, silt, clay: clay >= 35 and 45 <= sand <= 65, TextureClass.SANDY_CLAY),
    (lambda sand, silt, clay: 20 <= clay <= 35 and 45 <= sand <= 80, TextureClass.SANDY_CLAY_LOAM),
    (lambda sand, silt, clay: 15 <= clay <= 20 and 45 <= sand <= 85, TextureClass.SANDY_LOAM),
    (lambda sand, silt, clay: 10 <= clay <= 15 and 70 <= sand <= 85, TextureClass.LOAMY_SAND),
    (lambda sand, silt, clay: clay <= 10 and sand >= 85, TextureClass.SAND),
)


def classify_texture(sand: float, silt: float, clay: float) -> TextureClass:
    """
    Classify a soil into a USDA texture class.

    Args:
        sand: Sand fraction (%)
        silt: Silt fraction (%)
        clay: Clay fraction (%)

    Returns:
        Matching TextureClass, or TextureClass.UNCLASSIFIED when no rule matches
    """
    if any(pd.isna(v) for v in (sand, silt, clay)):
        return TextureClass.UNCLASSIFIED
    for predicate, texture in TEXTURE_RULES:
        if predicate(sand, silt, clay):
            return texture
    return TextureClass.UNCLASSIFIED


def classify_texture_frame(
    df: pd.DataFrame,
    sand_col: str = "sand",
    silt_col: str = "silt",
    clay_col: str = "clay",
) -> pd.Series:
    """Texture labels for every row of a dataframe."""
    labels = [
        classify_texture(s, si, c).label
        for s, si, c in zip(df[sand_col].values, df[silt_col].values, df[clay_col].values)
    ]
    return pd.Series(np.asarray(labels, dtype=object), index=df.index, name="texture")


def parse_texture(label: str) -> TextureClass:
    """Look up a TextureClass from a label such as 'Sandy Loam' or 'sandy_loam'."""
    key = str(label).strip().lower().replace("_", " ").replace("-", " ")
    for texture in TextureClass:
        if texture.value.lower() == key:
            return texture
    raise ValueError(f"Unknown texture class '{label}'")
