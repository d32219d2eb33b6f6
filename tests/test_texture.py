"""Tests for USDA texture classification."""

import pandas as pd
import pytest

from soilwater.features.texture import (
    TEXTURE_RULES,
    TextureClass,
    classify_texture,
    classify_texture_frame,
    parse_texture,
)


class TestClassifyTexture:
    @pytest.mark.parametrize("sand,silt,clay,expected", [
        (42, 50, 8, TextureClass.LOAM),
        (90, 5, 5, TextureClass.SAND),
        (10, 25, 65, TextureClass.CLAY),
        (10, 60, 30, TextureClass.SILTY_CLAY_LOAM),
        (35, 33, 32, TextureClass.CLAY_LOAM),
        (20, 65, 15, TextureClass.SILT_LOAM),
        (5, 88, 7, TextureClass.SILT),
        (50, 10, 40, TextureClass.SANDY_CLAY),
        (60, 15, 25, TextureClass.SANDY_CLAY_LOAM),
        (65, 17, 18, TextureClass.SANDY_LOAM),
        (80, 8, 12, TextureClass.LOAMY_SAND),
    ])
    def test_classes(self, sand, silt, clay, expected):
        assert classify_texture(sand, silt, clay) is expected

    def test_high_clay_wins_first(self):
        # clay >= 60 even with silt-loam-like sand
        assert classify_texture(5, 30, 65) is TextureClass.CLAY

    def test_silty_clay_rule_shadowed(self):
        # clay >= 40 and sand <= 20 is caught by the earlier clay rule
        assert classify_texture(10, 45, 45) is TextureClass.CLAY
        assert TEXTURE_RULES[2][1] is TextureClass.SILTY_CLAY

    def test_silt_boundary_goes_to_loam(self):
        assert classify_texture(42, 50, 8) is TextureClass.LOAM
        assert classify_texture(42, 50.5, 7.5) is TextureClass.SILT_LOAM

    @pytest.mark.parametrize("sand,silt,clay", [(45, 50, 5), (23, 50, 27), (50, 50, 0)])
    def test_silt_boundary_outside_loam_stays_silt_loam(self, sand, silt, clay):
        assert classify_texture(sand, silt, clay) is TextureClass.SILT_LOAM

    def test_unclassified(self):
        assert classify_texture(70, 25, 5) is TextureClass.UNCLASSIFIED

    def test_nan_is_unclassified(self):
        assert classify_texture(float("nan"), 50, 8) is TextureClass.UNCLASSIFIED

    def test_fractions_not_required_to_sum_to_100(self):
        assert classify_texture(90, 40, 5) is TextureClass.SAND

    def test_rule_count(self):
        assert len(TEXTURE_RULES) == 13


class TestTextureHelpers:
    def test_classify_frame(self):
        df = pd.DataFrame({"sand": [42, 90, 70], "silt": [50, 5, 25], "clay": [8, 5, 5]})
        labels = classify_texture_frame(df)
        assert list(labels) == ["Loam", "Sand", "Unclassified"]
        assert labels.name == "texture"

    @pytest.mark.parametrize("label", ["Sandy Loam", "sandy_loam", " sandy-loam "])
    def test_parse_texture(self, label):
        assert parse_texture(label) is TextureClass.SANDY_LOAM

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown texture class"):
            parse_texture("peat")
