"""Tests for PAW profile tables."""

import numpy as np
import pytest

from soilwater.applications.profile import (
    PROFILE_COLUMNS,
    build_profile,
    plant_available_water_depth,
)
from soilwater.applications.thresholds import RATLIFF, ThresholdEstimate, estimate_thresholds
from soilwater.features.texture import TextureClass


@pytest.fixture
def loam_estimates(loam_curve):
    return estimate_thresholds(loam_curve, TextureClass.LOAM, verbose=False)


class TestBuildProfile:
    def test_shape_and_index(self, loam_curve, loam_estimates):
        profile = build_profile(50, loam_estimates[0], loam_curve)
        assert list(profile.columns) == PROFILE_COLUMNS
        assert len(profile) == 101
        assert profile["index"].tolist() == list(range(1, 102))

    def test_paw_fraction_spans_one_to_zero(self, loam_curve, loam_estimates):
        profile = build_profile(50, loam_estimates[0], loam_curve)
        assert profile["paw_fraction"].iloc[0] == 1.0
        assert profile["paw_fraction"].iloc[-1] == 0.0
        assert profile["paw_fraction"].iloc[50] == pytest.approx(0.5)

    def test_volumes(self, loam_curve, loam_estimates):
        rosetta = loam_estimates[0]
        profile = build_profile(50, rosetta, loam_curve)
        assert profile["profile_volume_filled"].iloc[0] == pytest.approx(50 * rosetta.field_capacity_vwc)
        assert profile["profile_volume_filled"].iloc[-1] == pytest.approx(50 * rosetta.wilting_point_vwc)
        assert profile["refill_depth"].iloc[0] == pytest.approx(0.0, abs=1e-12)
        assert profile["refill_depth"].iloc[-1] == pytest.approx(plant_available_water_depth(50, rosetta))

    def test_percent_paw_decreasing(self, loam_curve, loam_estimates):
        rosetta = loam_estimates[0]
        profile = build_profile(50, rosetta, loam_curve)
        percent_paw = profile["percent_paw"].values
        assert percent_paw[0] == pytest.approx(1.0)
        assert percent_paw[-1] == pytest.approx(rosetta.wilting_point_vwc / rosetta.field_capacity_vwc)
        assert np.all(np.diff(percent_paw) < 0)

    def test_percent_vwc_scaled_by_saturation(self, loam_curve, loam_estimates):
        rosetta = loam_estimates[0]
        profile = build_profile(50, rosetta, loam_curve)
        np.testing.assert_allclose(
            profile["percent_vwc"].values, profile["percent_paw"].values * rosetta.saturation_vwc
        )

    def test_smp_is_nearest_curve_point(self, loam_curve, loam_estimates):
        profile = build_profile(50, loam_estimates[1], loam_curve)
        for vwc, smp in zip(profile["percent_vwc"], profile["corresponding_smp"]):
            assert smp == int(np.argmin(np.abs(loam_curve.content - vwc)))
        assert np.all(np.diff(profile["corresponding_smp"].values) >= 0)

    def test_depth_scales_volume(self, loam_curve, loam_estimates):
        shallow = build_profile(50, loam_estimates[0], loam_curve)
        deep = build_profile(100, loam_estimates[0], loam_curve)
        np.testing.assert_allclose(
            deep["profile_volume_filled"].values, 2 * shallow["profile_volume_filled"].values
        )
        np.testing.assert_allclose(deep["percent_paw"].values, shallow["percent_paw"].values)

    def test_custom_steps(self, loam_curve, loam_estimates):
        profile = build_profile(50, loam_estimates[0], loam_curve, steps=10)
        assert len(profile) == 11
        assert profile["paw_fraction"].iloc[1] == pytest.approx(0.9)

    def test_incomplete_estimate_raises(self, loam_curve):
        with pytest.raises(ValueError, match="incomplete"):
            build_profile(50, ThresholdEstimate(RATLIFF, 0.4), loam_curve)

    def test_bad_depth_raises(self, loam_curve, loam_estimates):
        with pytest.raises(ValueError, match="depth must be > 0"):
            build_profile(0, loam_estimates[0], loam_curve)


class TestPlantAvailableWater:
    def test_depth(self):
        est = ThresholdEstimate(RATLIFF, 0.4, 0.3, 0.1)
        assert plant_available_water_depth(50, est) == pytest.approx(10.0)

    def test_unavailable(self):
        assert plant_available_water_depth(50, ThresholdEstimate(RATLIFF, 0.4)) is None
