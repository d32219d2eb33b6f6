"""Shared test fixtures for soilwater tests."""

import pytest

from soilwater.data.soil_parameters import SoilParameters
from soilwater.models.van_genuchten import build_retention_curve


@pytest.fixture
def loam_params():
    """Rosetta-3 parameters for a 42/50/8 sand/silt/clay loam."""
    return SoilParameters(
        sand=42.0, silt=50.0, clay=8.0, ks=40.0,
        theta_r=0.062, theta_s=0.406, alpha=0.005, n=1.54,
    )


@pytest.fixture
def sandy_clay_params():
    return SoilParameters(
        sand=50.0, silt=10.0, clay=40.0, ks=11.4,
        theta_r=0.096, theta_s=0.385, alpha=0.028, n=1.21,
    )


@pytest.fixture
def unclassified_params():
    """70/25/5 matches no texture rule."""
    return SoilParameters(
        sand=70.0, silt=25.0, clay=5.0, ks=80.0,
        theta_r=0.045, theta_s=0.39, alpha=0.035, n=1.6,
    )


@pytest.fixture
def loam_curve(loam_params):
    return build_retention_curve(loam_params)
