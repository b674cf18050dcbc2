"""
Pytest configuration and shared fixtures for geoschem_j tests.
"""

import numpy as np
import pytest
import xarray as xr

from geoschem_j.mapping import Source, required_channels
from geoschem_j.strategy import EngineSet

#: Every numbered channel the GEOS-Chem mapping reads
PRIMARY_CHANNELS = required_channels(source=Source.PRIMARY)
AUXILIARY_CHANNELS = required_channels(source=Source.AUXILIARY)
ALL_CHANNELS = PRIMARY_CHANNELS + AUXILIARY_CHANNELS


def make_channel_set(channels, shape, scale=1.0):
    """Distinct, position-dependent values for each channel."""
    size = int(np.prod(shape))
    ramp = np.arange(1, size + 1, dtype=float).reshape(shape)
    return {
        channel: scale * (i + 1) * 1.0e-6 * ramp
        for i, channel in enumerate(channels)
    }


class RecordingEngine:
    """Engine stand-in that records its arguments."""

    def __init__(self, channels, shape_arg=0, scale=1.0):
        self.channels = list(channels)
        self.shape_arg = shape_arg
        self.scale = scale
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        shape = np.shape(args[self.shape_arg])
        return make_channel_set(self.channels, shape, self.scale)


@pytest.fixture
def channel_factory():
    """Builder for synthetic channel sets: (channels, shape, scale) -> dict."""
    return make_channel_set


@pytest.fixture
def primary_channels():
    return list(PRIMARY_CHANNELS)


@pytest.fixture
def auxiliary_channels():
    return list(AUXILIARY_CHANNELS)


@pytest.fixture
def recording_engines():
    """EngineSet of recording engines with distinct outputs."""
    return EngineSet(
        table=RecordingEngine(PRIMARY_CHANNELS, scale=1.0),
        spectral=RecordingEngine(ALL_CHANNELS, shape_arg=1, scale=2.0),
        reference=RecordingEngine(ALL_CHANNELS, scale=3.0),
    )


@pytest.fixture
def sza_batch():
    """Solar zenith angles for a small batch [degrees]."""
    return np.array([0.0, 30.0, 60.0])


@pytest.fixture
def hybrid_library():
    """
    Small hybrid J-value library.

    Every channel is a product of functions linear in each dimension, so
    multilinear interpolation reproduces it exactly.
    """
    coords = {
        "sza": np.array([0.0, 30.0, 60.0, 89.0]),
        "alt": np.array([0.0, 1000.0, 5000.0]),
        "o3col": np.array([250.0, 350.0, 450.0]),
        "albedo": np.array([0.0, 0.5, 1.0]),
    }
    grids = np.meshgrid(*coords.values(), indexing="ij")
    shape_factor = _hybrid_shape(*grids)
    data_vars = {
        channel: (tuple(coords), (i + 1) * 1.0e-5 * shape_factor)
        for i, channel in enumerate(ALL_CHANNELS)
    }
    return xr.Dataset(data_vars, coords=coords)


def _hybrid_shape(sza, alt, o3col, albedo):
    """Multilinear dependence used by the hybrid_library fixture."""
    return (1.0 - sza / 100.0) * (1.0 + alt / 1.0e4) * (1.5 - o3col / 1000.0) * (1.0 + albedo)


@pytest.fixture
def hybrid_shape():
    return _hybrid_shape

@pytest.fixture
def xsqy_library():
    """
    Small cross section x quantum yield library.

    'Jflat' is constant in wavelength; 'Jtemp' depends on temperature;
    'Jtp' on temperature and pressure.
    """
    wavelength = np.array([290.0, 320.0, 350.0, 400.0])
    temperature = np.array([200.0, 300.0])
    pressure = np.array([100.0, 1000.0])
    flat = np.full(wavelength.size, 2.0e-20)
    temp = np.outer(temperature / 300.0, np.full(wavelength.size, 1.0e-20))
    tp = np.einsum("t,p,w->tpw", temperature / 300.0, pressure / 1000.0, np.full(wavelength.size, 1.0e-20))
    return xr.Dataset(
        {
            "Jflat": (("wavelength",), flat),
            "Jtemp": (("temperature", "wavelength"), temp),
            "Jtp": (("temperature", "pressure", "wavelength"), tp),
        },
        coords={"wavelength": wavelength, "temperature": temperature, "pressure": pressure},
    )

