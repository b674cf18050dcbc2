"""
Tests for the state module.

Tests validation and broadcasting of meteorological inputs.
"""

import logging

import numpy as np
import pytest

from geoschem_j.errors import MissingInput
from geoschem_j.state import ActinicFluxSpectrum, AtmosphericState


class TestAtmosphericState:
    """Tests for AtmosphericState construction."""

    def test_fields_become_float_arrays(self):
        state = AtmosphericState(sza=[0, 30, 60], alt=500)
        assert isinstance(state.sza, np.ndarray)
        assert state.sza.dtype == float
        assert state.alt.shape == ()

    def test_unset_fields_stay_none(self):
        state = AtmosphericState(sza=30.0)
        assert state.alt is None
        assert state.lflux is None

    def test_scalars_broadcast_with_arrays(self):
        state = AtmosphericState(sza=[0.0, 30.0], alt=500.0, o3col=[300.0, 350.0], albedo=0.1)
        assert state.shape == (2,)

    def test_inconsistent_shapes_rejected(self):
        with pytest.raises(ValueError, match="inconsistent shapes"):
            AtmosphericState(sza=[0.0, 30.0, 60.0], alt=[500.0, 600.0])

    def test_inconsistent_shapes_names_fields(self):
        with pytest.raises(ValueError) as excinfo:
            AtmosphericState(sza=np.zeros((2, 3)), o3col=np.zeros(6))
        assert "sza" in str(excinfo.value)
        assert "o3col" in str(excinfo.value)


class TestFromMet:
    """Tests for building a state from legacy Met keys."""

    def test_legacy_keys(self):
        state = AtmosphericState.from_met(
            {"SZA": 30.0, "ALT": 500.0, "O3col": 350.0, "albedo": 0.05, "T": 298.0, "P": 1013.0}
        )
        assert state.sza == 30.0
        assert state.o3col == 350.0
        assert state.temperature == 298.0
        assert state.pressure == 1013.0

    def test_field_names_accepted(self):
        state = AtmosphericState.from_met({"sza": 45.0, "temperature": 250.0})
        assert state.sza == 45.0
        assert state.temperature == 250.0

    def test_other_met_fields_ignored(self):
        """A full Met structure carries fields J-values do not use."""
        state = AtmosphericState.from_met({"SZA": 30.0, "RH": 50.0, "kdil": 1.0e-5, "jcorr": 1.0})
        assert state.sza == 30.0
        assert not hasattr(state, "RH")
        assert state.temperature is None
        assert state.lflux is None

    def test_ignored_fields_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="geoschem_j.state"):
            AtmosphericState.from_met({"SZA": 30.0, "RH": 50.0})
        assert "Ignoring Met field 'RH'" in caplog.text

    def test_constructor_stays_strict(self):
        with pytest.raises(TypeError):
            AtmosphericState(sza=30.0, RH=50.0)

    def test_lflux_passed_through(self):
        state = AtmosphericState.from_met({"LFlux": "flux.txt", "T": 298.0, "P": 1000.0})
        assert state.lflux == "flux.txt"


class TestRequire:
    """Tests for required-field checks."""

    def test_present_fields(self):
        state = AtmosphericState(sza=30.0, alt=500.0)
        state.require("sza", "alt")

    def test_missing_field(self):
        state = AtmosphericState(sza=30.0)
        with pytest.raises(MissingInput) as excinfo:
            state.require("sza", "alt", "o3col", strategy="HYBRID")
        assert excinfo.value.field == "alt"
        assert excinfo.value.strategy == "HYBRID"
        assert "alt" in str(excinfo.value)
        assert "HYBRID" in str(excinfo.value)

    def test_missing_input_is_value_error(self):
        with pytest.raises(ValueError):
            AtmosphericState().require("sza")


class TestBroadcast:
    """Tests for broadcasting fields to a common shape."""

    def test_broadcast_scalars_to_array(self):
        state = AtmosphericState(sza=[0.0, 30.0, 60.0], alt=500.0, o3col=350.0, albedo=0.01)
        sza, alt, o3col, albedo = state.broadcast("sza", "alt", "o3col", "albedo")
        assert alt.shape == (3,)
        np.testing.assert_array_equal(alt, [500.0, 500.0, 500.0])
        np.testing.assert_array_equal(sza, [0.0, 30.0, 60.0])

    def test_broadcast_returns_writable_copies(self):
        state = AtmosphericState(sza=[0.0, 30.0], alt=500.0)
        _, alt = state.broadcast("sza", "alt")
        alt[0] = 0.0
        assert state.alt == 500.0


class TestActinicFluxSpectrum:
    """Tests for actinic flux spectra."""

    def test_valid_spectrum(self):
        spectrum = ActinicFluxSpectrum(wavelength=[300, 310, 320], flux=[1e13, 2e13, 3e13])
        assert spectrum.wavelength.dtype == float
        assert spectrum.flux.shape == (3,)

    def test_per_point_spectra(self):
        spectrum = ActinicFluxSpectrum(wavelength=[300, 310], flux=np.ones((4, 2)))
        assert spectrum.flux.shape == (4, 2)

    def test_mismatched_grid(self):
        with pytest.raises(ValueError, match="does not match"):
            ActinicFluxSpectrum(wavelength=[300, 310, 320], flux=[1.0, 2.0])

    def test_non_increasing_wavelength(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            ActinicFluxSpectrum(wavelength=[300, 300, 320], flux=[1.0, 2.0, 3.0])

    def test_from_file(self, tmp_path):
        path = tmp_path / "flux.txt"
        path.write_text("% wavelength flux\n300 1.0e13\n310 2.0e13\n320 4.0e13\n")
        spectrum = ActinicFluxSpectrum.from_file(path)
        np.testing.assert_array_equal(spectrum.wavelength, [300.0, 310.0, 320.0])
        np.testing.assert_array_equal(spectrum.flux, [1.0e13, 2.0e13, 4.0e13])

    def test_from_file_single_column(self, tmp_path):
        path = tmp_path / "flux.txt"
        path.write_text("300\n310\n320\n")
        with pytest.raises(ValueError, match="two columns"):
            ActinicFluxSpectrum.from_file(path)
