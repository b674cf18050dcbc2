"""
Engines producing numbered photolysis frequencies.

Each engine returns a dictionary mapping a numbered channel (e.g. "J4",
"Jn14") to an array of J-values [s^-1]. The numbered channels are renamed
to GEOS-Chem species by :mod:`geoschem_j.mapping`.

Three engines are provided:

- :class:`MCMParameterization`: MCM v3.3.1 parameterization in solar zenith
  angle only (Jenkin et al. 2015).
- :class:`SpectralIntegrationEngine`: bottom-up integration of cross
  section x quantum yield x actinic flux over wavelength.
- :class:`ReferenceSpectrumEngine`: interpolation of hybrid J-values
  precomputed for a library of reference atmospheres (Wolfe et al. 2016).

The data libraries for the last two are NetCDF files read with xarray, or
``xarray.Dataset`` objects built by the caller.

References
----------
.. [1] Jenkin, M.E., et al. (2015), Atmos. Chem. Phys., 15:11433-11459.
.. [2] Wolfe, G.M., et al. (2016), Geosci. Model Dev., 9:3309-3319.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple, Union

import numpy as np
import xarray as xr

from geoschem_j.constants import (
    BOTTOMUP_LIBRARY_FILE,
    HYBRID_DIMS,
    HYBRID_LIBRARY_FILE,
    MCM_PARAMETERS,
    SZA_NIGHT,
)
from geoschem_j.state import ActinicFluxSpectrum

logger = logging.getLogger(__name__)

LibrarySource = Optional[Union[xr.Dataset, str, os.PathLike]]


def _open_library(path: Path, kind: str) -> xr.Dataset:
    """Load a NetCDF library fully into memory."""
    if not path.exists():
        raise FileNotFoundError(
            f"{kind} library not found: {path}\n"
            "Pass an xarray.Dataset or the path of a NetCDF library to the engine."
        )
    logger.debug("Loading %s library from %s", kind, path)
    ds = xr.open_dataset(path)
    library = ds.load()
    ds.close()
    return library


class _LibraryEngine:
    """Lazy loading of an xarray data library."""

    KIND = ""
    DEFAULT_FILE: Path = Path()

    def __init__(self, library: LibrarySource = None):
        if isinstance(library, xr.Dataset):
            self.path = None
            self._library = library
        else:
            self.path = Path(library) if library is not None else self.DEFAULT_FILE
            self._library = None

    @property
    def library(self) -> xr.Dataset:
        """The data library, loaded on first access."""
        if self._library is None:
            self._library = _open_library(self.path, self.KIND)
        return self._library

    @property
    def channels(self) -> Tuple[str, ...]:
        """Channel identifiers this engine produces."""
        return tuple(str(name) for name in self.library.data_vars)


class MCMParameterization:
    """
    MCM v3.3.1 photolysis parameterization.

    J = l * cos(SZA)**m * exp(-n * sec(SZA)), and J = 0 for SZA >= 90 deg.

    Parameters
    ----------
    parameters : mapping, optional
        Channel to (l, m, n). Defaults to
        :data:`geoschem_j.constants.MCM_PARAMETERS`.
    """

    def __init__(self, parameters: Optional[Mapping[str, Tuple[float, float, float]]] = None):
        self.parameters = dict(MCM_PARAMETERS if parameters is None else parameters)

    @property
    def channels(self) -> Tuple[str, ...]:
        return tuple(self.parameters)

    def __call__(self, sza: Union[float, np.ndarray]) -> Dict[str, np.ndarray]:
        """
        Evaluate all channels.

        Parameters
        ----------
        sza : float or array_like
            Solar zenith angle [degrees].

        Returns
        -------
        dict
            Channel to J-value [s^-1], each shaped like ``sza``.
        """
        sza = np.asarray(sza, dtype=float)
        day = sza < SZA_NIGHT
        # cos(SZA) is replaced at night so sec(SZA) stays finite
        cos_sza = np.where(day, np.cos(np.deg2rad(sza)), 1.0)
        sec_sza = 1.0 / cos_sza

        J = {}
        for channel, (l, m, n) in self.parameters.items():
            J[channel] = np.where(day, l * cos_sza**m * np.exp(-n * sec_sza), 0.0)
        return J


class ReferenceSpectrumEngine(_LibraryEngine):
    """
    Hybrid J-values interpolated from a reference-atmosphere library.

    The library is an ``xarray.Dataset`` with coordinates ``sza`` [deg],
    ``alt`` [m], ``o3col`` [DU] and ``albedo``, each with at least two
    points, and one data variable per channel over those dimensions.

    Inputs outside the library grid are clipped to its edges. Points with
    SZA >= 90 deg give zero.

    Parameters
    ----------
    library : xarray.Dataset, str or path, optional
        Library or NetCDF file. Defaults to
        :data:`geoschem_j.constants.HYBRID_LIBRARY_FILE`.
    """

    KIND = "Hybrid J-value"
    DEFAULT_FILE = HYBRID_LIBRARY_FILE

    def __call__(
        self,
        sza: Union[float, np.ndarray],
        alt: Union[float, np.ndarray],
        o3col: Union[float, np.ndarray],
        albedo: Union[float, np.ndarray],
    ) -> Dict[str, np.ndarray]:
        """
        Interpolate all channels.

        Parameters
        ----------
        sza : float or array_like
            Solar zenith angle [degrees].
        alt : float or array_like
            Altitude [m].
        o3col : float or array_like
            Overhead ozone column [DU].
        albedo : float or array_like
            Surface albedo.

        Returns
        -------
        dict
            Channel to J-value [s^-1], each with the broadcast input shape.
        """
        inputs = np.broadcast_arrays(
            *(np.asarray(v, dtype=float) for v in (sza, alt, o3col, albedo))
        )
        shape = inputs[0].shape
        ds = self.library

        points = {}
        for dim, values in zip(HYBRID_DIMS, inputs):
            grid = ds[dim].values
            clipped = np.clip(values.ravel(), grid.min(), grid.max())
            points[dim] = xr.DataArray(clipped, dims="points")
        interp = ds.interp(points, method="linear")

        day = inputs[0].ravel() < SZA_NIGHT
        J = {}
        for name in ds.data_vars:
            values = np.clip(interp[name].values, 0.0, None)
            J[str(name)] = np.where(day, values, 0.0).reshape(shape)
        return J


class SpectralIntegrationEngine(_LibraryEngine):
    """
    Bottom-up J-values from cross sections, quantum yields and actinic flux.

    For each channel, J = integral of sigma*phi(lambda, T, P) * F(lambda)
    over wavelength (trapezoid rule on the flux grid).

    The library is an ``xarray.Dataset`` with a ``wavelength`` coordinate
    [nm] and one data variable per channel holding the product of cross
    section [cm^2] and quantum yield. A variable may also depend on
    ``temperature`` [K] and/or ``pressure`` [mbar]; these are interpolated
    at the requested T and P, clipped to the tabulated range. The product
    is zero outside the tabulated wavelengths.

    Parameters
    ----------
    library : xarray.Dataset, str or path, optional
        Library or NetCDF file. Defaults to
        :data:`geoschem_j.constants.BOTTOMUP_LIBRARY_FILE`.
    """

    KIND = "Cross section x quantum yield"
    DEFAULT_FILE = BOTTOMUP_LIBRARY_FILE

    def __call__(
        self,
        lflux: Union[ActinicFluxSpectrum, str, os.PathLike],
        temperature: Union[float, np.ndarray],
        pressure: Union[float, np.ndarray],
    ) -> Dict[str, np.ndarray]:
        """
        Integrate all channels over the actinic flux spectrum.

        Parameters
        ----------
        lflux : ActinicFluxSpectrum, str or path
            Actinic flux [photons cm^-2 s^-1 nm^-1], or a two-column text
            file of wavelength [nm] and flux.
        temperature : float or array_like
            Temperature [K].
        pressure : float or array_like
            Pressure [mbar].

        Returns
        -------
        dict
            Channel to J-value [s^-1], shaped like the broadcast of
            temperature, pressure and the leading flux dimensions.
        """
        if isinstance(lflux, ActinicFluxSpectrum):
            spectrum = lflux
        else:
            spectrum = ActinicFluxSpectrum.from_file(lflux)

        temperature = np.asarray(temperature, dtype=float)
        pressure = np.asarray(pressure, dtype=float)
        wavelength = spectrum.wavelength
        shape = np.broadcast_shapes(
            temperature.shape, pressure.shape, spectrum.flux.shape[:-1]
        )
        npts = int(np.prod(shape))

        T = np.broadcast_to(temperature, shape).ravel()
        P = np.broadcast_to(pressure, shape).ravel()
        flux = np.broadcast_to(spectrum.flux, shape + (wavelength.size,))
        flux = flux.reshape(npts, wavelength.size)

        J = {}
        for name, xsqy in self.library.data_vars.items():
            product = self._interp_xsqy(xsqy, wavelength, T, P)
            J[str(name)] = np.trapezoid(product * flux, wavelength, axis=-1).reshape(shape)
        return J

    @staticmethod
    def _interp_xsqy(
        xsqy: xr.DataArray,
        wavelength: np.ndarray,
        temperature: np.ndarray,
        pressure: np.ndarray,
    ) -> np.ndarray:
        """Cross section x quantum yield on the flux grid, shape (npts or 1, n_wl)."""
        coords = {"wavelength": xr.DataArray(wavelength, dims="wl")}
        for dim, values in (("temperature", temperature), ("pressure", pressure)):
            if dim in xsqy.dims:
                grid = xsqy[dim].values
                coords[dim] = xr.DataArray(np.clip(values, grid.min(), grid.max()), dims="points")

        interp = xsqy.interp(coords, method="linear")
        if "points" in interp.dims:
            values = interp.transpose("points", "wl").values
        else:
            values = interp.values[np.newaxis, :]
        # Outside the tabulated wavelengths
        return np.nan_to_num(values, nan=0.0)
