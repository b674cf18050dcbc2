"""
Atmospheric state inputs for J-value calculations.

Each strategy needs a different subset of the inputs (see
:mod:`geoschem_j.strategy`). All array-valued fields supplied together must
share one shape; scalars are broadcast.
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Tuple, Union

import numpy as np

from geoschem_j.errors import MissingInput

logger = logging.getLogger(__name__)

#: Legacy Met structure keys and the AtmosphericState fields they fill
MET_KEYS = {
    "SZA": "sza",
    "ALT": "alt",
    "O3col": "o3col",
    "albedo": "albedo",
    "T": "temperature",
    "P": "pressure",
    "LFlux": "lflux",
}

_NUMERIC_FIELDS = ("sza", "alt", "o3col", "albedo", "temperature", "pressure")


@dataclass
class ActinicFluxSpectrum:
    """
    Wavelength-resolved actinic flux.

    Attributes
    ----------
    wavelength : ndarray
        Wavelength grid [nm], strictly increasing, shape (n_wl,).
    flux : ndarray
        Spectral actinic flux [photons cm^-2 s^-1 nm^-1]. Shape (n_wl,) for
        a single spectrum or (n_points, n_wl) for one spectrum per point.
    """

    wavelength: np.ndarray
    flux: np.ndarray

    def __post_init__(self):
        self.wavelength = np.asarray(self.wavelength, dtype=float)
        self.flux = np.asarray(self.flux, dtype=float)
        if self.wavelength.ndim != 1:
            raise ValueError("wavelength must be one-dimensional")
        if self.flux.shape[-1] != self.wavelength.size:
            raise ValueError(
                f"flux last dimension ({self.flux.shape[-1]}) does not match "
                f"wavelength grid ({self.wavelength.size})"
            )
        if np.any(np.diff(self.wavelength) <= 0):
            raise ValueError("wavelength must be strictly increasing")

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike]) -> "ActinicFluxSpectrum":
        """
        Read a two-column (wavelength, flux) text file.

        Lines starting with '%' or '#' are treated as comments.
        """
        data = np.loadtxt(path, comments=("%", "#"))
        if data.ndim != 2 or data.shape[1] < 2:
            raise ValueError(f"Expected two columns in actinic flux file {path}")
        return cls(wavelength=data[:, 0], flux=data[:, 1])


@dataclass
class AtmosphericState:
    """
    Meteorological constraints for one batch of model points.

    Attributes
    ----------
    sza : float or ndarray, optional
        Solar zenith angle [degrees].
    alt : float or ndarray, optional
        Altitude [m].
    o3col : float or ndarray, optional
        Overhead ozone column [Dobson Units].
    albedo : float or ndarray, optional
        Surface reflectance, 0-1 [dimensionless].
    temperature : float or ndarray, optional
        Temperature [K].
    pressure : float or ndarray, optional
        Pressure [mbar].
    lflux : ActinicFluxSpectrum, str or path, optional
        Actinic flux spectrum, or a path to a two-column text file.

    Raises
    ------
    ValueError
        If two array fields have different, non-scalar shapes.
    """

    sza: Optional[Union[float, np.ndarray]] = None
    alt: Optional[Union[float, np.ndarray]] = None
    o3col: Optional[Union[float, np.ndarray]] = None
    albedo: Optional[Union[float, np.ndarray]] = None
    temperature: Optional[Union[float, np.ndarray]] = None
    pressure: Optional[Union[float, np.ndarray]] = None
    lflux: Optional[Union[ActinicFluxSpectrum, str, os.PathLike]] = None

    def __post_init__(self):
        shapes = {}
        for name in _NUMERIC_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            value = np.asarray(value, dtype=float)
            setattr(self, name, value)
            if value.ndim > 0:
                shapes[name] = value.shape

        if len(set(shapes.values())) > 1:
            detail = ", ".join(f"{k}{v}" for k, v in shapes.items())
            raise ValueError(f"AtmosphericState fields have inconsistent shapes: {detail}")

    @classmethod
    def from_met(cls, met: Mapping[str, Any]) -> "AtmosphericState":
        """
        Build a state from a legacy Met mapping.

        Parameters
        ----------
        met : mapping
            Keys among 'SZA', 'ALT', 'O3col', 'albedo', 'T', 'P', 'LFlux'.
            The snake_case field names are accepted as well. Other keys
            of a full Met structure (RH, kdil, ...) are ignored.
        """
        valid = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in met.items():
            name = MET_KEYS.get(key, key)
            if name not in valid:
                logger.debug("Ignoring Met field '%s'", key)
                continue
            kwargs[name] = value
        return cls(**kwargs)

    @property
    def shape(self) -> Tuple[int, ...]:
        """Common shape of the supplied numeric fields."""
        return np.broadcast_shapes(
            *(getattr(self, name).shape for name in _NUMERIC_FIELDS
              if getattr(self, name) is not None)
        )

    def require(self, *names: str, strategy: Optional[str] = None) -> None:
        """Raise MissingInput for the first of ``names`` that is not set."""
        for name in names:
            if getattr(self, name) is None:
                raise MissingInput(name, strategy)

    def broadcast(self, *names: str) -> Tuple[np.ndarray, ...]:
        """Return the named fields as float arrays of their common shape."""
        values = [getattr(self, name) for name in names]
        shape = np.broadcast_shapes(*(v.shape for v in values))
        return tuple(np.broadcast_to(v, shape).copy() for v in values)
