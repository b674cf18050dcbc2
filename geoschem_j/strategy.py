"""
Selection of the photolysis strategy.

Three strategies are supported, addressable by legacy numeric code or by
name (case-insensitive):

==========  ====  ==============================================  ==========================
Name        Code  Engine(s)                                       Required state fields
==========  ====  ==============================================  ==========================
MCM         0     MCM parameterization + hybrid fallback          sza
BOTTOMUP    1     spectral integration                            lflux, temperature, pressure
HYBRID      2     reference-spectrum interpolation                sza, alt, o3col, albedo
==========  ====  ==============================================  ==========================

:func:`select` returns a primary and an auxiliary set of numbered
J-values. The auxiliary set supplies species with no MCM analogue. For
BOTTOMUP and HYBRID it is the primary set itself.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from geoschem_j import constants
from geoschem_j.engines import (
    MCMParameterization,
    ReferenceSpectrumEngine,
    SpectralIntegrationEngine,
)
from geoschem_j.errors import InvalidStrategy
from geoschem_j.state import AtmosphericState

logger = logging.getLogger(__name__)

RawChannelSet = Dict[str, np.ndarray]


class JMethod(enum.IntEnum):
    """Photolysis strategy."""

    MCM = 0
    BOTTOMUP = 1
    HYBRID = 2

    @classmethod
    def parse(cls, value: Any = None) -> "JMethod":
        """
        Normalize a strategy flag.

        Parameters
        ----------
        value : JMethod, int, str or None
            Numeric code (0, 1, 2) or name ('MCM', 'BOTTOMUP', 'HYBRID') in
            any letter case. None selects the default, MCM.

        Raises
        ------
        InvalidStrategy
            If ``value`` is anything else.
        """
        if value is None:
            return cls[constants.DEFAULT_JMETHOD]
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            if name in cls.__members__:
                return cls[name]
        elif isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_)):
            if int(value) in constants.JMETHOD_NAMES:
                return cls(int(value))
        raise InvalidStrategy(value)


@dataclass
class EngineSet:
    """
    Engines used by :func:`select`.

    Attributes
    ----------
    table : callable
        ``table(sza) -> dict``. MCM parameterization.
    spectral : callable
        ``spectral(lflux, temperature, pressure) -> dict``. Bottom-up
        spectral integration.
    reference : callable
        ``reference(sza, alt, o3col, albedo) -> dict``. Hybrid
        reference-spectrum interpolation.
    """

    table: Callable[..., RawChannelSet] = field(default_factory=MCMParameterization)
    spectral: Callable[..., RawChannelSet] = field(default_factory=SpectralIntegrationEngine)
    reference: Callable[..., RawChannelSet] = field(default_factory=ReferenceSpectrumEngine)


#: State fields required by each strategy
REQUIRED_FIELDS: Dict[JMethod, Tuple[str, ...]] = {
    JMethod.MCM: ("sza",),
    JMethod.BOTTOMUP: ("lflux", "temperature", "pressure"),
    JMethod.HYBRID: ("sza", "alt", "o3col", "albedo"),
}


def hybrid_fallback_inputs(sza: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Standard atmosphere for hybrid J-values used alongside MCM.

    Returns altitude [m], ozone column [DU] and albedo, each filled with the
    fixed reference value and shaped like ``sza``.
    """
    shape = np.shape(sza)
    return (
        np.full(shape, constants.HYBRID_FALLBACK_ALT),
        np.full(shape, constants.HYBRID_FALLBACK_O3COL),
        np.full(shape, constants.HYBRID_FALLBACK_ALBEDO),
    )


def select(
    state: AtmosphericState,
    jmethod: Any = None,
    engines: Optional[EngineSet] = None,
) -> Tuple[RawChannelSet, RawChannelSet]:
    """
    Run the engines for the selected strategy.

    Parameters
    ----------
    state : AtmosphericState
        Meteorological inputs.
    jmethod : JMethod, int, str, optional
        Strategy. Default is 'MCM'.
    engines : EngineSet, optional
        Engines to invoke. Default is ``EngineSet()``.

    Returns
    -------
    primary : dict
        Numbered J-values from the selected strategy.
    auxiliary : dict
        Numbered J-values for species the primary set does not cover. For
        BOTTOMUP and HYBRID this is the same object as ``primary``.

    Raises
    ------
    InvalidStrategy
        If ``jmethod`` is not recognized. No engine is invoked.
    MissingInput
        If ``state`` lacks a field the strategy requires. No engine is
        invoked.

    Notes
    -----
    For MCM the auxiliary set is always evaluated at 500 m altitude, 350 DU
    ozone and 0.01 albedo, whatever alt/o3col/albedo ``state`` holds. This
    matches the derivation of the hybrid fallback values.
    """
    method = JMethod.parse(jmethod)
    state.require(*REQUIRED_FIELDS[method], strategy=method.name)
    if engines is None:
        engines = EngineSet()
    logger.debug(
        "Computing J-values with Jmethod %s (%d) for shape %s",
        method.name, method.value, state.shape,
    )

    if method is JMethod.MCM:
        sza = state.sza
        primary = engines.table(sza)
        alt, o3col, albedo = hybrid_fallback_inputs(sza)
        logger.debug(
            "Hybrid fallback at ALT=%g m, O3col=%g DU, albedo=%g",
            constants.HYBRID_FALLBACK_ALT,
            constants.HYBRID_FALLBACK_O3COL,
            constants.HYBRID_FALLBACK_ALBEDO,
        )
        auxiliary = engines.reference(sza, alt, o3col, albedo)

    elif method is JMethod.BOTTOMUP:
        primary = engines.spectral(state.lflux, state.temperature, state.pressure)
        auxiliary = primary

    else:
        primary = engines.reference(*state.broadcast("sza", "alt", "o3col", "albedo"))
        auxiliary = primary

    return primary, auxiliary
