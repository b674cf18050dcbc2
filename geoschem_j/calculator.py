"""
GEOS-Chem J-value calculation.

Combines strategy selection (:mod:`geoschem_j.strategy`) with channel
renaming (:mod:`geoschem_j.mapping`) to turn meteorological constraints
into named photolysis frequencies for the GEOS-Chem mechanism.

Calls are independent. Nothing is cached between them except the engines'
data libraries, which are read-only once loaded. Batches may therefore be
processed in parallel with separate calls.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import numpy as np

from geoschem_j.mapping import (
    GEOSCHEM_MAPPING,
    ChannelMappingEntry,
    output_names,
    remap,
    validate_table,
)
from geoschem_j.state import AtmosphericState
from geoschem_j.strategy import EngineSet, JMethod, select

logger = logging.getLogger(__name__)

StateLike = Union[AtmosphericState, Mapping[str, Any]]


class JValueCalculator:
    """
    Photolysis frequencies for GEOS-Chem.

    Parameters
    ----------
    engines : EngineSet, optional
        Engines producing numbered J-values. Default is ``EngineSet()``,
        which reads its data libraries from ``geoschem_j/data/``.
    table : sequence of ChannelMappingEntry, optional
        Channel mapping. Default is
        :data:`geoschem_j.mapping.GEOSCHEM_MAPPING`.

    Examples
    --------
    >>> from geoschem_j import AtmosphericState, EngineSet, JValueCalculator
    >>> from geoschem_j.engines import ReferenceSpectrumEngine
    >>> calc = JValueCalculator(EngineSet(reference=ReferenceSpectrumEngine("hybrid_j_library.nc")))
    >>> J = calc.compute(AtmosphericState(sza=[0.0, 30.0, 60.0]), "MCM")
    >>> J["JNO2"]
    """

    def __init__(
        self,
        engines: Optional[EngineSet] = None,
        table: Sequence[ChannelMappingEntry] = GEOSCHEM_MAPPING,
    ):
        self.engines = engines if engines is not None else EngineSet()
        self.table = tuple(table)
        validate_table(self.table)

    @property
    def outputs(self):
        """Named J-values returned by :meth:`compute`, in order."""
        return output_names(self.table)

    def compute(self, state: StateLike, jmethod: Any = None) -> Dict[str, np.ndarray]:
        """
        Calculate named J-values.

        Parameters
        ----------
        state : AtmosphericState or mapping
            Meteorological constraints. A mapping is read with
            :meth:`AtmosphericState.from_met` (keys 'SZA', 'ALT', 'O3col',
            'albedo', 'T', 'P', 'LFlux').
        jmethod : JMethod, int or str, optional
            0 or 'MCM' (default): MCM v3.3.1 parameterization, with hybrid
            values for species MCM does not include. Requires SZA.
            1 or 'BOTTOMUP': bottom-up integration of cross sections and
            quantum yields. Requires LFlux, T, P.
            2 or 'HYBRID': interpolation of hybrid J-values. Requires SZA,
            ALT, O3col, albedo.

        Returns
        -------
        dict
            Named J-value [s^-1] for every entry of the mapping table.

        Raises
        ------
        InvalidStrategy
            If ``jmethod`` is not recognized.
        MissingInput
            If a required state field is absent.
        UnknownChannel
            If an engine did not produce a channel the table needs.
        """
        if not isinstance(state, AtmosphericState):
            state = AtmosphericState.from_met(state)
        method = JMethod.parse(jmethod)

        primary, auxiliary = select(state, method, self.engines)
        J = remap(primary, auxiliary, self.table)
        logger.debug("Computed %d J-values with Jmethod %s", len(J), method.name)
        return J


def geoschem_j(met: StateLike, jmethod: Any = None, engines: Optional[EngineSet] = None) -> Dict[str, np.ndarray]:
    """
    Calculate photolysis frequencies for GEOS-Chem.

    Shortcut for ``JValueCalculator(engines).compute(met, jmethod)``.
    """
    return JValueCalculator(engines).compute(met, jmethod)
