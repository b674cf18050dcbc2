"""
Renaming of numbered photolysis frequencies to GEOS-Chem J-values.

Each GEOS-Chem J-value is the weighted sum of one or more numbered
channels from either the primary (selected strategy) or auxiliary (hybrid
fallback) result set. The mapping follows the correspondence between the
GEOS-Chem "ratj.d" and "jv_spec.dat" reaction lists and the MCM/hybrid
channel numbering.

:data:`GEOSCHEM_MAPPING` is the table; :func:`remap` applies it.

Notes
-----
MCM considers only the radical channels of CH3CHO (JALD2a) and acetone
(JACETa). The molecular channels (JALD2b, JACETb) come from the hybrid set.

Carbonyl nitrates (JPROPNN, JETHLN, JMVKN, JMACRN) use the MCM v3.3.1
scaling factors on NOA photolysis (J56). GEOS-Chem/FAST-JX instead
computes their cross sections following Muller et al. (2014).

JMVK, JPAN and JMPN lump two product channels. The branching between
products is set in the mechanism's reaction file.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import numpy as np

from geoschem_j.constants import CARBONYL_NITRATE_CHANNEL, CARBONYL_NITRATE_SCALE
from geoschem_j.errors import UnknownChannel

logger = logging.getLogger(__name__)


class Source(enum.Enum):
    """Result set a mapping entry draws from."""

    PRIMARY = "primary"
    AUXILIARY = "auxiliary"


@dataclass(frozen=True)
class ChannelMappingEntry:
    """
    One named J-value as a weighted sum of numbered channels.

    Attributes
    ----------
    output : str
        GEOS-Chem J-value name (e.g. 'JNO2').
    source : Source
        Result set holding the channels.
    terms : tuple of (str, float)
        (channel, coefficient) pairs. Must not be empty.
    """

    output: str
    source: Source
    terms: Tuple[Tuple[str, float], ...]

    def __post_init__(self):
        if not self.terms:
            raise ValueError(f"Mapping entry '{self.output}' has no terms")

    @classmethod
    def identity(cls, output: str, channel: str, source: Source = Source.PRIMARY) -> "ChannelMappingEntry":
        """Entry equal to a single channel."""
        return cls(output, source, ((channel, 1.0),))

    @classmethod
    def summed(cls, output: str, channels: Sequence[str], source: Source = Source.PRIMARY) -> "ChannelMappingEntry":
        """Entry equal to the sum of several channels."""
        return cls(output, source, tuple((channel, 1.0) for channel in channels))

    @classmethod
    def scaled(cls, output: str, channel: str, factor: float, source: Source = Source.PRIMARY) -> "ChannelMappingEntry":
        """Entry equal to one channel times a constant factor."""
        return cls(output, source, ((channel, float(factor)),))

    @property
    def channels(self) -> Tuple[str, ...]:
        """Channels read by this entry, in term order."""
        return tuple(channel for channel, _ in self.terms)

    def evaluate(self, channel_set: Mapping[str, np.ndarray]) -> np.ndarray:
        """
        Weighted sum of this entry's channels.

        Raises
        ------
        UnknownChannel
            If a channel is not in ``channel_set``.
        """
        total = None
        for channel, coefficient in self.terms:
            try:
                value = channel_set[channel]
            except KeyError:
                raise UnknownChannel(channel, self.output, self.source.value) from None
            term = coefficient * np.asarray(value, dtype=float)
            total = term if total is None else total + term
        return np.asarray(total)


_A = Source.AUXILIARY
_entry = ChannelMappingEntry

#: GEOS-Chem J-values in output order
GEOSCHEM_MAPPING: Tuple[ChannelMappingEntry, ...] = (
    _entry.identity("JO1D", "J1"),
    _entry.identity("JH2O2", "J3"),
    _entry.identity("JNO2", "J4"),
    _entry.identity("JNO3_NO", "J5"),
    _entry.identity("JNO3_NO2", "J6"),
    _entry.identity("JHONO", "J7"),
    _entry.identity("JHNO3", "J8"),
    _entry.identity("JHCHO_HO2", "J11"),
    _entry.identity("JHCHO_H2", "J12"),
    _entry.identity("JALD2a", "J13"),
    _entry.identity("JRCHO", "J14"),
    _entry.summed("JMACR", ("J18", "J19")),
    _entry.identity("JHPALD", "J20"),
    _entry.summed("JMVK", ("J23", "J24")),
    _entry.identity("JACETa", "J21"),
    _entry.identity("JMEK", "J22"),
    _entry.summed("JGLYXb", ("J31", "J32")),  # both channels, based on products
    _entry.identity("JGLYXa", "J33"),
    _entry.identity("JMGLY", "J34"),
    _entry.identity("JMP", "J41"),
    _entry.identity("JR4N2", "J51"),
    _entry.identity("JONIT1", "J53"),
    # carbonyl nitrates
    *(
        _entry.scaled(name, CARBONYL_NITRATE_CHANNEL, factor)
        for name, factor in CARBONYL_NITRATE_SCALE.items()
    ),
    # no direct MCM analogues
    _entry.identity("JALD2b", "Jn5", _A),
    _entry.identity("JACETb", "Jn8", _A),
    _entry.identity("JHAC", "Jn10", _A),
    _entry.identity("JGLYC", "Jn9", _A),
    _entry.summed("JHNO4", ("Jn21", "Jn22"), _A),
    _entry.identity("JN2O5_NO2", "Jn19", _A),
    _entry.identity("JN2O5_NO", "Jn20", _A),  # turned off in GEOS-Chem
    _entry.summed("JPAN", ("Jn14", "Jn15"), _A),
    _entry.summed("JMPN", ("Jn16", "Jn17"), _A),
    _entry.identity("JBr2", "Jn24", _A),
    _entry.identity("JBrO", "Jn25", _A),
    _entry.identity("JHOBr", "Jn26", _A),
    _entry.identity("JBrNO2", "Jn27", _A),
    _entry.identity("JBrNO3_Br", "Jn28", _A),
    _entry.identity("JBrNO3_BrO", "Jn29", _A),
    _entry.identity("JCHBr3", "Jn30", _A),
)


def validate_table(table: Iterable[ChannelMappingEntry]) -> None:
    """Raise ValueError if an output name appears more than once."""
    seen = set()
    for entry in table:
        if entry.output in seen:
            raise ValueError(f"Duplicate mapping entry for '{entry.output}'")
        seen.add(entry.output)


def output_names(table: Iterable[ChannelMappingEntry] = GEOSCHEM_MAPPING) -> List[str]:
    """Named J-values produced by ``table``, in order."""
    return [entry.output for entry in table]


def required_channels(
    table: Iterable[ChannelMappingEntry] = GEOSCHEM_MAPPING,
    source: Source = Source.PRIMARY,
) -> List[str]:
    """Distinct channels ``table`` reads from ``source``, in first-use order."""
    channels: Dict[str, None] = {}
    for entry in table:
        if entry.source is source:
            channels.update(dict.fromkeys(entry.channels))
    return list(channels)


def remap(
    primary: Mapping[str, np.ndarray],
    auxiliary: Mapping[str, np.ndarray],
    table: Sequence[ChannelMappingEntry] = GEOSCHEM_MAPPING,
) -> Dict[str, np.ndarray]:
    """
    Build named J-values from numbered channel sets.

    Parameters
    ----------
    primary : mapping
        Channel to J-value from the selected strategy.
    auxiliary : mapping
        Channel to J-value from the hybrid fallback.
    table : sequence of ChannelMappingEntry, optional
        Mapping to apply. Default is :data:`GEOSCHEM_MAPPING`.

    Returns
    -------
    dict
        Named J-value to array [s^-1], in table order. Arrays are new;
        none aliases an input array.

    Raises
    ------
    UnknownChannel
        If an entry needs a channel missing from its source set.
    """
    sets = {Source.PRIMARY: primary, Source.AUXILIARY: auxiliary}
    logger.debug("Remapping %d J-values", len(table))

    J = {}
    for entry in table:
        J[entry.output] = entry.evaluate(sets[entry.source])
    return J


validate_table(GEOSCHEM_MAPPING)
