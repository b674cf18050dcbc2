"""
geoschem_j: Photolysis Frequencies for the GEOS-Chem Mechanism
==============================================================

Calculates photolysis rate coefficients (J-values) from meteorological
constraints with one of three methods, then renames the numbered
frequencies to the J-values used by the GEOS-Chem chemical mechanism.

Main Classes
------------
JValueCalculator
    Strategy selection plus renaming to GEOS-Chem J-values.
AtmosphericState
    Meteorological constraints (SZA, altitude, ozone column, albedo,
    temperature, pressure, actinic flux).

Modules
-------
strategy
    Selection among the MCM, BOTTOMUP and HYBRID methods.
mapping
    Table of GEOS-Chem J-values as combinations of numbered channels.
engines
    MCM parameterization, bottom-up integration and hybrid interpolation.
state
    Input containers.
errors
    Exceptions.
constants
    Reference atmosphere, scaling factors and MCM parameters.

Data libraries are not bundled. The hybrid and bottom-up engines read
NetCDF libraries given by the caller, or by default from ``geoschem_j/data/``.

Example
-------
>>> from geoschem_j import EngineSet, geoschem_j
>>> from geoschem_j.engines import ReferenceSpectrumEngine
>>> engines = EngineSet(reference=ReferenceSpectrumEngine("hybrid_j_library.nc"))
>>> J = geoschem_j({"SZA": [0.0, 30.0, 60.0]}, engines=engines)
>>> print(J["JNO2"])
"""

__version__ = "0.1.0"

from geoschem_j.calculator import JValueCalculator, geoschem_j
from geoschem_j.errors import InvalidStrategy, JValueError, MissingInput, UnknownChannel
from geoschem_j.mapping import GEOSCHEM_MAPPING, ChannelMappingEntry, Source, remap
from geoschem_j.state import ActinicFluxSpectrum, AtmosphericState
from geoschem_j.strategy import EngineSet, JMethod, select

__all__ = [
    "JValueCalculator",
    "geoschem_j",
    "AtmosphericState",
    "ActinicFluxSpectrum",
    "EngineSet",
    "JMethod",
    "select",
    "remap",
    "GEOSCHEM_MAPPING",
    "ChannelMappingEntry",
    "Source",
    "JValueError",
    "InvalidStrategy",
    "MissingInput",
    "UnknownChannel",
    "__version__",
]
