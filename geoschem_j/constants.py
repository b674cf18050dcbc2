"""
Constants and configuration values for GEOS-Chem J-value calculations.

This module contains the values used throughout the package, including:

- Photolysis strategy codes and names
- The standard reference atmosphere for hybrid fallback J-values
- Scaling factors for carbonyl nitrate photolysis
- MCM v3.3.1 photolysis parameters
- Default paths for the hybrid and bottom-up data libraries

References
----------
.. [1] Jenkin, M.E., et al. (2015). The MCM v3.3.1 degradation scheme for
       isoprene. Atmos. Chem. Phys., 15:11433-11459.
.. [2] Wolfe, G.M., et al. (2016). The Framework for 0-D Atmospheric
       Modeling (F0AM) v3.1. Geosci. Model Dev., 9:3309-3319.
.. [3] Muller, J.-F., et al. (2014). Carbonyl nitrate photolysis.
       Atmos. Chem. Phys., 14:2497-2508.
"""

from pathlib import Path
from typing import Dict, Tuple

# =============================================================================
# Photolysis Strategies
# =============================================================================

#: Strategy names keyed by their legacy numeric codes
JMETHOD_NAMES: Dict[int, str] = {
    0: "MCM",
    1: "BOTTOMUP",
    2: "HYBRID",
}

#: Strategy used when none is given
DEFAULT_JMETHOD: str = "MCM"

# =============================================================================
# Hybrid Fallback Reference Atmosphere
# =============================================================================
# Species without an MCM analogue use hybrid J-values evaluated for this
# standard atmosphere, not the caller's (Wolfe et al. 2016, Fig. 2).

#: Altitude [m]
HYBRID_FALLBACK_ALT: float = 500.0

#: Overhead ozone column [Dobson Units]
HYBRID_FALLBACK_O3COL: float = 350.0

#: Surface albedo [dimensionless]
HYBRID_FALLBACK_ALBEDO: float = 0.01

# =============================================================================
# Carbonyl Nitrates
# =============================================================================

#: MCM reference channel for carbonyl nitrate photolysis
CARBONYL_NITRATE_CHANNEL: str = "J56"

#: Multipliers on the reference channel, from MCM v3.3.1
CARBONYL_NITRATE_SCALE: Dict[str, float] = {
    "JPROPNN": 1.0,
    "JETHLN": 4.3,
    "JMVKN": 1.6,
    "JMACRN": 10.0,
}

# =============================================================================
# MCM v3.3.1 Photolysis Parameters
# =============================================================================

#: Parameters (l, m, n) for J = l * cos(SZA)**m * exp(-n * sec(SZA)) [s^-1]
MCM_PARAMETERS: Dict[str, Tuple[float, float, float]] = {
    # inorganics
    "J1": (6.073e-05, 1.743, 0.474),   # O3 -> O(1D)
    "J2": (4.775e-04, 0.298, 0.080),   # O3 -> O(3P)
    "J3": (1.041e-05, 0.723, 0.279),   # H2O2
    "J4": (1.165e-02, 0.244, 0.267),   # NO2
    "J5": (2.485e-02, 0.168, 0.108),   # NO3 -> NO + O2
    "J6": (1.747e-01, 0.155, 0.125),   # NO3 -> NO2 + O
    "J7": (2.644e-03, 0.261, 0.288),   # HONO
    "J8": (9.312e-07, 1.230, 0.307),   # HNO3
    # carbonyls
    "J11": (4.642e-05, 0.762, 0.353),  # HCHO -> H + HCO
    "J12": (6.853e-05, 0.477, 0.323),  # HCHO -> H2 + CO
    "J13": (7.344e-06, 1.202, 0.417),  # CH3CHO
    "J14": (2.879e-05, 1.067, 0.358),  # C2H5CHO
    "J15": (2.792e-05, 0.805, 0.338),  # C3H7CHO -> C3H7 + HCO
    "J16": (1.675e-05, 0.805, 0.338),  # C3H7CHO -> C2H4 + CH2CHOH
    "J17": (7.914e-05, 0.764, 0.364),  # IPRCHO
    "J18": (1.482e-06, 0.396, 0.298),  # MACR -> CH2=CCH3 + HCO
    "J19": (1.482e-06, 0.396, 0.298),  # MACR -> CH2=C(CH3)CO + H
    "J20": (7.600e-04, 0.396, 0.298),  # C5HPALD1
    "J21": (7.992e-07, 1.578, 0.271),  # CH3COCH3
    "J22": (5.804e-06, 1.092, 0.377),  # MEK
    "J23": (1.836e-05, 0.395, 0.296),  # MVK -> CH3CH=CH2 + CO
    "J24": (1.836e-05, 0.395, 0.296),  # MVK -> CH3CO + CH2=CH
    # dicarbonyls
    "J31": (6.845e-05, 0.130, 0.201),  # GLYOX -> CO + CO + H2
    "J32": (1.032e-05, 0.130, 0.201),  # GLYOX -> HCO + HCO
    "J33": (3.802e-05, 0.644, 0.312),  # GLYOX -> HCHO + CO
    "J34": (1.537e-04, 0.170, 0.208),  # MGLYOX
    "J35": (3.326e-04, 0.148, 0.215),  # BIACET
    # hydroperoxides
    "J41": (7.649e-06, 0.682, 0.279),  # CH3OOH
    # organic nitrates
    "J51": (1.588e-06, 1.154, 0.318),  # CH3NO3
    "J52": (1.907e-06, 1.244, 0.335),  # C2H5NO3
    "J53": (2.485e-06, 1.196, 0.328),  # NC3H7NO3
    "J54": (4.095e-06, 1.111, 0.316),  # IC3H7NO3
    "J55": (1.135e-05, 0.974, 0.309),  # TC4H9NO3
    "J56": (4.365e-05, 1.089, 0.323),  # NOA
    "J57": (3.363e-06, 1.296, 0.322),  # NOA (second channel)
}

#: Solar zenith angle [degrees] at and beyond which all J-values are zero
SZA_NIGHT: float = 90.0

# =============================================================================
# Data Libraries
# =============================================================================

#: Default directory searched for data libraries (none are bundled)
DATA_DIR = Path(__file__).parent / "data"

#: Default hybrid J-value library, dims (sza, alt, o3col, albedo)
HYBRID_LIBRARY_FILE = DATA_DIR / "hybrid_j_library.nc"

#: Default cross section x quantum yield library, dim wavelength
BOTTOMUP_LIBRARY_FILE = DATA_DIR / "bottomup_xsqy_library.nc"

#: Dimension names expected in the hybrid library
HYBRID_DIMS: Tuple[str, ...] = ("sza", "alt", "o3col", "albedo")
