"""Chemistry utilities.

Provides:

- a formula object to compute the exact mass of molecular formulas and to combine them.
- a periodic table with element and isotope information.

Constants
---------
- PROTON_MASS : the proton mass
- PTABLE : a periodic table instance.

"""

from .formula import PROTON_MASS, Formula
from .table import PTABLE, Element, Isotope, PeriodicTable

__all__ = [
    "PROTON_MASS",
    "PTABLE",
    "Element",
    "Formula",
    "Isotope",
    "PeriodicTable",
]
