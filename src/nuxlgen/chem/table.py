"""Element and isotope information."""

from __future__ import annotations

from functools import cached_property

import numpy
import pydantic
from numpy.typing import NDArray


class Isotope(pydantic.BaseModel):
    """Store isotope data."""

    model_config = pydantic.ConfigDict(frozen=True)

    z: pydantic.PositiveInt
    """The atomic number."""

    a: pydantic.PositiveInt
    """The mass number."""

    m: pydantic.PositiveFloat
    """The exact mass, in Da."""

    abundance: float = pydantic.Field(ge=0.0, le=1.0)
    """The natural abundance."""


class Element(pydantic.BaseModel):
    """Store element data.

    Isotope data is stored as numpy arrays sorted by mass number.

    """

    model_config = pydantic.ConfigDict(frozen=True, arbitrary_types_allowed=True)

    symbol: str
    """The element symbol."""

    z: pydantic.PositiveInt
    """The atomic number."""

    a: NDArray[numpy.integer]
    """Mass number of each isotope."""

    m: NDArray[numpy.floating]
    """Exact mass of each isotope."""

    abundance: NDArray[numpy.floating]
    """Natural abundance of each isotope."""

    @cached_property
    def monoisotope(self) -> Isotope:
        """The most abundant isotope."""
        index = int(numpy.argmax(self.abundance))
        return self.get_isotope(int(self.a[index]))

    def get_isotope(self, a: int) -> Isotope:
        """Retrieve an isotope using its mass number.

        :param a: the isotope mass number
        :raises KeyError: if the element does not have an isotope with the provided mass number

        """
        (index,) = numpy.nonzero(self.a == a)
        if not index.size:
            raise KeyError(f"{a}{self.symbol}")
        k = int(index[0])
        return Isotope(z=self.z, a=a, m=float(self.m[k]), abundance=float(self.abundance[k]))


class PeriodicTable:
    """Provide access to element data by symbol."""

    def __init__(self, elements: list[Element]):
        self._elements = {x.symbol: x for x in elements}

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._elements

    def get_element(self, symbol: str) -> Element:
        """Retrieve an element.

        :param symbol: the element symbol
        :raises KeyError: if the symbol is not a known element

        """
        return self._elements[symbol]

    def get_isotope(self, symbol: str, a: int | None = None) -> Isotope:
        """Retrieve an isotope.

        :param symbol: the element symbol
        :param a: the isotope mass number. If ``None``, the most abundant isotope is retrieved.
        :raises KeyError: if the element or isotope is not found

        """
        element = self.get_element(symbol)
        return element.monoisotope if a is None else element.get_isotope(a)

    def list_symbols(self) -> list[str]:
        """List the symbols of all elements in the table."""
        return sorted(self._elements)


def _create_element(symbol: str, z: int, isotopes: list[tuple[int, float, float]]) -> Element:
    a, m, abundance = zip(*sorted(isotopes))
    return Element(
        symbol=symbol,
        z=z,
        a=numpy.array(a, dtype=int),
        m=numpy.array(m, dtype=float),
        abundance=numpy.array(abundance, dtype=float),
    )


# mass number, exact mass, abundance. Masses from AME2016, abundances from IUPAC 2013.
_ELEMENT_DATA: dict[str, tuple[int, list[tuple[int, float, float]]]] = {
    "H": (1, [(1, 1.00782503223, 0.999885), (2, 2.01410177812, 0.000115)]),
    "Li": (3, [(6, 6.0151228874, 0.0759), (7, 7.0160034366, 0.9241)]),
    "B": (5, [(10, 10.01293695, 0.199), (11, 11.00930536, 0.801)]),
    "C": (6, [(12, 12.0, 0.9893), (13, 13.00335483507, 0.0107)]),
    "N": (7, [(14, 14.00307400443, 0.99636), (15, 15.00010889888, 0.00364)]),
    "O": (8, [(16, 15.99491461957, 0.99757), (17, 16.99913175650, 0.00038), (18, 17.99915961286, 0.00205)]),
    "F": (9, [(19, 18.99840316273, 1.0)]),
    "Na": (11, [(23, 22.9897692820, 1.0)]),
    "Mg": (12, [(24, 23.985041697, 0.7899), (25, 24.985836976, 0.1000), (26, 25.982592968, 0.1101)]),
    "Si": (14, [(28, 27.97692653465, 0.92223), (29, 28.9764946649, 0.04685), (30, 29.973770136, 0.03092)]),
    "P": (15, [(31, 30.97376199842, 1.0)]),
    "S": (
        16,
        [(32, 31.9720711744, 0.9499), (33, 32.9714589098, 0.0075), (34, 33.967867004, 0.0425), (36, 35.96708071, 0.0001)],
    ),
    "Cl": (17, [(35, 34.968852682, 0.7576), (37, 36.965902602, 0.2424)]),
    "K": (19, [(39, 38.9637064864, 0.932581), (40, 39.963998166, 0.000117), (41, 40.9618252579, 0.067302)]),
    "Ca": (
        20,
        [
            (40, 39.962590863, 0.96941),
            (42, 41.95861783, 0.00647),
            (43, 42.95876644, 0.00135),
            (44, 43.9554816, 0.02086),
            (46, 45.953689, 0.00004),
            (48, 47.95252276, 0.00187),
        ],
    ),
    "Mn": (25, [(55, 54.93804391, 1.0)]),
    "Fe": (
        26,
        [(54, 53.93960899, 0.05845), (56, 55.93493633, 0.91754), (57, 56.93539284, 0.02119), (58, 57.93327443, 0.00282)],
    ),
    "Co": (27, [(59, 58.93319429, 1.0)]),
    "Ni": (
        28,
        [
            (58, 57.93534241, 0.68077),
            (60, 59.93078588, 0.26223),
            (61, 60.93105557, 0.011399),
            (62, 61.92834537, 0.036346),
            (64, 63.92796682, 0.009255),
        ],
    ),
    "Cu": (29, [(63, 62.92959772, 0.6915), (65, 64.9277897, 0.3085)]),
    "Zn": (
        30,
        [
            (64, 63.92914201, 0.4917),
            (66, 65.92603381, 0.2773),
            (67, 66.92712775, 0.0404),
            (68, 67.92484455, 0.1845),
            (70, 69.9253192, 0.0061),
        ],
    ),
    "As": (33, [(75, 74.92159457, 1.0)]),
    "Se": (
        34,
        [
            (74, 73.922475934, 0.0089),
            (76, 75.919213704, 0.0937),
            (77, 76.919914154, 0.0763),
            (78, 77.91730928, 0.2377),
            (80, 79.9165218, 0.4961),
            (82, 81.9166995, 0.0873),
        ],
    ),
    "Br": (35, [(79, 78.9183376, 0.5069), (81, 80.9162897, 0.4931)]),
    "I": (53, [(127, 126.9044719, 1.0)]),
}

PTABLE = PeriodicTable([_create_element(k, z, isotopes) for k, (z, isotopes) in _ELEMENT_DATA.items()])
