"""Chemical formula representation."""

from __future__ import annotations

import re
from collections import Counter
from functools import cached_property
from typing import Mapping

import numpy
from typing_extensions import Self

from ..core.exceptions import InvalidFormula
from .table import PTABLE

PROTON_MASS = 1.007276466621
"""The proton mass, in Da."""

_CHARGE_REGEX = re.compile(r"^\[(?P<body>.*)\](?P<count>\d*)(?P<sign>[+-])$")
_TOKEN_REGEX = re.compile(r"(?:\((?P<a>\d+)\))?(?P<symbol>[A-Z][a-z]?)(?P<count>-?\d+)?")

IsotopeKey = tuple[str, int | None]
"""An element symbol and an optional mass number. ``None`` denotes the element at natural abundance."""


class Formula:
    """Represent a chemical formula as atom counts plus a charge.

    Formulas are immutable and support addition and subtraction. Two formulas
    are equal if their canonical string representations are equal.

    :param formula: a formula string, e.g. ``"C10H14N5O7P"``. Isotopes are specified by
        prepending the mass number in parentheses, e.g. ``"(13)C2H6O"``. Charged species
        are specified using brackets, e.g. ``"[C10H15N5O7P]+"``. Element counts may be
        negative, e.g. ``"H-2O-1"``. Elements must be available in ``PTABLE``, which covers the
        common organic elements and the metals usually found in adducts, e.g. Na, K, Fe or Zn.
    :raises InvalidFormula: if the string cannot be parsed or contains unknown elements or isotopes

    """

    def __init__(self, formula: str = ""):
        composition, charge = _parse_formula(formula)
        self._composition: dict[IsotopeKey, int] = composition
        self._charge = charge

    @classmethod
    def from_composition(cls, composition: Mapping[IsotopeKey, int], charge: int = 0) -> Self:
        """Create a new formula from atom counts.

        :param composition: a mapping from isotope keys to atom counts
        :param charge: the formula charge

        """
        for symbol, a in composition:
            _check_isotope(symbol, a)
        res = cls.__new__(cls)
        res._composition = {k: v for k, v in composition.items() if v != 0}
        res._charge = charge
        return res

    @property
    def charge(self) -> int:
        """The formula charge."""
        return self._charge

    @property
    def composition(self) -> dict[IsotopeKey, int]:
        """A copy of the formula atom counts."""
        return self._composition.copy()

    def is_empty(self) -> bool:
        """Check if the formula has no atoms and no charge."""
        return not self._composition and not self._charge

    def neutralize(self) -> Formula:
        """Create a copy of the formula with zero charge."""
        return Formula.from_composition(self._composition, charge=0)

    def get_exact_mass(self) -> float:
        """Compute the monoisotopic mass.

        Non-zero charges are modelled as protons added to or removed from the formula.

        """
        if not self._composition:
            return self._charge * PROTON_MASS
        counts = numpy.array(list(self._composition.values()), dtype=float)
        masses = numpy.array([PTABLE.get_isotope(symbol, a).m for symbol, a in self._composition], dtype=float)
        return float(numpy.dot(counts, masses)) + self._charge * PROTON_MASS

    @cached_property
    def _canonical(self) -> str:
        tokens = list()
        for (symbol, a), count in sorted(self._composition.items(), key=lambda x: (x[0][0], x[0][1] or 0)):
            isotope = "" if a is None else f"({a})"
            n = "" if count == 1 else str(count)
            tokens.append(f"{isotope}{symbol}{n}")
        res = "".join(tokens)
        if self._charge:
            n = "" if abs(self._charge) == 1 else str(abs(self._charge))
            sign = "+" if self._charge > 0 else "-"
            res = f"[{res}]{n}{sign}"
        return res

    def __str__(self) -> str:
        return self._canonical

    def __repr__(self) -> str:
        return f"Formula({self._canonical!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Formula):
            return NotImplemented
        return self._canonical == other._canonical

    def __hash__(self) -> int:
        return hash(self._canonical)

    def __add__(self, other: Formula) -> Formula:
        if not isinstance(other, Formula):
            return NotImplemented
        composition = Counter(self._composition)
        for k, v in other._composition.items():
            composition[k] += v
        return Formula.from_composition(composition, charge=self._charge + other._charge)

    def __sub__(self, other: Formula) -> Formula:
        if not isinstance(other, Formula):
            return NotImplemented
        composition = Counter(self._composition)
        for k, v in other._composition.items():
            composition[k] -= v
        return Formula.from_composition(composition, charge=self._charge - other._charge)


def _parse_formula(formula: str) -> tuple[dict[IsotopeKey, int], int]:
    """Convert a formula string into atom counts and charge."""
    formula = formula.strip()
    charge = 0
    match = _CHARGE_REGEX.match(formula)
    if match is not None:
        formula = match.group("body")
        charge = int(match.group("count") or 1)
        if match.group("sign") == "-":
            charge = -charge

    composition: Counter[IsotopeKey] = Counter()
    pos = 0
    while pos < len(formula):
        token = _TOKEN_REGEX.match(formula, pos)
        if token is None:
            raise InvalidFormula(f"Invalid token `{formula[pos:pos + 5]}` in formula `{formula}`.")
        symbol = token.group("symbol")
        a = None if token.group("a") is None else int(token.group("a"))
        _check_isotope(symbol, a, formula)
        count = token.group("count")
        composition[(symbol, a)] += 1 if count is None else int(count)
        pos = token.end()
    return {k: v for k, v in composition.items() if v != 0}, charge


def _check_isotope(symbol: str, a: int | None, formula: str | None = None) -> None:
    context = "" if formula is None else f" in formula `{formula}`"
    if symbol not in PTABLE:
        raise InvalidFormula(f"Unknown element `{symbol}`{context}.")
    if a is not None:
        try:
            PTABLE.get_isotope(symbol, a)
        except KeyError as e:
            raise InvalidFormula(f"Unknown isotope `({a}){symbol}`{context}.") from e
