"""NuXLGen core data models."""

from __future__ import annotations

import pydantic
from typing_extensions import Self

from ..chem import Formula
from .enums import ModificationSign


class ModificationSubFormula(pydantic.BaseModel):
    """Store a formula added to or subtracted from a nucleotide, e.g. ``-H2O``."""

    model_config = pydantic.ConfigDict(frozen=True, arbitrary_types_allowed=True)

    formula: Formula
    """The sub-formula. Always neutral."""

    sign: ModificationSign = ModificationSign.ADDITIVE
    """Defines if the sub-formula is added or subtracted."""

    @property
    def is_subtractive(self) -> bool:
        """``True`` if the sub-formula is removed from the nucleotide."""
        return self.sign is ModificationSign.SUBTRACTIVE

    def apply(self, formula: Formula) -> Formula:
        """Apply the modification to a formula.

        :param formula: the formula to modify
        :return: a new formula

        """
        return formula - self.formula if self.is_subtractive else formula + self.formula

    def to_str(self) -> str:
        """Create the signed representation of the sub-formula, e.g. ``"-H2O"``."""
        return f"{self.sign.value}{self.formula}"


NucleotideModification = list[ModificationSubFormula]
"""An ordered list of sub-formulas applied to a nucleotide."""


class AdductMassesResult(pydantic.BaseModel):
    """Store the precursor adducts generated from nucleotide combinations.

    Both mappings are keyed by canonical formula strings and always share the same keys.

    """

    model_config = pydantic.ConfigDict(frozen=True)

    formula_to_mass: dict[str, float] = dict()
    """Map adduct formulas to their monoisotopic mass."""

    formula_to_nucleotides: dict[str, frozenset[str]] = dict()
    """Map adduct formulas to the (ambiguous) nucleotide-style strings that generate them, e.g. ``"AU-H2O"``."""

    @pydantic.model_validator(mode="after")
    def _check_synchronized_keys(self) -> Self:
        if self.formula_to_mass.keys() != self.formula_to_nucleotides.keys():
            msg = "Formula to mass and formula to nucleotides mappings must contain the same formulas."
            raise ValueError(msg)
        empty = [k for k, v in self.formula_to_nucleotides.items() if not v]
        if empty:
            raise ValueError(f"Formulas without nucleotide-style strings: {', '.join(empty)}.")
        return self

    def __len__(self) -> int:
        return len(self.formula_to_mass)

    def __contains__(self, formula: object) -> bool:
        return str(formula) in self.formula_to_mass

    def list_formulas(self) -> list[str]:
        """List adduct formulas in canonical string order."""
        return sorted(self.formula_to_mass)

    def get_mass(self, formula: str | Formula) -> float:
        """Retrieve the monoisotopic mass of an adduct.

        :param formula: the adduct formula
        :raises KeyError: if the formula is not in the result

        """
        return self.formula_to_mass[str(formula)]

    def get_nucleotides(self, formula: str | Formula) -> frozenset[str]:
        """Retrieve the nucleotide-style strings of an adduct.

        :param formula: the adduct formula
        :raises KeyError: if the formula is not in the result

        """
        return self.formula_to_nucleotides[str(formula)]
