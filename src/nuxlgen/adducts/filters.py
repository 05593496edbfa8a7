"""Remove nucleotide combinations that violate cross-linking restrictions."""

from __future__ import annotations

from logging import getLogger
from typing import Collection, Sequence

import pydantic

from .combinations import AmbiguityMap
from .sequences import not_in_sequence

logger = getLogger(__name__)


def get_nucleotide_composition(nucleotide_style: str) -> str:
    """Get the sorted nucleotides of a nucleotide-style string, e.g. ``"UA-H2O"`` -> ``"AU"``."""
    return "".join(sorted(strip_modifications(nucleotide_style)))


def strip_modifications(nucleotide_style: str) -> str:
    """Remove additive and subtractive formulas from a nucleotide-style string, e.g. ``"UA-H2O"`` -> ``"UA"``."""
    positions = [p for p in (nucleotide_style.find("-"), nucleotide_style.find("+")) if p != -1]
    return nucleotide_style[: min(positions)] if positions else nucleotide_style


def sort_nucleotides(nucleotide_style: str) -> str:
    """Sort the nucleotides of a nucleotide-style string, keeping modifications, e.g. ``"UA-H2O"`` -> ``"AU-H2O"``."""
    nucleotides = strip_modifications(nucleotide_style)
    return "".join(sorted(nucleotides)) + nucleotide_style[len(nucleotides) :]


class RestrictionFilter(pydantic.BaseModel):
    """Check nucleotide-style strings against cross-linking restrictions.

    A nucleotide-style string is rejected if its nucleotide composition:

    1. contains two or more lower-case nucleotides, which must always be cross-linked.
    2. does not contain a cross-linkable nucleotide.
    3. is longer than the maximum chain length.
    4. contains nucleotides from more than one nucleotide group, e.g. from RNA and DNA.
    5. is not found, in any order, in at least one of the target sequences.
    6. was already accepted with the same mass.

    """

    can_cross_link: set[str]
    """Nucleotides that can be cross-linked."""

    nucleotide_groups: list[str] = list()
    """Groups of nucleotides that can not be mixed in a chain."""

    target_sequences: list[str] = list()
    """The allowed nucleotide sequences."""

    max_length: pydantic.PositiveInt = 1
    """The maximum number of nucleotides in a chain."""

    def check(self, composition: str) -> str | None:
        """Check a sorted nucleotide composition against restrictions 1-5.

        :param composition: the sorted nucleotides of a nucleotide-style string
        :return: a description of the violated restriction or ``None`` if no restriction is violated.

        """
        if sum(c.islower() for c in composition) >= 2:
            return "multiple mandatory cross-linked nucleotides"

        if not any(c in self.can_cross_link for c in composition):
            return "no cross-linkable nucleotide"

        if len(composition) > self.max_length:
            return "maximum length exceeded"

        if sum(any(c in group for c in composition) for group in self.nucleotide_groups) > 1:
            return "multiple nucleotide groups"

        if all(not_in_sequence(seq, composition) for seq in self.target_sequences):
            return "not contained in target sequences"

        return None

    def apply(
        self, formula_to_mass: dict[str, float], ambiguities: AmbiguityMap
    ) -> tuple[dict[str, float], AmbiguityMap]:
        """Filter formulas and their nucleotide-style strings.

        Formulas are processed in sorted order, and their nucleotide-style strings also in sorted
        order. This order defines which nucleotide-style string is kept when the same composition
        and mass is found multiple times.

        :param formula_to_mass: map formula strings to monoisotopic mass.
        :param ambiguities: map formula strings to nucleotide-style strings.
        :return: new mappings without the rejected nucleotide-style strings. Formulas without
            nucleotide-style strings are removed from both mappings.

        """
        accepted: set[tuple[str, float]] = set()
        filtered_mass: dict[str, float] = dict()
        filtered_ambiguities: AmbiguityMap = dict()
        for formula in sorted(formula_to_mass):
            mass = formula_to_mass[formula]
            for nucleotide_style in sorted(ambiguities.get(formula, set())):
                composition = get_nucleotide_composition(nucleotide_style)
                reason = self.check(composition)
                if reason is None and (composition, mass) in accepted:
                    reason = "duplicated composition and mass"

                if reason is not None:
                    logger.debug(f"filtered sequence: {formula}\t{nucleotide_style} ({reason})")
                    continue

                accepted.add((composition, mass))
                filtered_ambiguities.setdefault(formula, set()).add(nucleotide_style)
                filtered_mass[formula] = mass
        return filtered_mass, filtered_ambiguities


def filter_combinations(
    formula_to_mass: dict[str, float],
    ambiguities: AmbiguityMap,
    can_cross_link: Collection[str],
    nucleotide_groups: Sequence[str],
    target_sequences: Sequence[str],
    max_length: int,
) -> tuple[dict[str, float], AmbiguityMap]:
    """Remove nucleotide-style strings that violate cross-linking restrictions.

    Refer to :py:class:`RestrictionFilter` for a description of the restrictions.

    """
    logger.info("Filtering on restrictions... ")
    restriction_filter = RestrictionFilter(
        can_cross_link=set(can_cross_link),
        nucleotide_groups=list(nucleotide_groups),
        target_sequences=list(target_sequences),
        max_length=max_length,
    )
    return restriction_filter.apply(formula_to_mass, ambiguities)
