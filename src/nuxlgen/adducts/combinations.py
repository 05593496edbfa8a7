"""Generate nucleotide adduct formulas.

Single nucleotides are combined with their modifications, e.g. ``"U"`` -> ``"U"``, ``"U-H2O"``.
Chains are then built by prepending unmodified nucleotides, removing one water molecule for each
bond. Thus, at most one nucleotide in a chain carries a modification.

Each adduct formula keeps the set of nucleotide-style strings that generate it. Different
nucleotide orderings or compositions may result in the same formula, e.g. ``"AU"`` and ``"UA"``.

"""

from __future__ import annotations

from logging import getLogger

from ..chem import Formula
from .modifications import NucleotideModifications

logger = getLogger(__name__)

WATER = Formula("H2O")

AmbiguityMap = dict[str, set[str]]
"""Map formula strings to nucleotide-style strings."""


def combine_modified_nucleotides(
    nucleotide_formulas: dict[str, Formula], modifications: NucleotideModifications
) -> tuple[list[Formula], AmbiguityMap]:
    """Apply modifications to each nucleotide.

    If two modifications of the same nucleotide result in the same formula, only the first one is
    kept. The unmodified nucleotide is included after all modifications, unless one of them
    already produced the same formula, e.g. ``"U:"`` or ``"U:+H2O-H2O"``.

    :param nucleotide_formulas: map nucleotides to their formula.
    :param modifications: the modifications of each nucleotide.
    :return: the list of modified nucleotide formulas and the nucleotide-style strings of each formula.

    """
    for nucleotide in modifications:
        if nucleotide not in nucleotide_formulas:
            logger.warning(f"Modifications specified for unknown nucleotide `{nucleotide}` will be ignored.")

    combinations: list[Formula] = list()
    ambiguities: AmbiguityMap = dict()
    for nucleotide, nucleotide_formula in nucleotide_formulas.items():
        logger.info(f"nucleotide: {nucleotide}")
        seen = set()
        for modification in [*modifications.get(nucleotide, list()), list()]:
            formula = nucleotide_formula
            nucleotide_style = nucleotide
            for sub_formula in modification:
                formula = sub_formula.apply(formula)
                nucleotide_style += sub_formula.to_str()

            key = str(formula)
            if not modification and key in seen:
                logger.debug(f"Unmodified nucleotide `{nucleotide}` already generated by a modification. Skipping.")
                continue
            elif key in seen:
                logger.warning(
                    f"Nucleotide + formula combination: {nucleotide_style} {key} occurred several times. "
                    "Did you specify it multiple times? Skipping this entry."
                )
                continue

            seen.add(key)
            combinations.append(formula)
            ambiguities.setdefault(key, set()).add(nucleotide_style)
            logger.info(f"\tmodifications: {nucleotide_style}\t\t{key}")
    return combinations, ambiguities


def extend_chains(
    nucleotide_formulas: dict[str, Formula],
    combinations: list[Formula],
    ambiguities: AmbiguityMap,
    max_length: int,
) -> dict[str, float]:
    """Build nucleotide chains up to `max_length` nucleotides.

    On each round, every unmodified nucleotide is prepended to each chain created in the
    previous round. Nucleotide-style strings of the new formulas are updated in place by
    prepending the new nucleotide to the strings of the previous chain.

    :param nucleotide_formulas: map nucleotides to their unmodified formula.
    :param combinations: the single nucleotide formulas, possibly modified.
    :param ambiguities: map formula strings to nucleotide-style strings. Updated in place.
    :param max_length: the maximum number of nucleotides in a chain.
    :return: a mapping from formula strings to monoisotopic mass for all chains.

    """
    all_combinations = {str(x): x for x in combinations}
    current = list(all_combinations.values())
    for _ in range(max_length - 1):
        new_combinations: dict[str, Formula] = dict()
        for nucleotide, nucleotide_formula in nucleotide_formulas.items():
            for formula in current:
                extended = nucleotide_formula + formula - WATER
                key = str(extended)
                new_combinations.setdefault(key, extended)
                extended_ambiguities = ambiguities.setdefault(key, set())
                # reads the live map: strings added earlier in this round are extended too
                for s in list(ambiguities.get(str(formula), set())):
                    extended_ambiguities.add(nucleotide + s)
                    logger.debug(nucleotide + s)
        for key, formula in new_combinations.items():
            all_combinations.setdefault(key, formula)
        current = list(new_combinations.values())
    return {k: v.get_exact_mass() for k, v in all_combinations.items()}


def generate_combinations(
    nucleotide_formulas: dict[str, Formula], modifications: NucleotideModifications, max_length: int
) -> tuple[dict[str, float], AmbiguityMap]:
    """Generate all modified nucleotide chains.

    :param nucleotide_formulas: map nucleotides to their unmodified formula.
    :param modifications: the modifications of each nucleotide.
    :param max_length: the maximum number of nucleotides in a chain.
    :return: a mapping from formula strings to monoisotopic mass and a mapping from formula strings
        to nucleotide-style strings.

    """
    combinations, ambiguities = combine_modified_nucleotides(nucleotide_formulas, modifications)
    formula_to_mass = extend_chains(nucleotide_formulas, combinations, ambiguities, max_length)
    return formula_to_mass, ambiguities
