"""Parse nucleotide formulas and nucleotide modifications."""

from __future__ import annotations

import re
from typing import Iterable

from ..chem import Formula
from ..core.enums import ModificationSign
from ..core.exceptions import MalformedModificationSpec, MalformedNucleotideSpec
from ..core.models import ModificationSubFormula, NucleotideModification

_SUB_FORMULA_BOUNDARY = re.compile(r"(?<!^)(?=[+-])")

NucleotideModifications = dict[str, list[NucleotideModification]]
"""Map nucleotides to the list of modifications specified for them."""


def parse_target_nucleotides(target_nucleotides: Iterable[str]) -> dict[str, Formula]:
    """Create a mapping from nucleotide to formula.

    :param target_nucleotides: strings in the format ``"U=C9H13N2O9P"``, where the formula is
        the nucleotide monophosphate formula.
    :return: a dictionary that maps nucleotides to formulas, sorted by nucleotide.
    :raises MalformedNucleotideSpec: if a string is not in the expected format
    :raises InvalidFormula: if a formula cannot be parsed

    """
    res = dict()
    for s in target_nucleotides:
        symbol, sep, formula = s.partition("=")
        if not sep or not symbol or not formula:
            raise MalformedNucleotideSpec(f"Target nucleotides must be in the format `U=C9H13N2O9P`. Got `{s}`.")
        res[symbol] = Formula(formula)
    return {k: res[k] for k in sorted(res)}


def parse_modification(modification: str) -> tuple[str, NucleotideModification]:
    """Parse a nucleotide modification.

    Sub-formulas start at each ``+`` or ``-`` sign. Sub-formulas without a leading sign are
    additive. Each sub-formula is neutralized.

    :param modification: a string in the format ``"U:+H2O-H2O"``.
    :return: the target nucleotide and its list of sub-formulas.
    :raises MalformedModificationSpec: if the second character is not ``":"``
    :raises InvalidFormula: if a sub-formula cannot be parsed

    """
    if len(modification) < 2 or modification[1] != ":":
        msg = f"Modifications must specify nucleotide and formulas in format `U:+H2O-H2O`. Got `{modification}`."
        raise MalformedModificationSpec(msg)

    nucleotide = modification[0]
    sub_formulas = list()
    for token in _SUB_FORMULA_BOUNDARY.split(modification[2:]):
        sign = ModificationSign.ADDITIVE
        if token[:1] in ("+", "-"):
            sign = ModificationSign(token[0])
            token = token[1:]
        if not token:
            continue
        sub_formulas.append(ModificationSubFormula(formula=Formula(token).neutralize(), sign=sign))
    return nucleotide, sub_formulas


def build_modification_table(modifications: Iterable[str]) -> NucleotideModifications:
    """Group parsed modifications by their target nucleotide.

    Multiple modifications for the same nucleotide are stored in order of appearance.

    :param modifications: strings in the format ``"U:+H2O-H2O"``.

    """
    table: NucleotideModifications = dict()
    for m in modifications:
        nucleotide, sub_formulas = parse_modification(m)
        table.setdefault(nucleotide, list()).append(sub_formulas)
    return table
