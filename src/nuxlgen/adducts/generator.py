"""Generate precursor adduct formulas and masses for nucleic acid cross-links."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import pydantic
from typing_extensions import Self

from ..chem import Formula
from ..core.enums import NucleicAcid
from ..core.models import AdductMassesResult
from . import sequences
from .combinations import AmbiguityMap, generate_combinations
from .filters import filter_combinations, sort_nucleotides
from .modifications import build_modification_table, parse_target_nucleotides

if TYPE_CHECKING:
    from typing import assert_never

logger = getLogger(__name__)

CYSTEINE_ADDUCT = "C4H8S2O2"
"""The DTT cysteine adduct formula, also used as its nucleotide-style label."""

_RNA_NUCLEOTIDES = ["A=C10H14N5O7P", "C=C9H14N3O8P", "G=C10H14N5O8P", "U=C9H13N2O9P"]
_DNA_NUCLEOTIDES = ["A=C10H14N5O6P", "C=C9H14N3O7P", "G=C10H14N5O7P", "T=C10H15N2O8P"]


class AdductGeneratorConfiguration(pydantic.BaseModel):
    """Store the parameters used to generate nucleotide precursor adducts.

    Refer to :py:func:`generate_adducts` for a description of the generation process.

    """

    model_config = pydantic.ConfigDict(validate_assignment=True)

    target_nucleotides: list[str] = list()
    """Nucleotide monophosphate formulas, in the format ``"U=C9H13N2O9P"``."""

    nucleotide_groups: list[str] = list()
    """Groups of nucleotides that can not be combined in a chain, e.g. ``["ACGU", "acgt"]``."""

    can_cross_link: set[str] = set()
    """Nucleotides that can be cross-linked. Each element must be a single character."""

    mappings: list[str] = list()
    """Source to target nucleotide mappings, in the format ``"A->X"``. Source nucleotides are the
    nucleotides in the restriction sequence. A source nucleotide may be mapped to multiple targets."""

    modifications: list[str] = list()
    """Nucleotide gains and losses, in the format ``"U:+H2O-H3PO4"``."""

    sequence_restriction: str = ""
    """The allowed nucleotide sequence. If empty, all nucleotide combinations are allowed."""

    cysteine_adduct: bool = False
    """If ``True``, include the DTT cysteine adduct in the results."""

    max_length: pydantic.PositiveInt = 2
    """The maximum number of nucleotides in an adduct."""

    @pydantic.field_validator("can_cross_link")
    @classmethod
    def _check_single_character(cls, value: set[str]) -> set[str]:
        invalid = sorted(x for x in value if len(x) != 1)
        if invalid:
            raise ValueError(f"Cross-linkable nucleotides must be single characters. Got {invalid}.")
        return value

    @classmethod
    def from_defaults(cls, nucleic_acid: NucleicAcid | str = NucleicAcid.RNA) -> Self:
        """Create a configuration with default parameters for a nucleic acid type.

        :param nucleic_acid: the nucleic acid type. RNA uses uracil as cross-linkable nucleotide and
            DNA uses thymine.

        """
        if not isinstance(nucleic_acid, NucleicAcid):
            nucleic_acid = NucleicAcid(nucleic_acid)

        match nucleic_acid:
            case NucleicAcid.RNA:
                target_nucleotides = _RNA_NUCLEOTIDES
                xl = "U"
            case NucleicAcid.DNA:
                target_nucleotides = _DNA_NUCLEOTIDES
                xl = "T"
            case _ as never:
                assert_never(never)

        symbols = [x[0] for x in target_nucleotides]
        return cls(
            target_nucleotides=target_nucleotides,
            nucleotide_groups=["".join(symbols)],
            can_cross_link={xl},
            mappings=[f"{x}->{x}" for x in symbols],
            modifications=[f"{xl}:-H2O", f"{xl}:-HPO3", f"{xl}:-H3PO4"],
        )


def generate_adducts(config: AdductGeneratorConfiguration) -> AdductMassesResult:
    """Generate precursor adduct formulas from nucleotide combinations.

    The generation is performed as follows:

    1.  Mapping rules are used to expand the restriction sequence into target sequences. If no
        restriction sequence is provided, a sequence that contains all combinations of source
        nucleotides up to the maximum length is used.
    2.  Modifications are applied to each nucleotide and chains are built by prepending unmodified
        nucleotides, up to the maximum length.
    3.  Nucleotide-style strings that violate cross-linking restrictions are removed.
    4.  If required, the cysteine adduct is added.

    :param config: the generator configuration
    :return: the adduct formulas, their masses and the nucleotide-style strings that generate them.
    :raises MalformedSpec: if a configuration string is not in the expected format
    :raises InvalidFormula: if a formula in the configuration cannot be parsed

    """
    nucleotide_formulas = parse_target_nucleotides(config.target_nucleotides)
    modifications = build_modification_table(config.modifications)
    rules = sequences.parse_mappings(config.mappings)

    restriction = config.sequence_restriction
    if not restriction:
        # source nucleotides keep the order of the mapping strings
        sources = [m[0] for m in config.mappings] or list(nucleotide_formulas)
        restriction = sequences.create_restriction_sequence(sources, config.max_length)

    rules, restriction = sequences.simplify_rules(rules, restriction)
    if rules and not config.sequence_restriction:
        logger.warning(
            "No restriction on sequence but multiple target nucleotides specified. "
            "May generate huge amount of sequences considered as adduct."
        )

    target_sequences = sequences.expand_sequence(restriction, rules)
    sequences.log_target_sequences(target_sequences, verbose=bool(config.sequence_restriction))

    formula_to_mass, ambiguities = generate_combinations(nucleotide_formulas, modifications, config.max_length)
    formula_to_mass, ambiguities = filter_combinations(
        formula_to_mass,
        ambiguities,
        config.can_cross_link,
        config.nucleotide_groups,
        target_sequences,
        config.max_length,
    )

    result = assemble_result(formula_to_mass, ambiguities, config.cysteine_adduct)
    for line in format_summary(result):
        logger.info(line)
    logger.info("Finished generation of modification masses.")
    return result


def assemble_result(
    formula_to_mass: dict[str, float], ambiguities: AmbiguityMap, cysteine_adduct: bool = False
) -> AdductMassesResult:
    """Create the generator result.

    :param formula_to_mass: map formula strings to monoisotopic mass.
    :param ambiguities: map formula strings to nucleotide-style strings.
    :param cysteine_adduct: if ``True``, add the cysteine adduct.

    """
    formula_to_mass = dict(formula_to_mass)
    formula_to_nucleotides = {k: frozenset(v) for k, v in ambiguities.items() if v}
    if cysteine_adduct:
        formula = Formula(CYSTEINE_ADDUCT)
        key = str(formula)
        formula_to_mass[key] = formula.get_exact_mass()
        formula_to_nucleotides[key] = formula_to_nucleotides.get(key, frozenset()) | {CYSTEINE_ADDUCT}
    return AdductMassesResult(formula_to_mass=formula_to_mass, formula_to_nucleotides=formula_to_nucleotides)


def format_summary(result: AdductMassesResult) -> list[str]:
    """Create a human-readable description of the adducts.

    Each line contains an index, the adduct formula, its mass and the nucleotide-style strings that
    generate it. Nucleotide-style strings that only differ in the order of nucleotides are listed
    once, e.g. ``"Precursor adduct 5\\t:\\tC19H24N7O12P 573.122 ( AU-HO3P )"``.

    :param result: the generator result.

    """
    cysteine_formula = str(Formula(CYSTEINE_ADDUCT))
    lines = list()
    for index, formula in enumerate(result.list_formulas(), start=1):
        mass = result.get_mass(formula)
        nucleotides = result.get_nucleotides(formula)
        if formula == cysteine_formula and CYSTEINE_ADDUCT in nucleotides:
            lines.append(f"Precursor adduct {index}\t:\t{formula} {mass:g} ( cysteine adduct )")
            continue

        printed = list()
        for nucleotide_style in sorted(nucleotides):
            sorted_style = sort_nucleotides(nucleotide_style)
            if sorted_style in printed:
                logger.debug(
                    f"Same nucleotide composition generated for: {sorted_style}. "
                    "Will only consider it once to prevent duplicate precursor adducts."
                )
                continue
            printed.append(sorted_style)
        lines.append(f"Precursor adduct {index}\t:\t{formula} {mass:g} ( {' '.join(printed)} )")
    return lines
