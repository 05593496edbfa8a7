"""Generation of nucleic acid cross-link precursor adducts.

Provides:

- a configuration object with the nucleotides, modifications and restrictions used to generate adducts.
- a function to generate adduct formulas, their masses and the nucleotide combinations that generate them.

"""

from .generator import CYSTEINE_ADDUCT, AdductGeneratorConfiguration, format_summary, generate_adducts

__all__ = [
    "CYSTEINE_ADDUCT",
    "AdductGeneratorConfiguration",
    "format_summary",
    "generate_adducts",
]
