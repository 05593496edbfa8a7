"""NuXLGen constants."""

import enum


class NucleicAcid(str, enum.Enum):
    """Available nucleic acid presets."""

    RNA = "RNA"
    """Ribonucleotide monophosphates with uracil as cross-linkable nucleotide."""

    DNA = "DNA"
    """Deoxyribonucleotide monophosphates with thymine as cross-linkable nucleotide."""


class ModificationSign(str, enum.Enum):
    """Effect of a modification sub-formula on a nucleotide formula."""

    ADDITIVE = "+"
    """The sub-formula is added to the nucleotide formula."""

    SUBTRACTIVE = "-"
    """The sub-formula is subtracted from the nucleotide formula."""
