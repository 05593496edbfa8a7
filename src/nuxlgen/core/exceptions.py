"""NuXLGen core exceptions."""


class InvalidFormula(ValueError):
    """Exception raised when a chemical formula string cannot be parsed."""


class MalformedSpec(ValueError):
    """Exception raised when a configuration string does not follow its expected format."""


class MalformedModificationSpec(MalformedSpec):
    """Exception raised when a nucleotide modification is not in the ``"U:+H2O-H2O"`` format."""


class MalformedMappingSpec(MalformedSpec):
    """Exception raised when a nucleotide mapping is not in the ``"A->X"`` format."""


class MalformedNucleotideSpec(MalformedSpec):
    """Exception raised when a target nucleotide is not in the ``"U=C9H13N2O9P"`` format."""
