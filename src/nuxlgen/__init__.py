"""NuXLGen: precursor adduct generation for nucleic acid cross-linking mass spectrometry."""

from .adducts import AdductGeneratorConfiguration, generate_adducts
from .core.enums import NucleicAcid
from .core.models import AdductMassesResult

__all__ = [
    "AdductGeneratorConfiguration",
    "AdductMassesResult",
    "NucleicAcid",
    "generate_adducts",
]
