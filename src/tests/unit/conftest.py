import pytest

from nuxlgen.chem import Formula


@pytest.fixture
def nucleotide_formulas() -> dict[str, Formula]:
    return {"A": Formula("C10H14N5O7P"), "U": Formula("C9H13N2O9P")}


@pytest.fixture
def water() -> Formula:
    return Formula("H2O")
