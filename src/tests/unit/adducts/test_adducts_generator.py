import logging

import pydantic
import pytest

from nuxlgen.adducts import CYSTEINE_ADDUCT, AdductGeneratorConfiguration, format_summary, generate_adducts
from nuxlgen.adducts.filters import get_nucleotide_composition
from nuxlgen.adducts.sequences import not_in_sequence
from nuxlgen.chem import Formula
from nuxlgen.core.enums import NucleicAcid
from nuxlgen.core.exceptions import InvalidFormula, MalformedMappingSpec, MalformedModificationSpec

A = "C10H14N5O7P"
U = "C9H13N2O9P"
AU = "C19H25N7O15P2"


@pytest.fixture
def config() -> AdductGeneratorConfiguration:
    return AdductGeneratorConfiguration(
        target_nucleotides=[f"A={A}", f"U={U}"],
        nucleotide_groups=["AU"],
        can_cross_link={"U"},
        sequence_restriction="AU",
        max_length=2,
    )


class TestAdductGeneratorConfiguration:
    def test_cross_linkable_nucleotides_must_be_single_characters(self):
        with pytest.raises(pydantic.ValidationError):
            AdductGeneratorConfiguration(can_cross_link={"UU"})

    def test_max_length_must_be_positive(self, config: AdductGeneratorConfiguration):
        with pytest.raises(pydantic.ValidationError):
            config.max_length = 0

    @pytest.mark.parametrize("nucleic_acid,xl", [(NucleicAcid.RNA, "U"), (NucleicAcid.DNA, "T"), ("RNA", "U")])
    def test_from_defaults(self, nucleic_acid, xl):
        config = AdductGeneratorConfiguration.from_defaults(nucleic_acid)
        assert len(config.target_nucleotides) == 4
        assert config.can_cross_link == {xl}
        assert all(m.startswith(f"{xl}:") for m in config.modifications)

    def test_from_defaults_invalid_nucleic_acid_raises_error(self):
        with pytest.raises(ValueError):
            AdductGeneratorConfiguration.from_defaults("PNA")


class TestGenerateAdducts:
    def test_dinucleotide_without_modifications(self, config):
        result = generate_adducts(config)
        assert result.list_formulas() == [AU, U]
        assert result.get_nucleotides(U) == {"U"}
        assert result.get_nucleotides(AU) == {"AU"}

    def test_result_nucleotides_cannot_be_emptied(self, config):
        result = generate_adducts(config)
        with pytest.raises(AttributeError):
            result.get_nucleotides(U).clear()  # type: ignore
        assert result.get_nucleotides(U) == {"U"}
        assert all(result.formula_to_nucleotides.values())

    def test_condensation_mass(self, config):
        result = generate_adducts(config)
        expected = Formula(A).get_exact_mass() + Formula(U).get_exact_mass() - Formula("H2O").get_exact_mass()
        assert result.get_mass(AU) == pytest.approx(expected)
        assert result.get_mass(U) == pytest.approx(324.0358670024)

    def test_keys_are_synchronized(self, config):
        config.modifications = ["U:-H2O", "U:-HPO3", "A:-NH3"]
        config.max_length = 3
        config.sequence_restriction = "AUUAU"
        result = generate_adducts(config)
        assert set(result.formula_to_mass) == set(result.formula_to_nucleotides)
        assert all(result.formula_to_nucleotides.values())

    def test_modification_with_net_zero_change(self, config):
        config.modifications = ["U:+H2O-H2O"]
        result = generate_adducts(config)
        assert result.get_nucleotides(U) == {"U+H2O-H2O"}

    def test_modified_dinucleotide(self, config):
        config.modifications = ["U:-H2O"]
        result = generate_adducts(config)
        formula = str(Formula(A) + Formula(U) - Formula("H2O") - Formula("H2O"))
        assert result.get_nucleotides(formula) == {"AU-H2O"}

    def test_generation_is_deterministic(self, config):
        config.modifications = ["U:-H2O", "U:-H3PO4"]
        assert generate_adducts(config) == generate_adducts(config)

    def test_identity_mapping_has_no_effect(self, config):
        expected = generate_adducts(config)
        config.mappings = ["A->A"]
        assert generate_adducts(config) == expected

    def test_rename_mapping_is_equivalent_to_sequence_substitution(self, config):
        config.target_nucleotides = [f"A={A}", f"U={U}", "X=C10H14N5O6P"]
        config.nucleotide_groups = ["AUX"]
        config.mappings = ["A->X"]
        actual = generate_adducts(config)

        config.mappings = list()
        config.sequence_restriction = "XU"
        expected = generate_adducts(config)
        assert actual == expected
        assert "UX" in {get_nucleotide_composition(x) for v in actual.formula_to_nucleotides.values() for x in v}

    def test_combinatorial_mapping(self, config):
        config.target_nucleotides = [f"A={A}", f"U={U}", "X=C10H14N5O6P"]
        config.mappings = ["A->A", "A->X"]
        config.sequence_restriction = "AU"
        result = generate_adducts(config)
        compositions = {get_nucleotide_composition(x) for v in result.formula_to_nucleotides.values() for x in v}
        assert compositions == {"U", "AU", "UX"}

    def test_no_restriction_allows_all_combinations(self, config):
        config.sequence_restriction = ""
        result = generate_adducts(config)
        compositions = {get_nucleotide_composition(x) for v in result.formula_to_nucleotides.values() for x in v}
        assert compositions == {"U", "AU", "UU"}

    def test_no_restriction_with_multiple_targets_logs_warning(self, config, caplog):
        config.target_nucleotides = [f"A={A}", f"U={U}", "X=C10H14N5O6P"]
        config.mappings = ["A->A", "A->X", "U->U"]
        config.sequence_restriction = ""
        config.max_length = 1
        with caplog.at_level(logging.WARNING):
            generate_adducts(config)
        assert "No restriction on sequence" in caplog.text

    def test_cysteine_adduct(self, config):
        config.cysteine_adduct = True
        result = generate_adducts(config)
        formula = str(Formula(CYSTEINE_ADDUCT))
        assert formula == "C4H8O2S2"
        assert result.get_nucleotides(formula) == {CYSTEINE_ADDUCT}
        assert result.get_mass(formula) == pytest.approx(151.99657184578)

    def test_malformed_modification_raises_error(self, config):
        config.modifications = ["U-H2O"]
        with pytest.raises(MalformedModificationSpec):
            generate_adducts(config)

    def test_malformed_mapping_raises_error(self, config):
        config.mappings = ["A=X"]
        with pytest.raises(MalformedMappingSpec):
            generate_adducts(config)

    def test_invalid_formula_raises_error(self, config):
        config.modifications = ["U:-H2Oo"]
        with pytest.raises(InvalidFormula):
            generate_adducts(config)


class TestGenerateAdductsFromDefaults:
    @pytest.fixture(params=[NucleicAcid.RNA, NucleicAcid.DNA])
    def config(self, request) -> AdductGeneratorConfiguration:
        config = AdductGeneratorConfiguration.from_defaults(request.param)
        config.max_length = 3
        config.sequence_restriction = "GACUUAGCTTAG"
        return config

    def test_retained_strings_satisfy_restrictions(self, config: AdductGeneratorConfiguration):
        result = generate_adducts(config)
        assert len(result)
        for nucleotides in result.formula_to_nucleotides.values():
            for nucleotide_style in nucleotides:
                composition = get_nucleotide_composition(nucleotide_style)
                assert any(c in config.can_cross_link for c in composition)
                assert sum(c.islower() for c in composition) <= 1
                assert len(composition) <= config.max_length
                assert not not_in_sequence(config.sequence_restriction, composition)

    def test_compositions_with_same_mass_are_unique(self, config: AdductGeneratorConfiguration):
        result = generate_adducts(config)
        seen = set()
        for formula, nucleotides in result.formula_to_nucleotides.items():
            for nucleotide_style in nucleotides:
                key = (get_nucleotide_composition(nucleotide_style), result.get_mass(formula))
                assert key not in seen
                seen.add(key)


class TestFormatSummary:
    def test_summary(self, config):
        config.cysteine_adduct = True
        result = generate_adducts(config)
        lines = format_summary(result)
        assert len(lines) == 3
        assert lines[0].startswith(f"Precursor adduct 1\t:\t{AU} ")
        assert lines[0].endswith("( AU )")
        assert lines[1].endswith("( cysteine adduct )")
        assert lines[2].startswith(f"Precursor adduct 3\t:\t{U} 324.036 ")

    def test_summary_prints_sorted_nucleotides_once(self, config):
        config.sequence_restriction = "AUA"
        config.max_length = 3
        result = generate_adducts(config)
        aau = str(Formula(A) + Formula(A) + Formula(U) - Formula("H2O") - Formula("H2O"))
        index = result.list_formulas().index(aau)
        assert format_summary(result)[index].endswith("( AAU )")
