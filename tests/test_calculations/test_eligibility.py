"""Tests for depreciation-model and special-allowance eligibility."""

from datetime import date

import pytest

from immo_forecast.calculations.eligibility import (
    evaluate_eligibility,
    default_depreciation_model,
    REASON_NOT_NEW_BUILD,
    REASON_WINDOW_MISSED,
    REASON_NO_EH40,
    REASON_NO_QUALITY_SEAL,
    REASON_OVER_COST_CEILING,
    REASON_PURCHASED_BEFORE_2023,
)
from immo_forecast.models.lookups import DepreciationModel, EnergyStandard, PropertyType
from immo_forecast.models.property import EligibilityFacts
from tests.fixtures.test_inputs import get_new_build_facts, get_existing_facts


class TestLinearModels:
    """Tests for linear 2% and 3% availability."""

    def test_linear_2_always_available(self, existing_facts, new_build_facts):
        """Linear 2% should be available for every property."""
        assert evaluate_eligibility(existing_facts).linear_2 is True
        assert evaluate_eligibility(new_build_facts).linear_2 is True

    def test_linear_3_not_available_before_2023(self, existing_facts):
        """Purchases before 2023 only get linear 2%."""
        result = evaluate_eligibility(existing_facts)

        assert result.linear_3 is False
        assert result.linear_3_reason == REASON_PURCHASED_BEFORE_2023

    def test_linear_3_available_from_2023(self):
        """Any purchase from January 2023 qualifies for linear 3%."""
        result = evaluate_eligibility(get_existing_facts(purchase_date=date(2023, 1, 2)))

        assert result.linear_3 is True
        assert result.linear_3_reason is None


class TestDegressiveModel:
    """Tests for the degressive 5% window."""

    def test_existing_building_not_eligible(self):
        """Existing buildings never qualify, whatever the dates."""
        result = evaluate_eligibility(get_existing_facts(
            purchase_date=date(2024, 5, 1),
            construction_application_date=date(2024, 1, 1),
        ))

        assert result.degressive_5 is False
        assert result.degressive_5_reason == REASON_NOT_NEW_BUILD

    def test_new_build_in_window_eligible(self, new_build_facts):
        """New build with application in 2024 qualifies."""
        result = evaluate_eligibility(new_build_facts)

        assert result.degressive_5 is True
        assert result.degressive_5_reason is None

    @pytest.mark.parametrize("application_date,expected", [
        (date(2023, 9, 30), False),
        (date(2023, 10, 1), True),
        (date(2029, 9, 30), True),
        (date(2029, 10, 1), False),
    ])
    def test_window_is_half_open(self, application_date, expected):
        """Window includes October 2023 and excludes October 2029."""
        facts = get_new_build_facts(construction_application_date=application_date)

        result = evaluate_eligibility(facts)

        assert result.degressive_5 is expected
        if not expected:
            assert result.degressive_5_reason == REASON_WINDOW_MISSED

    def test_falls_back_to_purchase_date(self):
        """Without an application date the purchase date decides."""
        in_window = get_new_build_facts(
            construction_application_date=None,
            purchase_date=date(2025, 2, 1),
        )
        before_window = get_new_build_facts(
            construction_application_date=None,
            purchase_date=date(2023, 6, 1),
        )

        assert evaluate_eligibility(in_window).degressive_5 is True
        assert evaluate_eligibility(before_window).degressive_5 is False


class TestSpecialAllowance:
    """Tests for the special allowance preconditions."""

    def test_fully_eligible_new_build(self, new_build_facts):
        """EH40 + QNG seal + 4,000/m² gets every option."""
        result = evaluate_eligibility(new_build_facts)

        assert result.linear_2 and result.linear_3 and result.degressive_5
        assert result.special_allowance is True
        assert result.reasons == {}

    def test_new_build_without_eh40(self):
        """Degressive is available, the special allowance is not."""
        result = evaluate_eligibility(get_new_build_facts(energy_standard=None))

        assert result.degressive_5 is True
        assert result.special_allowance is False
        assert result.special_allowance_reason == REASON_NO_EH40

    def test_eh55_is_not_enough(self):
        result = evaluate_eligibility(get_new_build_facts(energy_standard=EnergyStandard.EH55))

        assert result.special_allowance_reason == REASON_NO_EH40

    def test_missing_quality_seal(self):
        result = evaluate_eligibility(get_new_build_facts(has_quality_seal=False))

        assert result.special_allowance is False
        assert result.special_allowance_reason == REASON_NO_QUALITY_SEAL

    def test_over_cost_ceiling(self):
        """6,000 per m² is above the 5,200 per m² ceiling."""
        result = evaluate_eligibility(get_new_build_facts(purchase_price=600_000))

        assert result.special_allowance is False
        assert "5,200" in result.special_allowance_reason

    def test_exactly_at_cost_ceiling(self):
        """The ceiling itself is still eligible."""
        result = evaluate_eligibility(get_new_build_facts(purchase_price=520_000))

        assert result.special_allowance is True

    def test_zero_living_area_fails_cost_ceiling(self):
        result = evaluate_eligibility(get_new_build_facts(living_area=0))

        assert result.special_allowance_reason == REASON_OVER_COST_CEILING

    @pytest.mark.parametrize("overrides", [
        {},
        {"purchase_price": 100_000},
        {"living_area": 500},
        {"energy_standard": EnergyStandard.EH40},
        {"construction_application_date": date(2028, 1, 1)},
    ])
    def test_no_quality_seal_never_eligible(self, overrides):
        """Without the QNG seal the special allowance is never available."""
        facts = get_new_build_facts(has_quality_seal=False, **overrides)

        assert evaluate_eligibility(facts).special_allowance is False


class TestReasonOrder:
    """Only the first failing precondition is reported."""

    def test_not_new_build_reported_first(self):
        facts = get_existing_facts(energy_standard=None, has_quality_seal=False)

        assert evaluate_eligibility(facts).special_allowance_reason == REASON_NOT_NEW_BUILD

    def test_window_reported_before_energy_standard(self):
        facts = get_new_build_facts(
            construction_application_date=date(2022, 1, 1),
            energy_standard=None,
            has_quality_seal=False,
        )

        assert evaluate_eligibility(facts).special_allowance_reason == REASON_WINDOW_MISSED

    def test_energy_standard_reported_before_seal(self):
        facts = get_new_build_facts(energy_standard=None, has_quality_seal=False)

        assert evaluate_eligibility(facts).special_allowance_reason == REASON_NO_EH40

    def test_seal_reported_before_cost_ceiling(self):
        facts = get_new_build_facts(has_quality_seal=False, purchase_price=900_000)

        assert evaluate_eligibility(facts).special_allowance_reason == REASON_NO_QUALITY_SEAL

    @pytest.mark.parametrize("facts", [
        get_existing_facts(),
        get_new_build_facts(),
        get_new_build_facts(energy_standard=None),
        get_new_build_facts(purchase_price=900_000),
        get_new_build_facts(construction_application_date=date(2030, 1, 1)),
    ])
    def test_one_reason_per_false_flag(self, facts):
        """Every False flag has a reason and every True flag has none."""
        result = evaluate_eligibility(facts)

        for name in ("linear_3", "degressive_5", "special_allowance"):
            flag = getattr(result, name)
            assert (name in result.reasons) is (not flag)


class TestFactsValidation:
    """Tests for structurally invalid facts."""

    def test_negative_living_area_rejected(self):
        with pytest.raises(ValueError):
            get_new_build_facts(living_area=-10)

    def test_unknown_property_type_rejected(self):
        with pytest.raises(ValueError, match="property_type"):
            EligibilityFacts(property_type="castle", purchase_date=date(2024, 1, 1))

    def test_property_type_string_accepted(self):
        facts = EligibilityFacts(property_type="newBuild", purchase_date=date(2024, 1, 1))

        assert facts.property_type == PropertyType.NEW_BUILD


class TestDefaultModel:
    """Tests for picking the most favourable eligible model."""

    def test_new_build_defaults_to_degressive(self, new_build_facts):
        assert default_depreciation_model(new_build_facts) == DepreciationModel.DEGRESSIVE_5

    def test_recent_existing_defaults_to_linear_3(self):
        facts = get_existing_facts(purchase_date=date(2024, 1, 1))

        assert default_depreciation_model(facts) == DepreciationModel.LINEAR_3

    def test_old_purchase_defaults_to_linear_2(self, existing_facts):
        assert default_depreciation_model(existing_facts) == DepreciationModel.LINEAR_2
