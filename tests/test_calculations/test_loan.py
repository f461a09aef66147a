"""Tests for loan payment and principal calculations."""

import pytest

from immo_forecast.calculations.loan import (
    calculate_annuity_payment,
    calculate_annual_interest,
    split_annual_payment,
)
from immo_forecast.models.lookups import LoanType


class TestAnnuityPayment:
    """Tests for the fixed monthly annuity."""

    def test_standard_annuity(self):
        """300,000 at 4% over 30 years."""
        payment = calculate_annuity_payment(300_000, 4.0, 30)

        assert payment == pytest.approx(1_432.25, abs=0.01)

    def test_zero_interest_is_straight_division(self):
        """Zero rate should return principal / months."""
        payment = calculate_annuity_payment(120_000, 0.0, 10)

        assert payment == pytest.approx(1_000.0)

    def test_zero_horizon(self):
        assert calculate_annuity_payment(300_000, 4.0, 0) == 0.0

    def test_no_principal(self):
        assert calculate_annuity_payment(0, 4.0, 30) == 0.0
        assert calculate_annuity_payment(-5_000, 4.0, 30) == 0.0

    def test_higher_rate_higher_payment(self):
        low = calculate_annuity_payment(300_000, 3.0, 30)
        high = calculate_annuity_payment(300_000, 5.0, 30)

        assert high > low


class TestAnnualInterest:

    def test_simple_interest(self):
        assert calculate_annual_interest(300_000, 3.5) == pytest.approx(10_500)


class TestDecliningBalanceSplit:
    """Tests for the declining-balance repayment."""

    def test_first_year_split(self):
        """3.5% interest + 2% repayment on 300,000."""
        split = split_annual_payment(300_000, 3.5, 2.0, LoanType.DECLINING_BALANCE)

        assert split.annual_interest == pytest.approx(10_500)
        assert split.regular_principal == pytest.approx(6_000)
        assert split.principal_paid == pytest.approx(6_000)
        assert split.principal_paid_without_extra == pytest.approx(6_000)

    def test_repayment_declines_with_balance(self):
        high = split_annual_payment(300_000, 3.5, 2.0, LoanType.DECLINING_BALANCE)
        low = split_annual_payment(150_000, 3.5, 2.0, LoanType.DECLINING_BALANCE)

        assert low.regular_principal == pytest.approx(high.regular_principal / 2)

    def test_zero_amortization_rate(self):
        split = split_annual_payment(300_000, 3.5, 0.0, LoanType.DECLINING_BALANCE)

        assert split.regular_principal == 0
        assert split.principal_paid == 0


class TestAnnuitySplit:
    """Tests for the annuity repayment."""

    def test_payment_covers_interest_and_principal(self):
        payment = calculate_annuity_payment(300_000, 4.0, 30)

        split = split_annual_payment(300_000, 4.0, 0.0, LoanType.ANNUITY, payment)

        assert split.annual_interest == pytest.approx(12_000)
        assert split.regular_principal == pytest.approx(payment * 12 - 12_000)
        assert (split.regular_principal + split.annual_interest) / 12 == pytest.approx(payment)

    def test_payment_below_interest_repays_nothing(self):
        split = split_annual_payment(300_000, 4.0, 0.0, LoanType.ANNUITY, 500.0)

        assert split.regular_principal == 0
        assert split.principal_paid == 0

    def test_loan_type_string_value(self):
        split = split_annual_payment(
            300_000, 3.5, 2.0, LoanType("decliningBalance")
        )

        assert split.regular_principal == pytest.approx(6_000)


class TestExtraPrincipal:
    """Tests for voluntary repayments and the balance cap."""

    def test_extra_added_to_principal(self):
        split = split_annual_payment(
            300_000, 3.5, 2.0, LoanType.DECLINING_BALANCE, extra_annual_principal=5_000
        )

        assert split.extra_principal == 5_000
        assert split.principal_paid == pytest.approx(11_000)
        assert split.principal_paid_without_extra == pytest.approx(6_000)

    def test_principal_capped_at_balance(self):
        split = split_annual_payment(
            4_000, 3.5, 2.0, LoanType.DECLINING_BALANCE, extra_annual_principal=10_000
        )

        assert split.principal_paid == 4_000
        assert split.principal_paid_without_extra == pytest.approx(80)

    def test_negative_extra_treated_as_zero(self):
        split = split_annual_payment(
            300_000, 3.5, 2.0, LoanType.DECLINING_BALANCE, extra_annual_principal=-1_000
        )

        assert split.extra_principal == 0
        assert split.principal_paid == pytest.approx(6_000)

    def test_paid_off_balance(self):
        split = split_annual_payment(
            0, 3.5, 2.0, LoanType.ANNUITY, 1_500.0, extra_annual_principal=1_000
        )

        assert split.annual_interest == 0
        assert split.principal_paid == 0
        assert split.principal_paid_without_extra == 0
