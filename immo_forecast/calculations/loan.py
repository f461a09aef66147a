"""Loan payment and principal calculations for annuity and declining-balance loans."""

from dataclasses import dataclass

import numpy_financial as npf

from ..models.lookups import LoanType


@dataclass(frozen=True)
class PrincipalSplit:
    """Interest and principal of one loan year."""

    annual_interest: float
    regular_principal: float  # Contractual repayment, before the remaining-balance cap
    extra_principal: float
    principal_paid: float  # Regular + extra, capped at the remaining balance
    principal_paid_without_extra: float  # Regular only, capped at the remaining balance


def calculate_annuity_payment(
    principal: float,
    interest_rate_percent: float,
    horizon_years: int,
) -> float:
    """Calculate the fixed monthly payment of a fully amortizing loan.

    PMT = P x r x (1 + r)^n / ((1 + r)^n - 1), with r the monthly rate and
    n the number of months; P / n when the rate is zero.

    Args:
        principal: Loan amount.
        interest_rate_percent: Annual nominal rate in percent (e.g., 4.0).
        horizon_years: Amortization period in years.

    Returns:
        Monthly payment, 0 for an empty horizon or no principal.

    Example:
        >>> round(calculate_annuity_payment(300_000, 4.0, 30), 2)
        1432.25
    """
    months = horizon_years * 12
    if months <= 0 or principal <= 0:
        return 0.0

    monthly_rate = interest_rate_percent / 100 / 12

    # numpy_financial.pmt returns the payment as a negative cash flow
    return float(-npf.pmt(
        rate=monthly_rate,
        nper=months,
        pv=principal,
        fv=0,
    ))


def calculate_annual_interest(balance: float, interest_rate_percent: float) -> float:
    """Simple annual interest on the balance carried into the year."""
    return balance * interest_rate_percent / 100


def split_annual_payment(
    balance: float,
    interest_rate_percent: float,
    amortization_rate_percent: float,
    loan_type: LoanType,
    fixed_monthly_payment: float = 0.0,
    extra_annual_principal: float = 0.0,
) -> PrincipalSplit:
    """Split one year of debt service into interest and principal.

    Annuity: the fixed monthly payment minus a twelfth of the annual
    interest is the monthly principal. Declining balance: the annual rate
    is (interest + amortization) % of the current balance, minus interest.

    Args:
        balance: Remaining principal at the start of the year.
        interest_rate_percent: Annual interest rate in percent.
        amortization_rate_percent: Annual repayment rate in percent (declining balance).
        loan_type: Repayment scheme.
        fixed_monthly_payment: Monthly payment (annuity).
        extra_annual_principal: Voluntary repayment for the year.

    Returns:
        PrincipalSplit for the year.
    """
    annual_interest = calculate_annual_interest(balance, interest_rate_percent)

    if loan_type == LoanType.ANNUITY:
        monthly_principal = max(0.0, fixed_monthly_payment - annual_interest / 12)
        regular_principal = monthly_principal * 12
    else:
        annual_payment_total = balance * ((interest_rate_percent + amortization_rate_percent) / 100)
        regular_principal = max(0.0, annual_payment_total - annual_interest)

    extra_principal = max(0.0, extra_annual_principal)
    outstanding = max(0.0, balance)

    return PrincipalSplit(
        annual_interest=annual_interest,
        regular_principal=regular_principal,
        extra_principal=extra_principal,
        principal_paid=min(outstanding, regular_principal + extra_principal),
        principal_paid_without_extra=min(outstanding, regular_principal),
    )
