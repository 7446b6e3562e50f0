"""
Loan payment maths. Rates are annual percentages; payments are monthly.
"""


def _monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / 12


def calculate_loan_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """Fixed monthly payment that clears `principal` in `term_months`."""
    if term_months <= 0:
        raise ValueError("Loan term must be at least one month")

    rate = _monthly_rate(annual_rate_percent)
    if rate == 0:
        return principal / term_months

    growth = (1 + rate) ** term_months
    return principal * rate * growth / (growth - 1)


def split_loan_payment(outstanding_balance: float, annual_rate_percent: float, payment: float) -> dict:
    """Break one payment into interest on the outstanding balance and principal."""
    interest = outstanding_balance * _monthly_rate(annual_rate_percent)
    principal = payment - interest
    new_balance = outstanding_balance - principal
    return {
        "interest": interest,
        "principal": principal,
        "balance": max(0, new_balance),
        "paid_off": new_balance <= 0,
    }


def amortization_schedule(principal: float, annual_rate_percent: float, term_months: int) -> list[dict]:
    payment = calculate_loan_payment(principal, annual_rate_percent, term_months)
    balance = principal
    schedule = []

    for period in range(1, term_months + 1):
        # Last row absorbs rounding drift so the balance lands on zero
        period_payment = payment
        if period == term_months:
            period_payment = balance + balance * _monthly_rate(annual_rate_percent)

        split = split_loan_payment(balance, annual_rate_percent, period_payment)
        balance = 0 if period == term_months else split["balance"]
        schedule.append({
            "period": period,
            "payment": period_payment,
            "interest": split["interest"],
            "principal": split["principal"],
            "balance": balance,
        })

    return schedule
