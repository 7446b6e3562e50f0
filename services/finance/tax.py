"""
Tax, invoice and payment-term helpers driven by organization settings.

Settings are the plain dicts stored on Organization; a missing key falls
back to the default the UI shows for a new organization.
"""
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable, Optional

DEFAULT_INVOICE_PREFIX = "INV"
DEFAULT_INVOICE_FORMAT = "INV-{YYYY}-{####}"
DEFAULT_PAYMENT_TERMS_DAYS = 30


def calculate_tax(amount: float, tax_settings: Optional[dict] = None) -> float:
    """Tax on `amount` at the organization rate, or 0 when tax is switched off."""
    settings = tax_settings or {}
    if not settings.get("enable_tax_calculation"):
        return 0
    return amount * (settings.get("tax_rate") or 0) / 100


def calculate_line_item(item: dict) -> dict:
    """Fill in amount and tax_amount for one invoice line."""
    quantity = float(item.get("quantity") or 0)
    unit_price = float(item.get("unit_price") or 0)
    tax_rate = float(item.get("tax_rate") or 0)

    amount = quantity * unit_price
    return {
        **item,
        "quantity": quantity,
        "unit_price": unit_price,
        "tax_rate": tax_rate,
        "amount": amount,
        "tax_amount": amount * tax_rate / 100,
    }


def calculate_invoice_totals(line_items: Iterable[dict]) -> dict:
    lines = [calculate_line_item(item) for item in line_items]
    subtotal = sum(line["amount"] for line in lines)
    tax_amount = sum(line["tax_amount"] for line in lines)
    return {
        "line_items": lines,
        "subtotal": subtotal,
        "tax_amount": tax_amount,
        "total": subtotal + tax_amount,
    }


def generate_invoice_number(
    last_number: int,
    invoice_settings: Optional[dict] = None,
    year: Optional[int] = None,
) -> str:
    """Next invoice number, e.g. INV-2024-0043 after 42.

    The format understands {prefix}, {YYYY} and {####} (zero-padded to 4).
    """
    settings = invoice_settings or {}
    prefix = settings.get("invoice_prefix") or DEFAULT_INVOICE_PREFIX
    number_format = settings.get("invoice_number_format") or DEFAULT_INVOICE_FORMAT
    year = year or date.today().year

    return (
        number_format
        .replace("{YYYY}", str(year))
        .replace("{####}", str(last_number + 1).zfill(4))
        .replace("{prefix}", prefix)
    )


def payment_due_date(issue_date: date, payment_settings: Optional[dict] = None) -> date:
    days = (payment_settings or {}).get("payment_terms") or DEFAULT_PAYMENT_TERMS_DAYS
    return issue_date + timedelta(days=days)


def late_fee(amount: float, payment_settings: Optional[dict] = None) -> float:
    return amount * ((payment_settings or {}).get("late_fee_percentage") or 0) / 100


def early_payment_discount(amount: float, payment_settings: Optional[dict] = None) -> float:
    return amount * ((payment_settings or {}).get("early_payment_discount") or 0) / 100


def _by_rate(buckets: dict) -> list[dict]:
    return [
        {"rate": rate, "amount": values["amount"], "vat": values["vat"]}
        for rate, values in sorted(buckets.items())
    ]


def summarize_vat(invoices: Iterable, expenses: Iterable) -> dict:
    """Output VAT from invoices, input VAT from expenses, both broken down by rate.

    Callers pass only the invoices and expenses that count towards the
    return (sent/paid invoices, taxable expenses).
    """
    invoices = list(invoices)
    expenses = list(expenses)

    sales = defaultdict(lambda: {"amount": 0.0, "vat": 0.0})
    for invoice in invoices:
        for item in invoice.line_items or []:
            bucket = sales[float(item.get("tax_rate") or 0)]
            bucket["amount"] += item.get("amount") or 0
            bucket["vat"] += item.get("tax_amount") or 0

    purchases = defaultdict(lambda: {"amount": 0.0, "vat": 0.0})
    for expense in expenses:
        bucket = purchases[float(expense.tax_rate or 0)]
        bucket["amount"] += expense.amount or 0
        bucket["vat"] += expense.tax_amount or 0

    output_vat = sum(invoice.tax_amount or 0 for invoice in invoices)
    input_vat = sum(expense.tax_amount or 0 for expense in expenses)

    return {
        "output_vat": output_vat,
        "input_vat": input_vat,
        "net_vat": output_vat - input_vat,
        "sales_by_rate": _by_rate(sales),
        "purchases_by_rate": _by_rate(purchases),
        "invoices": len(invoices),
        "expenses": len(expenses),
    }
