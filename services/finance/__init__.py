from services.finance.budget import budget_variance
from services.finance.depreciation import DepreciationMethod, calculate_depreciation
from services.finance.loans import amortization_schedule, calculate_loan_payment, split_loan_payment
from services.finance.tax import (
    DEFAULT_INVOICE_FORMAT,
    calculate_invoice_totals,
    calculate_line_item,
    calculate_tax,
    early_payment_discount,
    generate_invoice_number,
    late_fee,
    payment_due_date,
    summarize_vat,
)
