import logging
from decimal import Decimal, DecimalException

from autoquote.schemas.quote import QuoteInput, QuoteResult
from autoquote.utils.money import ZERO, round2, to_decimal

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")


def monthly_payment(base_loan_amount: Decimal, monthly_rate: Decimal, term: Decimal) -> Decimal:
    if term <= 0 or base_loan_amount <= 0:
        return ZERO
    if monthly_rate == 0:
        return round2(base_loan_amount / term)
    try:
        growth = 1 + monthly_rate
        factor = growth ** -term
        if factor == 1 and growth > 0:
            # rate too small to register at working precision
            return round2(base_loan_amount / term)
        return round2(base_loan_amount * monthly_rate / (1 - factor))
    except DecimalException as e:
        # Only reachable with rates of -1200% or below, or past the decimal exponent range
        logger.warning(f"Amortization undefined for monthly rate {monthly_rate} over {term} months: {e!r}")
        return ZERO


def calculate(quote: QuoteInput) -> QuoteResult:
    selling_price = to_decimal(quote.selling_price)
    term = to_decimal(quote.term)

    taxes = round2(selling_price * (to_decimal(quote.tax_rate) / HUNDRED))
    base_loan_amount = round2(selling_price + taxes - to_decimal(quote.out_of_pocket))
    monthly_rate = to_decimal(quote.rate) / HUNDRED / MONTHS_PER_YEAR

    payment = monthly_payment(base_loan_amount, monthly_rate, term)
    total_loan_amount = round2(payment * term)
    interest = round2(total_loan_amount - base_loan_amount)

    return QuoteResult(
        taxes=taxes,
        base_loan_amount=base_loan_amount,
        interest=interest,
        total_loan_amount=total_loan_amount,
        payment=payment,
    )
