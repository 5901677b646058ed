"""Cost / profit / selling price linkage for a quote being edited.

``selling_price == cost + profit`` is maintained by recomputing whichever side
was not just edited. Nothing here loops: an edit to the selling price only
rewrites the profit, and an edit to cost or profit only rewrites the selling
price.
"""
from typing import Optional

from autoquote.core.enums import EditedField
from autoquote.schemas.quote import QuoteCreate, QuoteInput, QuoteResult
from autoquote.services.calculator import calculate
from autoquote.utils.money import round2, to_decimal, to_number

# Python attribute behind each wire field name of QuoteInput
INPUT_ATTRIBUTES = {
    field.alias: name for name, field in QuoteInput.model_fields.items() if field.alias
}


def sync_selling_price(cost, profit) -> float:
    return float(round2(to_decimal(cost) + to_decimal(profit)))


def sync_profit(selling_price, cost) -> float:
    return float(round2(to_decimal(selling_price) - to_decimal(cost)))


def synchronize(quote: QuoteInput, edited: EditedField) -> QuoteInput:
    """Return a copy of ``quote`` with the field linked to ``edited`` recomputed."""
    session = QuoteSession(quote)
    if edited == EditedField.SELLING_PRICE:
        session.on_selling_price_edited()
    else:
        session.on_cost_or_profit_edited()
    return session.quote


class QuoteSession:
    """One user's editing session: the input being edited and its last result."""

    def __init__(self, quote: Optional[QuoteInput] = None):
        self.quote = quote.model_copy() if quote is not None else QuoteInput()
        self.result: Optional[QuoteResult] = None

    def on_cost_or_profit_edited(self) -> None:
        self.quote.selling_price = sync_selling_price(self.quote.cost, self.quote.profit)

    def on_selling_price_edited(self) -> None:
        self.quote.profit = sync_profit(self.quote.selling_price, self.quote.cost)

    def edit(self, field: str, value) -> None:
        """Set one field by attribute or wire name and fire its sync rule."""
        attribute = INPUT_ATTRIBUTES.get(field, field)
        if attribute not in QuoteInput.model_fields:
            raise KeyError(f"Unknown quote field: {field}")

        if attribute == "quote_name":
            self.quote.quote_name = "" if value is None else str(value)
            return

        setattr(self.quote, attribute, to_number(value))
        if attribute in (EditedField.COST.value, EditedField.PROFIT.value):
            self.on_cost_or_profit_edited()
        elif attribute == "selling_price":
            self.on_selling_price_edited()

    def apply(self) -> QuoteResult:
        self.result = calculate(self.quote)
        return self.result

    def to_record(self) -> QuoteCreate:
        """Merge input and result by value, calculating first if never applied."""
        result = self.result if self.result is not None else self.apply()
        return QuoteCreate(**self.quote.model_dump(), **result.model_dump())
