from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from autoquote.core.enums import EditedField
from autoquote.utils.money import to_number


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuoteInput(CamelModel):
    cost: float = 0.0
    profit: float = 0.0
    selling_price: float = 0.0
    term: float = 0.0
    rate: float = 0.0
    out_of_pocket: float = 0.0
    tax_rate: float = 0.0
    quote_name: str = ""

    @field_validator(
        "cost", "profit", "selling_price", "term", "rate", "out_of_pocket", "tax_rate",
        mode="before",
    )
    @classmethod
    def coerce_input_number(cls, value):
        return to_number(value)

    @field_validator("quote_name", mode="before")
    @classmethod
    def coerce_name(cls, value):
        return "" if value is None else str(value)


class QuoteResult(CamelModel):
    taxes: float = 0.0
    base_loan_amount: float = 0.0
    interest: float = 0.0
    total_loan_amount: float = 0.0
    payment: float = 0.0

    @field_validator(
        "taxes", "base_loan_amount", "interest", "total_loan_amount", "payment",
        mode="before",
    )
    @classmethod
    def coerce_result_number(cls, value):
        return to_number(value)


class QuoteCreate(QuoteInput, QuoteResult):
    """Input and result merged for saving; id and createdAt are assigned by the store."""


class SavedQuote(QuoteCreate):
    id: str
    created_at: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        return value if value is None else str(value)


class SyncRequest(CamelModel):
    edited: EditedField
    input: QuoteInput
