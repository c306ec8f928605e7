"""Pydantic contracts shared across gateway and ledger controllers."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator

from shared.errors import ValidationError


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class TransactionCategory(str, Enum):
    """Closed category set agreed with the remote store."""

    SALARY = "salary"
    TIP = "tip"
    PROJECT = "project"
    FOOD = "food"
    MOVIE = "movie"
    BILLS = "bills"
    MEDICAL = "medical"
    FEE = "fee"
    TAX = "tax"


class FrequencyPreset(str, Enum):
    """Relative date windows offered by the frequency selector."""

    LAST_7_DAYS = "last-7-days"
    LAST_30_DAYS = "last-30-days"
    LAST_365_DAYS = "last-365-days"
    CUSTOM = "custom"

    @property
    def days(self) -> int | None:
        return _PRESET_DAYS.get(self)


_PRESET_DAYS: dict[FrequencyPreset, int] = {
    FrequencyPreset.LAST_7_DAYS: 7,
    FrequencyPreset.LAST_30_DAYS: 30,
    FrequencyPreset.LAST_365_DAYS: 365,
}


class TypeFilter(str, Enum):
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"


def normalize_stored_date(value: object) -> object:
    """Reduce a stored datetime representation to its calendar date."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", maxsplit=1)[0]
    return value


class DateRange(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_date: date
    end_date: date


class TransactionFields(BaseModel):
    """Mutation payload: every editable field of a transaction."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    date: date
    amount: Decimal
    type: TransactionType
    category: TransactionCategory
    reference: str = ""
    description: str = ""

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, value: Decimal) -> float:
        return float(value)


class Transaction(BaseModel):
    """Transaction as returned by the remote store."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    user_id: str = Field(validation_alias=AliasChoices("userid", "userId", "user_id"))
    date: date
    amount: Decimal
    type: TransactionType
    category: TransactionCategory
    reference: str = ""
    description: str = ""

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def coerce_identifier(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value: object) -> object:
        return normalize_stored_date(value)

    @field_validator("reference", "description", mode="before")
    @classmethod
    def empty_text_for_missing(cls, value: object) -> object:
        return "" if value is None else value

    def to_fields(self) -> TransactionFields:
        return TransactionFields(
            date=self.date,
            amount=self.amount,
            type=self.type,
            category=self.category,
            reference=self.reference,
            description=self.description,
        )


class ListQuery(BaseModel):
    """Canonical list query derived from a filter snapshot.

    ``frequency_days`` is set for presets; ``date_range`` only for a custom
    selection with both bounds chosen. A custom selection without a range
    carries neither and means "no date filter".
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    frequency_days: int | None = None
    date_range: DateRange | None = None
    type_filter: TypeFilter = TypeFilter.ALL


class FilterCriteria(BaseModel):
    """Immutable snapshot of the user's filter selection."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    frequency_preset: FrequencyPreset = FrequencyPreset.LAST_7_DAYS
    custom_range: DateRange | None = None
    type_filter: TypeFilter = TypeFilter.ALL

    def set_frequency(self, preset: FrequencyPreset | str) -> FilterCriteria:
        try:
            frequency_preset = FrequencyPreset(preset)
        except ValueError as exc:
            raise ValidationError(
                f"Unsupported frequency preset: {preset}",
                field_errors={"frequency_preset": "unsupported value"},
            ) from exc
        return self.model_copy(update={"frequency_preset": frequency_preset})

    def set_custom_range(self, start: date, end: date) -> FilterCriteria:
        if start > end:
            raise ValidationError(
                "Custom range start must not be after its end",
                field_errors={"custom_range": "start after end"},
            )
        return self.model_copy(update={"custom_range": DateRange(start_date=start, end_date=end)})

    def set_type(self, type_filter: TypeFilter | str) -> FilterCriteria:
        try:
            selected = TypeFilter(type_filter)
        except ValueError as exc:
            raise ValidationError(
                f"Unsupported type filter: {type_filter}",
                field_errors={"type_filter": "unsupported value"},
            ) from exc
        return self.model_copy(update={"type_filter": selected})

    def to_query(self) -> ListQuery:
        if self.frequency_preset == FrequencyPreset.CUSTOM:
            return ListQuery(date_range=self.custom_range, type_filter=self.type_filter)
        return ListQuery(frequency_days=self.frequency_preset.days, type_filter=self.type_filter)
