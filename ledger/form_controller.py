"""Add/edit form binding for a single transaction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from ledger.mutation_coordinator import MutationCoordinator, MutationResult, MutationStatus
from shared.errors import NotFoundError, ValidationError
from shared.models import Transaction, TransactionCategory, TransactionFields, TransactionType


logger = logging.getLogger(__name__)

EDITOR_DATE_FORMAT = "%Y-%m-%d"
FIELD_NAMES: tuple[str, ...] = ("amount", "type", "category", "date", "reference", "description")
REQUIRED_FIELDS: tuple[str, ...] = ("amount", "type", "category", "date")


@dataclass(frozen=True, slots=True)
class CreateMode:
    pass


@dataclass(frozen=True, slots=True)
class EditMode:
    record: Transaction


FormMode = CreateMode | EditMode


@dataclass(frozen=True, slots=True)
class FormState:
    is_open: bool
    mode: FormMode
    fields: dict[str, str] = field(default_factory=dict)
    validation_errors: dict[str, str] = field(default_factory=dict)
    submitting: bool = False

    @property
    def title(self) -> str:
        return "Edit Transaction" if isinstance(self.mode, EditMode) else "Add Transaction"


def empty_fields() -> dict[str, str]:
    return {name: "" for name in FIELD_NAMES}


def fields_from_record(record: Transaction) -> dict[str, str]:
    """Render a stored transaction into editor input values."""

    return {
        "amount": str(record.amount),
        "type": record.type.value,
        "category": record.category.value,
        "date": record.date.strftime(EDITOR_DATE_FORMAT),
        "reference": record.reference,
        "description": record.description,
    }


def parse_fields(values: dict[str, str]) -> TransactionFields:
    """Validate editor values and build the mutation payload."""

    errors: dict[str, str] = {}
    for name in REQUIRED_FIELDS:
        if not values.get(name, "").strip():
            errors[name] = "required"

    amount: Decimal | None = None
    if "amount" not in errors:
        try:
            amount = Decimal(values["amount"].strip())
        except InvalidOperation:
            errors["amount"] = "must be numeric"
        else:
            if not amount.is_finite():
                errors["amount"] = "must be numeric"
            elif amount < 0:
                errors["amount"] = "must not be negative"

    transaction_type: TransactionType | None = None
    if "type" not in errors:
        try:
            transaction_type = TransactionType(values["type"].strip())
        except ValueError:
            errors["type"] = "unsupported type"

    category: TransactionCategory | None = None
    if "category" not in errors:
        try:
            category = TransactionCategory(values["category"].strip())
        except ValueError:
            errors["category"] = "unsupported category"

    occurred_on: date | None = None
    if "date" not in errors:
        try:
            occurred_on = datetime.strptime(values["date"].strip(), EDITOR_DATE_FORMAT).date()
        except ValueError:
            errors["date"] = "expected YYYY-MM-DD"

    if errors:
        raise ValidationError("Transaction form is invalid", field_errors=errors)

    return TransactionFields(
        date=occurred_on,
        amount=amount,
        type=transaction_type,
        category=category,
        reference=values.get("reference", "").strip(),
        description=values.get("description", "").strip(),
    )


class FormController:
    def __init__(self, coordinator: MutationCoordinator) -> None:
        self._coordinator = coordinator
        self._is_open = False
        self._mode: FormMode = CreateMode()
        self._fields = empty_fields()
        self._validation_errors: dict[str, str] = {}
        self._submitting = False

    @property
    def mode(self) -> FormMode:
        return self._mode

    def snapshot(self) -> FormState:
        return FormState(
            is_open=self._is_open,
            mode=self._mode,
            fields=dict(self._fields),
            validation_errors=dict(self._validation_errors),
            submitting=self._submitting,
        )

    def _reset(self) -> None:
        self._mode = CreateMode()
        self._fields = empty_fields()
        self._validation_errors = {}

    def open_create(self) -> None:
        self._reset()
        self._is_open = True

    def open_edit(self, record: Transaction) -> None:
        self._mode = EditMode(record=record)
        self._fields = fields_from_record(record)
        self._validation_errors = {}
        self._is_open = True

    def set_field(self, name: str, value: str | date | Decimal | None) -> None:
        if name not in FIELD_NAMES:
            raise ValueError(f"Unknown form field: {name}")

        if value is None:
            text = ""
        elif isinstance(value, date):
            text = value.strftime(EDITOR_DATE_FORMAT)
        else:
            text = str(value)
        self._fields[name] = text
        self._validation_errors.pop(name, None)

    def cancel(self) -> None:
        self._reset()
        self._is_open = False

    def validate(self) -> TransactionFields:
        try:
            fields = parse_fields(self._fields)
        except ValidationError as exc:
            self._validation_errors = exc.field_errors
            raise
        self._validation_errors = {}
        return fields

    async def submit(self) -> MutationResult:
        """Validate, then create or update depending on the current mode."""

        if self._submitting:
            logger.info("form_submit_ignored_pending")
            return MutationResult(status=MutationStatus.SKIPPED)

        try:
            fields = self.validate()
        except ValidationError as exc:
            logger.info("form_validation_failed fields=%s", sorted(exc.field_errors))
            return MutationResult(status=MutationStatus.FAILED, error=exc)

        mode = self._mode
        self._submitting = True
        try:
            if isinstance(mode, EditMode):
                result = await self._coordinator.update(mode.record.id, fields)
            else:
                result = await self._coordinator.create(fields)
        finally:
            self._submitting = False

        if self._mode is not mode:
            return result
        if result.ok:
            self._reset()
            self._is_open = False
        elif isinstance(result.error, NotFoundError) and isinstance(mode, EditMode):
            logger.info("form_edit_target_missing transaction_id=%s", mode.record.id)
            self._reset()
            self._is_open = False
        return result
