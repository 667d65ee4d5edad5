from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

INCOME = "income"
EXPENSE = "expense"
KINDS = (INCOME, EXPENSE)

AmountLike = Union[Decimal, int, float, str]
DateLike = Union[datetime, date, str]


class TransactionParseError(ValueError):
    """Raised when form or storage input cannot become a Transaction."""

    def __init__(self, field: str, value, message: str):
        super().__init__(message)
        self.field = field
        self.value = value
        self.message = message


def parse_amount(value: AmountLike) -> Decimal:
    if isinstance(value, bool):
        raise TransactionParseError("amount", value, f"Invalid amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        # form input may use a decimal comma
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise TransactionParseError("amount", value, f"Invalid amount: {value!r}") from None
    else:
        raise TransactionParseError("amount", value, f"Invalid amount: {value!r}")

    if not amount.is_finite():
        raise TransactionParseError("amount", value, f"Invalid amount: {value!r}")
    if amount < 0:
        raise TransactionParseError("amount", value, "Amount must not be negative")
    # stored as a JSON number, so it has to survive a float round-trip
    if Decimal(repr(float(amount))) != amount:
        raise TransactionParseError("amount", value, f"Amount cannot be stored exactly: {value!r}")
    return amount


def parse_id(value) -> int:
    """Whole-number id; rejects text and floats that are not integral."""
    if isinstance(value, bool):
        raise TransactionParseError("id", value, f"Invalid id: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value)
    raise TransactionParseError("id", value, f"Invalid id: {value!r}")


def _naive_local(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def parse_occurred_on(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return _naive_local(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _naive_local(datetime.fromisoformat(text))
        except ValueError:
            raise TransactionParseError("date", value, f"Invalid date: {value!r}") from None
    raise TransactionParseError("date", value, f"Invalid date: {value!r}")


@dataclass(frozen=True)
class Transaction:
    id: int
    kind: str            # "income" or "expense"
    amount: Decimal      # always a magnitude, sign comes from kind
    category: str
    description: str
    occurred_on: datetime

    @property
    def is_income(self) -> bool:
        return self.kind == INCOME

    @property
    def is_expense(self) -> bool:
        return self.kind == EXPENSE

    def matches_search(self, term: str) -> bool:
        term = term.lower()
        return term in self.description.lower() or term in self.category.lower()

    def in_range(self, start: datetime, end: datetime) -> bool:
        return start <= self.occurred_on <= end

    def serialize(self) -> dict:
        """Plain record for the persistence layer, date as ISO-8601 text."""
        return {
            "id": self.id,
            "kind": self.kind,
            "amount": float(self.amount),
            "category": self.category,
            "description": self.description,
            "date": self.occurred_on.isoformat(),
        }

    @classmethod
    def deserialize(cls, data: dict) -> "Transaction":
        # records written before the rename carry "type" instead of "kind"
        kind = data.get("kind", data.get("type"))
        return create_transaction(
            parse_id(data.get("id")),
            kind,
            data.get("amount"),
            data.get("category"),
            data.get("description"),
            data.get("date"),
        )


def create_transaction(
    id: int,
    kind: str,
    amount: AmountLike,
    category: str,
    description: str,
    date: DateLike,
) -> Transaction:
    if kind not in KINDS:
        raise TransactionParseError("kind", kind, f"Unknown transaction kind: {kind!r}")
    if not isinstance(category, str) or not category.strip():
        raise TransactionParseError("category", category, "Category is required")
    if description is None:
        description = ""
    elif not isinstance(description, str):
        raise TransactionParseError("description", description, f"Invalid description: {description!r}")
    return Transaction(
        id=id,
        kind=kind,
        amount=parse_amount(amount),
        category=category,
        description=description,
        occurred_on=parse_occurred_on(date),
    )


@dataclass(frozen=True)
class TransactionDraft:
    """Unvalidated form payload; amount and date are usually text."""

    kind: str = EXPENSE
    amount: AmountLike = ""
    category: str = ""
    description: str = ""
    date: DateLike = ""

    @classmethod
    def from_transaction(cls, t: Transaction) -> "TransactionDraft":
        return cls(
            kind=t.kind,
            amount=str(t.amount),
            category=t.category,
            description=t.description,
            date=t.occurred_on.date().isoformat(),
        )


@dataclass(frozen=True)
class FilterCriteria:
    search_term: str = ""
    period: str = "all"


@dataclass(frozen=True)
class PeriodWindow:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class DominantCategory:
    category: str
    total: Decimal


@dataclass(frozen=True)
class CategoryBreakdown:
    category: str
    income_total: Decimal
    expense_total: Decimal


@dataclass(frozen=True)
class CategoryShare:
    category: str
    amount: Decimal


@dataclass(frozen=True)
class SummaryReport:
    balance: Decimal
    total_income: Decimal
    total_expense: Decimal
    highest_expense: Optional[Transaction]
    dominant_category: Optional[DominantCategory]
