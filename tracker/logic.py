from datetime import date as dt_date
from decimal import Decimal, InvalidOperation

from .errors import ValidationError
from .models import KINDS, NewTransaction, Summary, Transaction

REQUIRED_FIELDS = ("kind", "description", "amount", "date")
AMOUNT_MIN = -(2**63)
AMOUNT_MAX = 2**63 - 1


def validate_kind(s: str) -> str:
    if s not in KINDS:
        raise ValidationError("kind must be income or expense")
    return s


def parse_amount(value) -> int:
    amount = _to_int(value)
    # sqlite INTEGER is a signed 64-bit value
    if not AMOUNT_MIN <= amount <= AMOUNT_MAX:
        raise ValidationError("amount out of range")
    return amount


def _to_int(value) -> int:
    # bool is an int subclass; true/false in a backup file is not an amount
    if isinstance(value, bool):
        raise ValidationError("amount invalid")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError("amount must be a whole number")
        return int(value)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("amount required")
    try:
        d = Decimal(value.strip())
    except InvalidOperation as e:
        raise ValidationError("amount invalid") from e
    if not d.is_finite():
        raise ValidationError("amount invalid")
    if d != d.to_integral_value():
        raise ValidationError("amount must be a whole number")
    return int(d)


def parse_date(value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("date required")
    # exported rows may carry a full timestamp, e.g. 2024-01-01T00:00:00.000Z
    text = value.strip().split("T", 1)[0]
    try:
        return dt_date.fromisoformat(text).isoformat()
    except ValueError as e:
        raise ValidationError("date must be YYYY-MM-DD") from e


def parse_new_transaction(payload) -> NewTransaction:
    """Validate one incoming record and coerce it to storable values.

    A field counts as missing when it is absent or falsy, so an amount of
    ``0`` or an empty description is rejected the same way as a missing key.
    """
    if not isinstance(payload, dict):
        raise ValidationError("transaction must be an object")
    missing = [field for field in REQUIRED_FIELDS if not payload.get(field)]
    if missing:
        raise ValidationError("all fields are required: " + ", ".join(missing))

    description = payload["description"]
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("description required")

    # "0" parses to the same stored value as 0, so both count as missing
    amount = parse_amount(payload["amount"])
    if amount == 0:
        raise ValidationError("all fields are required: amount")

    return NewTransaction(
        kind=validate_kind(payload["kind"]),
        description=description.strip(),
        amount=amount,
        date=parse_date(payload["date"]),
    )


def parse_restore_payload(payload) -> list[NewTransaction]:
    if not isinstance(payload, dict):
        raise ValidationError("invalid import format")
    rows = payload.get("transactions")
    if not isinstance(rows, list):
        raise ValidationError("invalid import format")

    parsed = []
    for index, row in enumerate(rows):
        try:
            parsed.append(parse_new_transaction(row))
        except ValidationError as exc:
            raise ValidationError(f"transactions[{index}]: {exc.message}") from exc
    return parsed


def summarize(transactions: list[Transaction]) -> Summary:
    income = 0
    expense = 0
    for txn in transactions:
        if txn.kind == "income":
            income += txn.amount
        elif txn.kind == "expense":
            expense += txn.amount
    return Summary(total_income=income, total_expense=expense)


def format_rupiah(amount: int) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}Rp {abs(amount):,}".replace(",", ".")
