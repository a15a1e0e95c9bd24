from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from library_tracker.utils.errors import ValidationError

_CENT = Decimal("0.01")
# Numeric(10, 2) on books.price
MAX_PRICE = Decimal("99999999.99")
# signed 64-bit INTEGER columns
MIN_INT = -(2 ** 63)
MAX_INT = 2 ** 63 - 1


def json_object(payload) -> dict:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def require_text(value, field: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def _parse_int(value, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValidationError(f"{field} must be an integer") from None
    raise ValidationError(f"{field} must be an integer")


def to_int(value, field: str) -> int:
    """Parse an integer from JSON or a query string.

    Accepts ints, integral floats and numeric strings; booleans and
    fractional values are rejected, as is anything outside the signed
    64-bit range the store can hold.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required")
    number = _parse_int(value, field)
    if not MIN_INT <= number <= MAX_INT:
        raise ValidationError(f"{field} is out of range")
    return number


def optional_int(value, field: str) -> int | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return to_int(value, field)


def non_negative_int(value, field: str) -> int:
    number = to_int(value, field)
    if number < 0:
        raise ValidationError(f"{field} cannot be negative")
    return number


def positive_quantity(value) -> int:
    try:
        quantity = to_int(value, "quantity")
    except ValidationError:
        raise ValidationError("quantity must be a positive integer") from None
    if quantity < 1:
        raise ValidationError("quantity must be a positive integer")
    return quantity


def non_negative_price(value, field: str = "price") -> Decimal:
    if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number") from None
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number")
    if amount < 0:
        raise ValidationError(f"{field} cannot be negative")
    if amount > MAX_PRICE:
        raise ValidationError(f"{field} cannot exceed {MAX_PRICE}")
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def normalize_email(value) -> str:
    email = require_text(value, "email").lower()
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValidationError("email is not valid")
    return email
