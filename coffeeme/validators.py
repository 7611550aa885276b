"""
Coercion helpers shared by the service layer.

Services accept plain dicts from serializers, management commands and tests
alike, so every numeric input goes through these before it reaches a model.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .exceptions import ValidationError

CENT = Decimal('0.01')


def to_decimal(value, field, minimum=None, maximum=None):
    """Convert value to a Decimal rounded to cents, enforcing optional bounds"""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{field} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number")
    if minimum is not None and amount < minimum:
        raise ValidationError(f"{field} cannot be less than {minimum}")
    if maximum is not None and amount > maximum:
        raise ValidationError(f"{field} cannot be greater than {maximum}")
    return amount


def to_int(value, field, minimum=None):
    """Convert value to an int; floats with a fractional part are rejected"""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a whole number")
    if isinstance(value, int):
        number = value
    else:
        try:
            as_decimal = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationError(f"{field} must be a whole number")
        if not as_decimal.is_finite() or as_decimal != as_decimal.to_integral_value():
            raise ValidationError(f"{field} must be a whole number")
        number = int(as_decimal)
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}")
    return number
