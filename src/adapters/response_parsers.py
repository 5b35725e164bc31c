"""Provider response parsers.

Each program is bound to one `ParserKind`; the kind selects a stateless
transform from the decoded JSON payload to a canonical amount string:

- at most 2 fractional digits, rounded half-up
- trailing zeros (and a bare dot) stripped
- no exponent notation, "0" meaning not eligible

Missing, null or empty-string amount fields yield "0". A payload that is not a JSON object,
or whose amount is not a non-negative number, raises `ParserMismatch`.

The scaled-integer parser never touches floats: provider values are 18
decimal fixed point and routinely exceed what a double can represent exactly.
"""

from __future__ import annotations

import decimal
import re
from decimal import Decimal
from typing import Any, Callable

from core.domain.errors import ParserMismatch
from core.domain.models import ParserKind

ResponseParser = Callable[..., str]

_TWO_PLACES = Decimal("0.01")
_MISSING = object()
_INTEGER_RE = re.compile(r"[0-9]+")


def format_scaled_integer(value: int, decimals: int = 18) -> str:
    """Render a fixed-point integer (`value / 10**decimals`) as a canonical amount.

    The fractional part is reduced to three digits by truncation and then
    rounded half-up on the third digit. A rounded fraction of 100 carries into
    the whole part.
    """

    if value < 0:
        raise ValueError("scaled amounts cannot be negative")

    scale = 10**decimals
    whole, remainder = divmod(value, scale)
    if remainder == 0:
        return str(whole)

    d3 = remainder * 1000 // scale
    d2 = (d3 + 5) // 10
    if d2 >= 100:
        return str(whole + 1)

    fractional = f"{d2:02d}".rstrip("0")
    if not fractional:
        return str(whole)
    return f"{whole}.{fractional}"


def canonical_decimal(value: Decimal) -> str:
    """Quantize a decimal to 2 places (half-up) and render it without exponent."""

    if not value.is_finite():
        raise ValueError(f"non-finite amount: {value}")
    if value < 0:
        raise ValueError("amounts cannot be negative")

    with decimal.localcontext() as ctx:
        ctx.prec = 100
        quantized = value.quantize(_TWO_PLACES, rounding=decimal.ROUND_HALF_UP)

    text = format(quantized, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


def _lookup(payload: Any, field: str) -> Any:
    if not isinstance(payload, dict):
        raise ParserMismatch(f"expected a JSON object, got {type(payload).__name__}")

    current: Any = payload
    for part in field.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _to_decimal(value: Any, field: str) -> Decimal:
    if isinstance(value, bool):
        raise ParserMismatch(f"field {field!r} is a boolean, not an amount")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except decimal.InvalidOperation:
            raise ParserMismatch(f"field {field!r} is not numeric: {value!r}") from None
    raise ParserMismatch(f"field {field!r} has unsupported type {type(value).__name__}")


def _canonical(value: Any, field: str) -> str:
    try:
        return canonical_decimal(_to_decimal(value, field))
    except (ValueError, decimal.InvalidOperation) as exc:
        raise ParserMismatch(f"field {field!r}: {exc}") from exc


def parse_identity_amount(payload: Any, *, field: str = "amount", decimals: int = 18) -> str:
    """Amount already expressed in whole tokens (string or number)."""

    value = _lookup(payload, field)
    if value is _MISSING or value is None or value == "":
        return "0"
    return _canonical(value, field)


def parse_direct_numeric(payload: Any, *, field: str = "amount", decimals: int = 18) -> str:
    """Amount given as a JSON number."""

    value = _lookup(payload, field)
    if value is _MISSING or value is None or value == "":
        return "0"
    if isinstance(value, str):
        # numeric strings are tolerated, anything else is a shape mismatch
        return _canonical(value, field)
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ParserMismatch(f"field {field!r} is not a number: {value!r}")
    return _canonical(value, field)


def parse_scaled_integer(payload: Any, *, field: str = "amount", decimals: int = 18) -> str:
    """Amount given as a base-10 integer scaled by `10**decimals` (wei style)."""

    value = _lookup(payload, field)
    if value is _MISSING or value is None or value == "":
        return "0"

    if isinstance(value, bool):
        raise ParserMismatch(f"field {field!r} is a boolean, not an amount")
    if isinstance(value, int):
        raw = value
    elif isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
        try:
            raw = int(value.strip())
        except ValueError as exc:
            # int() refuses strings past sys.get_int_max_str_digits()
            raise ParserMismatch(f"field {field!r}: {exc}") from exc
    else:
        raise ParserMismatch(f"field {field!r} is not a base-10 integer: {value!r}")

    if raw < 0:
        raise ParserMismatch(f"field {field!r} is negative")
    try:
        return format_scaled_integer(raw, decimals)
    except ValueError as exc:
        raise ParserMismatch(f"field {field!r}: {exc}") from exc


_ERROR_KEYS = ("error", "errors")


def is_error_flagged(payload: Any) -> bool:
    if not isinstance(payload, dict):
        return False
    if any(payload.get(key) for key in _ERROR_KEYS):
        return True
    return payload.get("eligible") is False


def parse_error_flagged(payload: Any, *, field: str = "amount", decimals: int = 18) -> str:
    """Provider that signals ineligibility with an error flag instead of a zero."""

    if is_error_flagged(payload):
        return "0"
    return parse_direct_numeric(payload, field=field, decimals=decimals)


PARSERS: dict[ParserKind, ResponseParser] = {
    ParserKind.IDENTITY_AMOUNT: parse_identity_amount,
    ParserKind.DIRECT_NUMERIC: parse_direct_numeric,
    ParserKind.SCALED_INTEGER: parse_scaled_integer,
    ParserKind.ERROR_FLAGGED: parse_error_flagged,
}


def parse_response(kind: ParserKind, payload: Any, *, field: str = "amount", decimals: int = 18) -> str:
    """Dispatch `payload` to the parser registered for `kind`."""

    parser = PARSERS[kind]
    return parser(payload, field=field, decimals=decimals)
