"""
Decimal text conversion for Cog integers.

CPython refuses to convert integers of more than a few thousand digits to
or from decimal text in one step (``sys.get_int_max_str_digits``). Cog
integers have no size limit, so conversions go through chunks that stay
below the smallest limit the interpreter accepts.
"""

# The interpreter rejects any limit below 640 digits
CHUNK_DIGITS = 600
_CHUNK_BASE = 10 ** CHUNK_DIGITS


def parse_decimal(text: str) -> int:
    """
    Convert an optional '-' followed by ASCII digits to an int.

    Raises:
        ValueError: If the text is not a decimal integer
    """
    negative = text.startswith("-")
    digits = text[1:] if negative else text
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"invalid decimal integer: {text!r}")

    value = 0
    for start in range(0, len(digits), CHUNK_DIGITS):
        chunk = digits[start:start + CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return -value if negative else value


def format_decimal(value: int) -> str:
    """Decimal text of an int of any size."""
    if value < 0:
        return "-" + format_decimal(-value)
    if value < _CHUNK_BASE:
        return str(value)

    chunks = []
    while value >= _CHUNK_BASE:
        value, low = divmod(value, _CHUNK_BASE)
        chunks.append(str(low).zfill(CHUNK_DIGITS))
    chunks.append(str(value))
    return "".join(reversed(chunks))
