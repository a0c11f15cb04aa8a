"""
Digit string conversion between supported number formats.

Two conversion paths:
- Power-of-two to power-of-two (2, 4, 8, 16, 32): digits are expanded to a
  bit string and regrouped from the least-significant end. No integer
  arithmetic on the whole value, so strings of any length convert in
  linear time.
- Anything involving base 10: the value goes through a Python int. Parsing
  and formatting are done digit-by-digit / in chunks so the interpreter's
  int<->str digit limit never applies.
"""
import logging
from typing import List

from core.exceptions import FormatError
from core.models import NumberFormat, DIGIT_ALPHABET

logger = logging.getLogger(__name__)

# Digits emitted per divmod step when formatting large integers
_FORMAT_CHUNK_DIGITS = 64


def validate(digits: str, fmt: NumberFormat) -> str:
    """
    Check that every character belongs to the format's alphabet.

    Args:
        digits: Digit string (case-insensitive)
        fmt: Number format

    Returns:
        Upper-cased digit string

    Raises:
        FormatError: On the first invalid character
    """
    upper = digits.upper()
    alphabet = fmt.alphabet
    for position, char in enumerate(upper):
        if char not in alphabet:
            raise FormatError(
                f"Invalid character {digits[position]!r} at position {position} "
                f"for base {fmt.base}",
                character=digits[position],
                position=position,
                base=fmt.base,
            )
    return upper


def is_valid(digits: str, fmt: NumberFormat) -> bool:
    """Check without raising whether every character is a digit of fmt."""
    alphabet = fmt.alphabet
    return all(c in alphabet for c in digits.upper())


def filter_valid(digits: str, fmt: NumberFormat) -> str:
    """
    Drop every character that is not a digit of the format.

    Args:
        digits: Digit string (case-insensitive)
        fmt: Number format

    Returns:
        Upper-cased string containing only valid digits
    """
    alphabet = fmt.alphabet
    kept = [c for c in digits.upper() if c in alphabet]
    dropped = len(digits) - len(kept)
    if dropped:
        logger.debug("Dropped %d character(s) invalid for base %d", dropped, fmt.base)
    return "".join(kept)


def strip_leading_zeros(digits: str) -> str:
    """Strip leading zeros, keeping at least one digit."""
    if not digits:
        return digits
    stripped = digits.lstrip("0")
    return stripped if stripped else "0"


def canonicalize(digits: str, fmt: NumberFormat) -> str:
    """
    Canonical form of a digit string: validated, uppercase, no superfluous
    leading zeros.

    Raises:
        FormatError: If the string contains an invalid character
    """
    return strip_leading_zeros(validate(digits, fmt))


def parse_integer(digits: str, fmt: NumberFormat) -> int:
    """
    Parse a digit string into an arbitrary-precision integer.

    Args:
        digits: Digit string (case-insensitive, non-empty)
        fmt: Number format of the string

    Returns:
        Integer value

    Raises:
        FormatError: If the string is empty or contains an invalid character
    """
    if not digits:
        raise FormatError("Cannot parse an empty digit string", base=fmt.base)
    upper = validate(digits, fmt)
    base = fmt.base
    value = 0
    for char in upper:
        value = value * base + DIGIT_ALPHABET.index(char)
    return value


def format_integer(value: int, fmt: NumberFormat) -> str:
    """
    Format a non-negative integer as a digit string.

    Args:
        value: Non-negative integer
        fmt: Target number format

    Returns:
        Uppercase digit string without leading zeros ("0" for zero)
    """
    if value < 0:
        raise ValueError(f"Value must be non-negative, got {value}")
    if value == 0:
        return "0"

    base = fmt.base
    chunk_divisor = base ** _FORMAT_CHUNK_DIGITS
    chunks: List[str] = []
    while value:
        value, chunk = divmod(value, chunk_divisor)
        chunk_digits = []
        for _ in range(_FORMAT_CHUNK_DIGITS):
            chunk, digit = divmod(chunk, base)
            chunk_digits.append(DIGIT_ALPHABET[digit])
        chunks.append("".join(reversed(chunk_digits)))

    return strip_leading_zeros("".join(reversed(chunks)))


def to_bits(digits: str, fmt: NumberFormat) -> str:
    """
    Expand a power-of-two digit string into a bit string.

    Each digit becomes exactly bits_per_digit bits (zero padded).

    Raises:
        FormatError: On invalid characters
        ValueError: If the format is not a power of two
    """
    width = fmt.bits_per_digit
    if width is None:
        raise ValueError(f"Base {fmt.base} is not a power of two")
    upper = validate(digits, fmt)
    return "".join(format(DIGIT_ALPHABET.index(c), f"0{width}b") for c in upper)


def from_bits(bits: str, fmt: NumberFormat) -> str:
    """
    Group a bit string into digits of a power-of-two format.

    Groups are taken from the least-significant end; the leftmost group is
    zero padded. Leading zeros of the result are stripped.
    """
    width = fmt.bits_per_digit
    if width is None:
        raise ValueError(f"Base {fmt.base} is not a power of two")
    if not bits:
        return ""

    padding = (-len(bits)) % width
    padded = "0" * padding + bits
    digits = [
        DIGIT_ALPHABET[int(padded[i:i + width], 2)]
        for i in range(0, len(padded), width)
    ]
    return strip_leading_zeros("".join(digits))


def convert_via_bits(digits: str, from_format: NumberFormat, to_format: NumberFormat) -> str:
    """
    Convert between two power-of-two formats through a binary intermediate.

    Raises:
        FormatError: On invalid characters
        ValueError: If either format is not a power of two
    """
    if not digits:
        return ""
    return from_bits(to_bits(digits, from_format), to_format)


def convert_via_integer(digits: str, from_format: NumberFormat, to_format: NumberFormat) -> str:
    """
    Convert between any two formats through an arbitrary-precision integer.

    Raises:
        FormatError: On invalid characters
    """
    if not digits:
        return ""
    return format_integer(parse_integer(digits, from_format), to_format)


def convert(digits: str, from_format: NumberFormat, to_format: NumberFormat) -> str:
    """
    Convert a digit string from one format to another.

    Args:
        digits: Input digit string (case-insensitive)
        from_format: Format of the input
        to_format: Desired output format

    Returns:
        Converted uppercase digit string. Empty input gives empty output and
        identical formats return the input unchanged.

    Raises:
        FormatError: If the input contains a character invalid for from_format

    Example:
        >>> convert("1010", NumberFormat.BIN, NumberFormat.HEX)
        'A'
        >>> convert("FF", NumberFormat.HEX, NumberFormat.OCT)
        '377'
    """
    if not digits:
        return ""
    if from_format == to_format:
        return digits
    if from_format.is_power_of_two and to_format.is_power_of_two:
        return convert_via_bits(digits, from_format, to_format)
    return convert_via_integer(digits, from_format, to_format)
