"""
Default sound settings and named mathematical constants.

The named-constant table is a convenience input: a processor looks the raw
input up once before any base conversion, and a miss means "use the input
verbatim". Processors accept any mapping, this one is only the default.
"""
from types import MappingProxyType
from typing import Mapping, Optional

# Default sound settings
DEFAULT_BASE_FREQUENCY = 180.0   # Hz per digit value
DEFAULT_BASE_DURATION_MS = 300   # one time slot

# Audio output
SAMPLE_RATE = 44100
NUM_CHANNELS = 2
BITS_PER_SAMPLE = 16

# Separator for polyphonic expressions ("123+456")
TRACK_SEPARATOR = "+"

# Decimal digits of common constants (decimal point removed)
NAMED_CONSTANTS: Mapping[str, str] = MappingProxyType({
    "PI": (
        "3"
        "1415926535897932384626433832795028841971693993751058209749445923"
        "078164062862089986280348253421170679"
    ),
    "E": "2" "71828182845904523536028747135266249775724709369995",
    "PHI": "1" "61803398874989484820458683436563811772030917980576",
    "SQRT2": "1" "41421356237309504880168872420969807856967187537694",
    "SQRT3": "1" "73205080756887729352744634150587236694280525381038",
    "LN2": "0" "69314718055994530941723212145817656807550013436025",
})


def resolve_named_constant(text: str,
                           table: Optional[Mapping[str, str]] = None) -> str:
    """
    Substitute a named constant for its digits.

    Args:
        text: Raw user input (e.g., "pi" or "31415")
        table: Name -> digits mapping (defaults to NAMED_CONSTANTS)

    Returns:
        Digits of the constant, or the input unchanged if no name matches

    Example:
        >>> resolve_named_constant("pi")[:6]
        '314159'
        >>> resolve_named_constant("123")
        '123'
    """
    if table is None:
        table = NAMED_CONSTANTS
    if text in table:
        return table[text]
    key = text.strip().upper()
    return table.get(key, text)
