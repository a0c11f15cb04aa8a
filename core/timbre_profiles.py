"""
Named timbre profiles.

Each profile is a vector of per-harmonic gains: index 0 is the fundamental,
index k the (k+1)-th harmonic. The TimbreExpander only needs the vector;
this table is the default source of vectors for the CLI.
"""
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

TIMBRE_PROFILES: Mapping[str, Tuple[float, ...]] = MappingProxyType({
    # Natural instruments
    "Piano": (1.0, 0.8, 0.6, 0.4, 0.3, 0.2),
    "Guitar": (1.0, 0.7, 0.5, 0.3, 0.2),
    "Violin": (1.0, 0.9, 0.7, 0.5, 0.4, 0.3, 0.2),
    "Flute": (1.0, 0.3, 0.1, 0.05),
    "Trumpet": (1.0, 0.8, 0.6, 0.4, 0.2, 0.1),
    "Organ": (1.0, 0.9, 0.8, 0.7, 0.6, 0.5, 0.4),
    "Clarinet": (1.0, 0.2, 0.6, 0.3, 0.5),   # odd harmonics
    "Saxophone": (1.0, 0.7, 0.8, 0.5, 0.6, 0.3),
    "Cello": (1.0, 0.8, 0.6, 0.5, 0.4, 0.3),
    "Oboe": (1.0, 0.9, 0.8, 0.6, 0.7, 0.4),

    # Synthetic
    "Sawtooth": (1.0, 0.5, 0.33, 0.25, 0.2, 0.17, 0.14),   # 1/n
    "Square": (1.0, 0.0, 0.33, 0.0, 0.2, 0.0, 0.14),       # odd only
    "Triangle": (1.0, 0.0, 0.11, 0.0, 0.04, 0.0, 0.02),    # odd, 1/n^2
    "Pulse": (1.0, 0.8, 0.6, 0.8, 0.4, 0.6, 0.2),
    "Bright": (0.8, 1.0, 0.9, 0.7, 0.8, 0.5, 0.6),
    "Warm": (1.0, 0.6, 0.3, 0.1, 0.05),
    "Metallic": (1.0, 0.3, 0.8, 0.2, 0.9, 0.4, 0.7),
    "Bell": (1.0, 0.2, 0.4, 0.1, 0.6, 0.3, 0.5),
    "Pad": (1.0, 0.9, 0.7, 0.8, 0.6, 0.7, 0.5),
    "Sine": (1.0,),

    # Effects
    "Hollow": (0.5, 0.0, 0.8, 0.0, 0.6, 0.0, 0.4),
    "Nasal": (1.0, 0.3, 0.9, 0.4, 0.8, 0.5),
    "Growl": (1.0, 0.9, 1.2, 0.8, 1.1, 0.7, 1.0),
    "Ethereal": (0.7, 1.0, 0.4, 0.8, 0.3, 0.6, 0.2),
})

_LOOKUP = {name.lower(): name for name in TIMBRE_PROFILES}


def available_profiles() -> List[str]:
    """Get all profile names, sorted."""
    return sorted(TIMBRE_PROFILES)


def has_profile(name: str) -> bool:
    """Check if a profile exists (case-insensitive)."""
    return name.strip().lower() in _LOOKUP


def get_profile(name: str) -> Optional[Tuple[float, ...]]:
    """
    Get a profile's coefficient vector by name.

    Args:
        name: Profile name (case-insensitive)

    Returns:
        Coefficient tuple, or None if not found
    """
    canonical = _LOOKUP.get(name.strip().lower())
    if canonical is None:
        return None
    return TIMBRE_PROFILES[canonical]
