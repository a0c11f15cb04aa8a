"""
User settings stored in ~/.mathtone/settings.json.

Settings are grouped by category. Loading merges the file over the defaults
per category, so settings added in newer versions always have a value.
"""
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from core.constants import DEFAULT_BASE_FREQUENCY, DEFAULT_BASE_DURATION_MS, SAMPLE_RATE

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Dict[str, Any]] = {
    "sound": {
        "base_frequency": DEFAULT_BASE_FREQUENCY,
        "base_duration_ms": DEFAULT_BASE_DURATION_MS,
        "input_base": 10,
        "output_bases": [10],
        "reach": False,
    },
    "render": {
        "sample_rate": SAMPLE_RATE,
        "base_amplitude": 0.3,
        "sequence_scaling_exponent": 0.7,
        "minimum_scaling_factor": 0.1,
        "normalization_threshold": 0.95,
        "normalization_target_peak": 0.9,
        "reference_frequency": 880.0,
        "amplification_factor": 2.0,
        "max_amplification": 3.0,
        "minimal_shift": 0.2,
        "maximal_shift": 0.9,
    },
    "output": {
        "results_dir": str(Path.home() / ".mathtone" / "results"),
    },
}


def get_settings_path() -> Path:
    """Default location of the settings file."""
    return Path.home() / ".mathtone" / "settings.json"


def load_settings(path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load settings, merged over the defaults.

    A missing file is created with the defaults. An unreadable file is
    reported and the defaults are used.

    Args:
        path: Settings file (defaults to ~/.mathtone/settings.json)

    Returns:
        Settings dictionary (category -> key -> value)
    """
    if path is None:
        path = get_settings_path()
    path = Path(path)

    settings = copy.deepcopy(DEFAULT_SETTINGS)

    if not path.exists():
        try:
            save_settings(settings, path)
            logger.info("Created new settings file with defaults: %s", path)
        except OSError as e:
            logger.warning("Failed to save default settings: %s", e)
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Failed to load settings from %s: %s", path, e)
        return settings

    if not isinstance(loaded, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return settings

    for category in settings:
        if isinstance(loaded.get(category), dict):
            settings[category].update(loaded[category])

    return settings


def save_settings(settings: Dict[str, Dict[str, Any]], path: Optional[Path] = None):
    """
    Write settings to disk.

    Raises:
        OSError: If the file cannot be written
    """
    if path is None:
        path = get_settings_path()
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
