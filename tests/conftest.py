"""
Shared pytest fixtures for mathtone tests.
"""
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from core.models import Sequence, Tone


@pytest.fixture
def a440_sequence():
    """One 440 Hz tone lasting 500 ms."""
    return Sequence.from_tones([Tone.single(440.0, 500)], title="A440")


@pytest.fixture
def settings_file(tmp_path):
    """Path of a not yet existing settings file."""
    return tmp_path / "config" / "settings.json"
