"""
Base classes for sequence outputs.

An output consumes the sequences produced by a processor. File outputs
additionally report where they wrote the result.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from core.models import Sequence


class ToneOutput(ABC):
    """Consumer of tone sequences."""

    @abstractmethod
    def send(self, sequences: Optional[List[Sequence]]) -> None:
        """
        Consume sequences.

        None or an empty list is accepted and ignored.
        """
        raise NotImplementedError()


class FileOutput(ToneOutput):
    """Output that writes one file per call."""

    def send(self, sequences: Optional[List[Sequence]]) -> None:
        self.send_and_get_path(sequences)

    @abstractmethod
    def send_and_get_path(self, sequences: Optional[List[Sequence]]) -> Optional[Path]:
        """
        Write sequences to a file.

        Returns:
            Path of the written file, or None when nothing was written
        """
        raise NotImplementedError()
