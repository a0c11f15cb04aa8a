"""
WAV file output.

Writes mono_<timestamp>.wav for a single sequence and poly_<timestamp>.wav
for several, into a results directory created on demand.
"""
from datetime import datetime
import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from audio.renderer import AudioRenderer
from core.models import Sequence
from outputs.base import FileOutput

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class WavFileOutput(FileOutput):
    """
    Render sequences and save them as a WAV file.

    Example:
        >>> output = WavFileOutput("results")
        >>> path = output.send_and_get_path(sequences)
    """

    def __init__(self,
                 results_dir: Union[str, Path],
                 renderer: Optional[AudioRenderer] = None,
                 clock: Callable[[], datetime] = datetime.now):
        """
        Initialize output.

        Args:
            results_dir: Directory receiving the files
            renderer: Renderer to use (defaults to AudioRenderer())
            clock: Timestamp source for file names
        """
        self.results_dir = Path(results_dir)
        self.renderer = renderer or AudioRenderer()
        self.clock = clock

    def file_name(self, sequence_count: int) -> str:
        """mono_/poly_ prefixed, timestamped file name."""
        prefix = "mono" if sequence_count == 1 else "poly"
        return f"{prefix}_{self.clock().strftime(TIMESTAMP_FORMAT)}.wav"

    def _unique_path(self, name: str) -> Path:
        # Renders within the same second get a numeric suffix
        path = self.results_dir / name
        counter = 1
        while path.exists():
            path = self.results_dir / f"{Path(name).stem}_{counter}.wav"
            counter += 1
        return path

    def send_and_get_path(self, sequences: Optional[List[Sequence]]) -> Optional[Path]:
        """
        Render and write sequences.

        Args:
            sequences: Sequences to render

        Returns:
            Path of the written file, or None for None/empty input
        """
        if not sequences:
            return None

        data = self.renderer.render(sequences)
        if data is None:
            return None

        self.results_dir.mkdir(parents=True, exist_ok=True)
        path = self._unique_path(self.file_name(len(sequences)))
        path.write_bytes(data)

        logger.info("WAV file saved: %s (%d bytes)", path, len(data))
        return path


__all__ = ['WavFileOutput']
