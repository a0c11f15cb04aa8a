"""
Base classes for tone sequence processors.

mathtone processor system:
- Unified TonesProcessor interface (digits in, sequences out)
- Declarative identity metadata (ProcessorMetadata)
- Shared preprocessing: named constants, invalid digit filtering,
  base conversion
- Pure functions: processors hold configuration only, never state
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import List, Mapping, Optional

from core.constants import (
    DEFAULT_BASE_FREQUENCY,
    DEFAULT_BASE_DURATION_MS,
    NAMED_CONSTANTS,
    resolve_named_constant,
)
from core.models import NumberFormat, Sequence
from core import number_converter
from core.tone_mapper import ToneMapper

logger = logging.getLogger(__name__)


@dataclass
class ProcessorMetadata:
    """
    Processor identity.

    Attributes:
        id: Unique processor ID (UPPER_SNAKE_CASE)
        name: Display name
        version: Semantic version string
        description: Brief description
        polyphonic: True if the processor can emit several sequences
    """
    id: str
    name: str
    version: str
    description: str
    polyphonic: bool = False

    def __post_init__(self):
        """Validate metadata."""
        if not self.id:
            raise ValueError("Processor ID is required")
        if not self.id.isupper():
            raise ValueError(f"Processor ID must be UPPER_CASE: {self.id}")
        if not self.name:
            raise ValueError("Processor name is required")

        parts = self.version.split(".")
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid version format: {self.version}. Expected X.Y.Z")


class TonesProcessor(ABC):
    """
    Base class for all sequence processors.

    Processors must implement:
    1. get_metadata() - Define processor identity
    2. process() - Turn a digit string into one or more sequences
    """

    def __init__(self,
                 base_duration_ms: float = DEFAULT_BASE_DURATION_MS,
                 base_frequency: float = DEFAULT_BASE_FREQUENCY,
                 constants: Optional[Mapping[str, str]] = None):
        """
        Initialize processor.

        Args:
            base_duration_ms: Duration of one time slot in milliseconds
            base_frequency: Frequency of digit value 1 in Hz
            constants: Named constant lookup (defaults to NAMED_CONSTANTS)
        """
        self.mapper = ToneMapper(base_frequency, base_duration_ms)
        self.constants = NAMED_CONSTANTS if constants is None else constants

    @property
    def base_frequency(self) -> float:
        return self.mapper.base_frequency

    @property
    def base_duration_ms(self) -> float:
        return self.mapper.base_duration_ms

    @abstractmethod
    def get_metadata(self) -> ProcessorMetadata:
        """
        Get processor metadata.

        Returns:
            ProcessorMetadata describing this processor
        """
        raise NotImplementedError()

    @abstractmethod
    def process(self,
                digits: str,
                output_format: NumberFormat,
                input_format: Optional[NumberFormat] = None) -> List[Sequence]:
        """
        Turn a digit string into tone sequences.

        PURE FUNCTION CONTRACT:
        - Same inputs must produce same outputs
        - Never raises for bad characters: they are skipped

        Args:
            digits: Digit string, named constant, or (for polyphonic
                    processors) '+' separated expression
            output_format: Base whose digits become tones
            input_format: Base of the input (defaults to output_format)

        Returns:
            List of sequences (never empty)
        """
        raise NotImplementedError()

    def prepare_digits(self,
                       digits: str,
                       output_format: NumberFormat,
                       input_format: Optional[NumberFormat] = None) -> str:
        """
        Resolve, clean and convert the input into output_format digits.

        Steps:
        1. Named constant substitution, unless the input is already a valid
           input_format digit string ("E" in HEX is the digit 14)
        2. Characters invalid for input_format are dropped
        3. Base conversion when the formats differ

        Returns:
            Uppercase digit string in output_format
        """
        if input_format is None:
            input_format = output_format

        if number_converter.is_valid(digits, input_format):
            resolved = digits
        else:
            resolved = resolve_named_constant(digits, self.constants)
        cleaned = number_converter.filter_valid(resolved, input_format)

        if input_format == output_format:
            return cleaned

        converted = number_converter.convert(cleaned, input_format, output_format)
        logger.debug("Converted %d digit(s) from base %d to %d digit(s) in base %d",
                     len(cleaned), input_format.base, len(converted), output_format.base)
        return converted
