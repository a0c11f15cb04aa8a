"""
Processor lookup and selection.

The three strategies are fixed: SINGLE, MULTI and REACH. Callers pick one
by ID, or let select_processor choose from the shape of the expression.
"""
from types import MappingProxyType
from typing import Mapping, Type
import logging

from processors.base import TonesProcessor
from processors.multi_track import MultiTrackProcessor, is_polyphonic
from processors.reach_track import ReachSingleTrackProcessor
from processors.single_track import SingleTrackProcessor

logger = logging.getLogger(__name__)

# Processor ID -> class
PROCESSORS: Mapping[str, Type[TonesProcessor]] = MappingProxyType({
    "SINGLE": SingleTrackProcessor,
    "MULTI": MultiTrackProcessor,
    "REACH": ReachSingleTrackProcessor,
})


def create_processor(processor_id: str, **kwargs) -> TonesProcessor:
    """
    Create a processor by ID.

    Args:
        processor_id: One of PROCESSORS
        **kwargs: Constructor arguments (base_duration_ms, base_frequency, ...)

    Raises:
        ValueError: If the ID is unknown or the arguments are rejected
    """
    processor_class = PROCESSORS.get(processor_id)
    if processor_class is None:
        raise ValueError(f"Unknown processor ID: {processor_id}")

    try:
        return processor_class(**kwargs)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Failed to create instance of '{processor_id}': {e}") from e


def select_processor(expression: str,
                     reach: bool = False,
                     merge_chords: bool = False,
                     **kwargs) -> TonesProcessor:
    """
    Pick the processor for an input expression.

    Args:
        expression: Digit string, possibly '+' separated
        reach: Use the octave-group processor per track
        merge_chords: Merge parallel tracks into chords (polyphonic only)
        **kwargs: Constructor arguments shared by all processors

    Returns:
        MULTI wrapping REACH or SINGLE for polyphonic expressions,
        otherwise REACH or SINGLE
    """
    track_processor = create_processor("REACH" if reach else "SINGLE", **kwargs)

    if not is_polyphonic(expression):
        processor = track_processor
    else:
        processor = create_processor(
            "MULTI",
            track_processor=track_processor,
            merge_chords=merge_chords,
            **kwargs,
        )

    logger.debug("Selected processor %s", processor.get_metadata().id)
    return processor


__all__ = ['PROCESSORS', 'create_processor', 'select_processor']
