"""
Unit tests for processor lookup and selection.
"""
import pytest

from processors.multi_track import MultiTrackProcessor
from processors.reach_track import ReachSingleTrackProcessor
from processors.registry import PROCESSORS, create_processor, select_processor
from processors.single_track import SingleTrackProcessor


class TestCreateProcessor:
    """Tests for lookup by ID."""

    def test_builtin_ids(self):
        assert list(PROCESSORS) == ["SINGLE", "MULTI", "REACH"]

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            PROCESSORS["ARPEGGIO"] = SingleTrackProcessor

    @pytest.mark.parametrize("processor_id,cls", [
        ("SINGLE", SingleTrackProcessor),
        ("MULTI", MultiTrackProcessor),
        ("REACH", ReachSingleTrackProcessor),
    ])
    def test_create(self, processor_id, cls):
        instance = create_processor(processor_id)
        assert type(instance) is cls
        assert instance.get_metadata().id == processor_id

    def test_passes_arguments(self):
        instance = create_processor("SINGLE", base_frequency=100.0, base_duration_ms=50)
        assert instance.base_frequency == 100.0
        assert instance.base_duration_ms == 50

    def test_bad_arguments(self):
        with pytest.raises(ValueError):
            create_processor("SINGLE", base_frequency=-1.0)

    def test_unknown_id(self):
        with pytest.raises(ValueError, match="Unknown processor ID"):
            create_processor("NOPE")


class TestSelectProcessor:
    """Tests for expression-based selection."""

    def test_plain_expression(self):
        assert type(select_processor("123")) is SingleTrackProcessor

    def test_plain_expression_with_reach(self):
        assert type(select_processor("123", reach=True)) is ReachSingleTrackProcessor

    def test_polyphonic_expression(self):
        processor = select_processor("1+2", reach=True, merge_chords=True,
                                     base_duration_ms=100)
        assert type(processor) is MultiTrackProcessor
        assert type(processor.track_processor) is ReachSingleTrackProcessor
        assert processor.track_processor.base_duration_ms == 100
        assert processor.merge_chords

    def test_polyphonic_defaults_to_parallel_tracks(self):
        processor = select_processor("1+2")
        assert type(processor.track_processor) is SingleTrackProcessor
        assert not processor.merge_chords
