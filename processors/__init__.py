"""
Tone sequence processors.

Strategies that turn digit strings into tone sequences:
- base: TonesProcessor interface and metadata
- single_track: one tone per digit
- multi_track: '+' separated parallel tracks
- reach_track: octave groups with sustained notes
- harmonic_combiner: merge parallel tracks into chords
- timbre: harmonic stack expansion
- registry: lookup and selection by ID
"""
