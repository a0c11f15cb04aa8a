"""
Core data structures and conversions for mathtone.

Modules:
- models: Immutable data structures (NumberFormat, Tone, Sequence)
- number_converter: Digit string conversion between bases
- tone_mapper: Digit value to tone mapping
- constants: Default sound settings and named mathematical constants
- timbre_profiles: Named harmonic coefficient vectors
- settings: User settings file (~/.mathtone/settings.json)
- exceptions: Error types
"""
