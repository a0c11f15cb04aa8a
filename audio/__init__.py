"""
Audio rendering layer for mathtone.

Modules:
- dsp: amplitude compensation, mixing gains, synthesis kernel
- renderer: sequences to stereo buffer and WAV bytes
- wav: RIFF/WAVE serialization
"""
