"""
Output consumers for rendered sequences.

Modules:
- base: ToneOutput / FileOutput interfaces
- wav_file: WAV file writer
"""
