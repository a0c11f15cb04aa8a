"""
RIFF/WAVE serialization.

Canonical 44-byte header followed by interleaved little-endian 16-bit PCM.
"""
from dataclasses import dataclass
import struct

import numpy as np

from audio.dsp import clip_audio
from core.constants import BITS_PER_SAMPLE, NUM_CHANNELS, SAMPLE_RATE

HEADER_SIZE = 44
PCM_FORMAT = 1
FMT_CHUNK_SIZE = 16
MAX_INT16 = 32767

_RIFF_HEADER = struct.Struct('<4sI4s')
_FMT_CHUNK = struct.Struct('<4sIHHIIHH')
_DATA_HEADER = struct.Struct('<4sI')


@dataclass(frozen=True)
class WavHeader:
    """
    Parsed canonical WAV header.

    Attributes:
        riff_size: RIFF chunk size (file size - 8)
        audio_format: 1 for PCM
        channels: Channel count
        sample_rate: Samples per second
        byte_rate: Bytes per second
        block_align: Bytes per frame
        bits_per_sample: Sample width in bits
        data_size: Size of the PCM payload in bytes
    """
    riff_size: int
    audio_format: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_size: int

    @property
    def frame_count(self) -> int:
        return self.data_size // self.block_align if self.block_align else 0


def encode_wav(stereo: np.ndarray, sample_rate: int = SAMPLE_RATE) -> bytes:
    """
    Serialize a stereo float buffer as a 16-bit PCM WAV file.

    Samples are clamped to [-1, 1], scaled by 32767 and truncated toward
    zero.

    Args:
        stereo: Float buffer of shape (frames, 2)
        sample_rate: Samples per second

    Returns:
        Complete WAV file bytes
    """
    stereo = np.asarray(stereo, dtype=np.float64)
    if stereo.ndim != 2 or stereo.shape[1] != NUM_CHANNELS:
        raise ValueError(f"Expected buffer of shape (frames, {NUM_CHANNELS}), got {stereo.shape}")

    # Frame-major layout gives L,R,L,R... interleaving
    pcm = np.ascontiguousarray((clip_audio(stereo, 1.0) * MAX_INT16).astype('<i2'))
    pcm_bytes = pcm.tobytes()

    block_align = NUM_CHANNELS * (BITS_PER_SAMPLE // 8)
    byte_rate = sample_rate * block_align
    data_size = len(pcm_bytes)

    hdr = _RIFF_HEADER.pack(b'RIFF', 36 + data_size, b'WAVE')
    fmt = _FMT_CHUNK.pack(b'fmt ', FMT_CHUNK_SIZE, PCM_FORMAT, NUM_CHANNELS,
                          sample_rate, byte_rate, block_align, BITS_PER_SAMPLE)
    dat = _DATA_HEADER.pack(b'data', data_size)

    return hdr + fmt + dat + pcm_bytes


def read_wav_header(data: bytes) -> WavHeader:
    """
    Parse the canonical 44-byte header of a WAV file.

    Args:
        data: WAV file bytes (at least the header)

    Returns:
        Parsed header

    Raises:
        ValueError: If the bytes are not a canonical PCM WAV header
    """
    if len(data) < HEADER_SIZE:
        raise ValueError(f"WAV data too short: {len(data)} bytes, need {HEADER_SIZE}")

    riff, riff_size, wave = _RIFF_HEADER.unpack_from(data, 0)
    if riff != b'RIFF' or wave != b'WAVE':
        raise ValueError("Not a RIFF/WAVE file")

    (fmt_id, fmt_size, audio_format, channels, sample_rate,
     byte_rate, block_align, bits) = _FMT_CHUNK.unpack_from(data, _RIFF_HEADER.size)
    if fmt_id != b'fmt ' or fmt_size != FMT_CHUNK_SIZE:
        raise ValueError("Missing canonical fmt chunk")

    data_id, data_size = _DATA_HEADER.unpack_from(data, _RIFF_HEADER.size + _FMT_CHUNK.size)
    if data_id != b'data':
        raise ValueError("Missing data chunk")

    return WavHeader(
        riff_size=riff_size,
        audio_format=audio_format,
        channels=channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits,
        data_size=data_size,
    )
