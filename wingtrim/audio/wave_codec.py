"""Reader/writer for the 16-bit PCM RIFF/WAVE recordings produced by the sensor app."""

from __future__ import annotations

import dataclasses
import io
import logging
import os
import struct
from pathlib import Path
from typing import BinaryIO

import numpy as np

from ..errors import FormatError, NoDataError, TrimmingError, WaveIOError
from .types import ParseResult, ReadMode, TrimWindow, WaveContainer, WaveHeader

LOGGER = logging.getLogger("wingtrim.wave")

RIFF_ID = b"RIFF"
WAVE_ID = b"WAVE"
FMT_ID = b"fmt "
DATA_ID = b"data"
# Some recorders insert a padding subchunk between "fmt " and "data".
FILLER_ID = b"FLLR"

PCM_FORMAT = 1
BITS_PER_SAMPLE = 16
# One stereo frame of 16-bit samples.
FRAME_BYTES = 4
# Only the first channel of the interleave is analysed.
SAMPLE_STRIDE = 2

_DESCRIPTOR = struct.Struct("<4sI4s")
_SUBCHUNK = struct.Struct("<4sI")
_FMT_BODY = struct.Struct("<HHIIHH")


def parse_wave(path: str | Path, mode: ReadMode = ReadMode.ANALYSIS) -> ParseResult:
    """Parse ``path``; failures are returned in the result rather than raised."""

    try:
        container = _read_container(Path(path), mode)
    except TrimmingError as exc:
        LOGGER.debug("Could not parse %s: %s", path, exc)
        return ParseResult(error=exc)
    return ParseResult(container=container)


def read_wave(path: str | Path, mode: ReadMode = ReadMode.ANALYSIS) -> WaveContainer:
    return parse_wave(path, mode).unwrap()


def write_trimmed(
    path: str | Path,
    container: WaveContainer,
    window: TrimWindow,
    source: str | Path | None = None,
) -> Path:
    """Write the frames in ``window`` to the ``-trimmed.wav`` sibling of ``path``.

    The container must have been read in rewrite mode. Sample indices are
    scaled to byte offsets by the stereo frame width. The file is written
    to a temporary name first so a failed write leaves nothing behind.
    When ``source`` is given, a target that resolves to it is refused.
    """

    raw = container.raw_data
    start_byte = window.start * FRAME_BYTES
    end_byte = min(window.end * FRAME_BYTES, len(raw))
    if start_byte >= end_byte:
        raise FormatError(
            f"Trim window [{window.start}, {window.end}) lies outside the {len(raw)}-byte payload"
        )
    trimmed = raw[start_byte:end_byte]
    removed = len(raw) - len(trimmed)
    header = dataclasses.replace(
        container.header,
        file_size=container.header.file_size - removed,
        data_size=len(trimmed),
    )

    target = trimmed_output_path(path)
    if source is not None and target.resolve() == Path(source).resolve():
        raise WaveIOError(f"Refusing to overwrite the input recording {source}")
    partial = target.with_name(target.name + ".part")
    try:
        with partial.open("wb") as handle:
            handle.write(encode_header(header))
            handle.write(trimmed)
        os.replace(partial, target)
    except OSError as exc:
        partial.unlink(missing_ok=True)
        raise WaveIOError(f"Cannot write {target}: {exc}") from exc
    except TrimmingError:
        partial.unlink(missing_ok=True)
        raise
    LOGGER.debug("Wrote %d of %d payload bytes to %s", len(trimmed), len(raw), target)
    return target


def trimmed_output_path(path: str | Path) -> Path:
    path = Path(path)
    return path.with_name(f"{path.stem}-trimmed.wav")


def encode_header(header: WaveHeader) -> bytes:
    """Serialize ``header`` in the fixed layout, without any filler subchunk."""

    try:
        return b"".join(
            [
                _DESCRIPTOR.pack(header.chunk_id, header.file_size, header.format),
                _SUBCHUNK.pack(header.fmt_id, header.fmt_size),
                _FMT_BODY.pack(
                    header.audio_format,
                    header.num_channels,
                    header.sample_rate,
                    header.byte_rate,
                    header.block_align,
                    header.bits_per_sample,
                ),
                header.fmt_extra,
                _SUBCHUNK.pack(header.data_id, header.data_size),
            ]
        )
    except struct.error as exc:
        raise FormatError(f"Header field out of range: {exc}") from exc


def _read_container(path: Path, mode: ReadMode) -> WaveContainer:
    try:
        with path.open("rb") as handle:
            header = _read_header(handle)
            if header.data_size == 0:
                raise NoDataError(f"{path} has an empty data subchunk")
            payload = _read_exact(handle, header.data_size, "data payload")
    except OSError as exc:
        raise WaveIOError(f"Cannot read {path}: {exc}") from exc
    _log_header(path, header)
    if mode is ReadMode.REWRITE:
        return WaveContainer(header=header, mode=mode, payload=payload)
    return WaveContainer(header=header, mode=mode, payload=_decode_channel(payload))


def _read_header(handle: BinaryIO) -> WaveHeader:
    chunk_id, file_size, wave_format = _DESCRIPTOR.unpack(_read_exact(handle, _DESCRIPTOR.size, "RIFF descriptor"))
    if chunk_id != RIFF_ID or wave_format != WAVE_ID:
        raise FormatError(f"Not a RIFF/WAVE file (tags {chunk_id!r}, {wave_format!r})")

    fmt_id, fmt_size = _SUBCHUNK.unpack(_read_exact(handle, _SUBCHUNK.size, "format subchunk"))
    if fmt_id != FMT_ID:
        raise FormatError(f"Expected 'fmt ' subchunk, found {fmt_id!r}")
    if fmt_size < _FMT_BODY.size:
        raise FormatError(f"Format subchunk too small ({fmt_size} bytes)")
    audio_format, channels, sample_rate, byte_rate, block_align, bits = _FMT_BODY.unpack(
        _read_exact(handle, _FMT_BODY.size, "format body")
    )
    fmt_extra = _read_exact(handle, fmt_size - _FMT_BODY.size, "format extension")
    if audio_format != PCM_FORMAT:
        raise FormatError(f"Unsupported audio format code {audio_format} (PCM only)")
    if bits != BITS_PER_SAMPLE:
        raise FormatError(f"Unsupported sample width {bits} bits (16-bit only)")

    data_id, data_size = _SUBCHUNK.unpack(_read_exact(handle, _SUBCHUNK.size, "data subchunk"))
    if data_id == FILLER_ID:
        if data_size > file_size:
            raise FormatError(f"Filler subchunk ({data_size} bytes) exceeds declared file size")
        file_size -= data_size
        handle.seek(data_size, io.SEEK_CUR)
        data_id, data_size = _SUBCHUNK.unpack(_read_exact(handle, _SUBCHUNK.size, "data subchunk"))
    if data_id != DATA_ID:
        raise FormatError(f"Expected 'data' subchunk, found {data_id!r}")

    return WaveHeader(
        chunk_id=chunk_id,
        file_size=file_size,
        format=wave_format,
        fmt_id=fmt_id,
        fmt_size=fmt_size,
        audio_format=audio_format,
        num_channels=channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits,
        data_id=data_id,
        data_size=data_size,
        fmt_extra=fmt_extra,
    )


def _read_exact(handle: BinaryIO, size: int, what: str) -> bytes:
    data = handle.read(size)
    if len(data) != size:
        raise FormatError(f"Truncated {what}: expected {size} bytes, got {len(data)}")
    return data


def _decode_channel(payload: bytes) -> np.ndarray:
    if len(payload) % 2:
        raise FormatError(f"Payload of {len(payload)} bytes is not a whole number of 16-bit samples")
    interleaved = np.frombuffer(payload, dtype="<i2")
    return interleaved[::SAMPLE_STRIDE].astype(np.int16)


def _log_header(path: Path, header: WaveHeader) -> None:
    if not LOGGER.isEnabledFor(logging.DEBUG):
        return
    LOGGER.debug(
        "%s: %s size=%d %s fmt=%r(%d) pcm=%d channels=%d rate=%d byte_rate=%d align=%d bits=%d %r(%d)",
        path.name,
        header.chunk_id.decode("ascii", errors="replace"),
        header.file_size,
        header.format.decode("ascii", errors="replace"),
        header.fmt_id.decode("ascii", errors="replace"),
        header.fmt_size,
        header.audio_format,
        header.num_channels,
        header.sample_rate,
        header.byte_rate,
        header.block_align,
        header.bits_per_sample,
        header.data_id.decode("ascii", errors="replace"),
        header.data_size,
    )


__all__ = [
    "FILLER_ID",
    "FRAME_BYTES",
    "parse_wave",
    "read_wave",
    "write_trimmed",
    "trimmed_output_path",
    "encode_header",
]
