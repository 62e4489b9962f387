"""Demultiplexing of Docker's attached exec stream.

Without a TTY, Docker sends stdout and stderr over one connection as frames::

    [stream tag: 1 byte][reserved: 3 bytes][payload length: uint32 big-endian][payload]

Tag 1 is stdout and tag 2 is stderr. Other tags are dropped.
"""

import struct
from dataclasses import dataclass

FRAME_HEADER = struct.Struct(">BxxxL")
STDOUT_STREAM = 1
STDERR_STREAM = 2


@dataclass(frozen=True)
class DemuxedStream:
    """Payload bytes of an exec stream, split by stream."""

    stdout: bytes
    stderr: bytes


def demux_exec_stream(data: bytes) -> DemuxedStream:
    """Split a multiplexed exec stream into stdout and stderr bytes.

    Frames are read in order from offset 0. Parsing stops quietly at the first
    frame whose header or declared payload runs past the end of ``data``.
    """
    stdout = bytearray()
    stderr = bytearray()
    offset = 0
    total = len(data)

    while offset + FRAME_HEADER.size <= total:
        stream_type, size = FRAME_HEADER.unpack_from(data, offset)
        start = offset + FRAME_HEADER.size
        end = start + size
        if end > total:
            break

        if stream_type == STDOUT_STREAM:
            stdout += data[start:end]
        elif stream_type == STDERR_STREAM:
            stderr += data[start:end]

        offset = end

    return DemuxedStream(stdout=bytes(stdout), stderr=bytes(stderr))


def encode_frame(stream_type: int, payload: bytes) -> bytes:
    """Build a single frame (used for fixtures and stream forwarding)."""
    return FRAME_HEADER.pack(stream_type, len(payload)) + payload
