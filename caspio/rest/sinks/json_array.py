"""JSON array sink for streaming records to a byte destination."""

from __future__ import annotations

import json
import os
from typing import IO, Any

DEFAULT_BUFFER_SIZE = 64 * 1024

Destination = str | os.PathLike[str] | IO[bytes]


class JsonArraySink:
    """Writes records incrementally as a single JSON array.

    Output is ``[`` + records separated by ``,`` + ``]\\n``; with no records it
    is ``[]\\n``. Serialized records are collected in an in-memory buffer and
    handed to the destination in chunks of ``buffer_size`` bytes, so a tight
    loop of ``write`` calls does not hit the destination once per record.

    A path destination is opened and owned by the sink and closed on
    ``close()``. A file-like destination is flushed on ``close()`` but left
    open for its owner.

    Writes are synchronous: a flush blocks the calling event loop until the
    destination accepts the chunk.
    """

    def __init__(
        self,
        stream: IO[bytes],
        *,
        owns_stream: bool = False,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        if buffer_size < 1:
            raise ValueError("buffer_size must be positive")
        self._stream = stream
        self._owns_stream = owns_stream
        self._buffer_size = buffer_size
        self._buffer = bytearray(b"[")
        self._count = 0
        self._closed = False

    @classmethod
    def open(
        cls, destination: Destination, *, buffer_size: int = DEFAULT_BUFFER_SIZE
    ) -> JsonArraySink:
        """Open a sink on a filesystem path or a binary writable."""
        if isinstance(destination, (str, os.PathLike)):
            stream = open(destination, "wb")  # noqa: SIM115
            return cls(stream, owns_stream=True, buffer_size=buffer_size)
        return cls(destination, owns_stream=False, buffer_size=buffer_size)

    @property
    def count(self) -> int:
        """Number of records written so far."""
        return self._count

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, record: Any) -> None:
        """Append one record to the array."""
        if self._closed:
            raise ValueError("write to a closed JsonArraySink")
        if self._count:
            self._buffer += b","
        self._buffer += json.dumps(record, ensure_ascii=False, separators=(",", ":")).encode(
            "utf-8"
        )
        self._count += 1
        if len(self._buffer) >= self._buffer_size:
            self._flush()

    def close(self) -> None:
        """Terminate the array and release the destination. Idempotent."""
        if self._closed:
            return
        self._buffer += b"]\n"
        self._flush()
        self._stream.flush()
        self._closed = True
        if self._owns_stream:
            self._stream.close()

    def _flush(self) -> None:
        if self._buffer:
            self._stream.write(bytes(self._buffer))
            self._buffer.clear()

    def __enter__(self) -> JsonArraySink:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        # Leave an aborted destination unterminated rather than faking a valid array
        if exc_type is None:
            self.close()
