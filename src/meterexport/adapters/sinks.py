"""Sink adapters for the TextSink port."""

from typing import BinaryIO


class Utf8Sink:
    """Adapts a binary stream (socket file, gzip file, BytesIO) to TextSink.

    Example:
        ```python
        with gzip.open("metrics.ndjson.gz", "wb") as fh:
            writer.write(Utf8Sink(fh), snapshot, timestamp_ms)
        ```
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def write(self, text: str, /) -> int:
        """Encode text as UTF-8 and write it in one call.

        Returns:
            Number of bytes written.
        """
        return self._stream.write(text.encode("utf-8"))
