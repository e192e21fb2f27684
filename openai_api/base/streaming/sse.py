"""Server-sent event decoding for streamed completions.

The transport delivers response bytes in arbitrarily sized chunks; a record
may be split anywhere, including inside a multi-byte UTF-8 character or
between the ``\\r`` and ``\\n`` of a line ending. :class:`SSEDecoder` buffers
partial input and yields each record exactly once when its terminating blank
line arrives.

Framing:
    - Lines end with ``\\n``, ``\\r\\n`` or ``\\r``; a blank line dispatches.
    - ``data`` lines accumulate and are joined with ``\\n``.
    - ``event`` sets the record type (default ``"message"``).
    - ``id`` sets the last event id, which persists across records.
    - ``retry`` updates :attr:`SSEDecoder.retry` when it is an integer.
    - Lines beginning with ``:`` are comments.

The data payload ``[DONE]`` is the end-of-stream sentinel. It is never
yielded; it sets :attr:`SSEDecoder.done` and all later input is ignored.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, NamedTuple, Optional, Union

from ...config.defaults import END_OF_STREAM_MARKER

Chunk = Union[bytes, bytearray, str]


class ServerSentEvent(NamedTuple):
    """One decoded SSE record."""

    event: str
    data: str
    id: Optional[str]


class SSEDecoder:
    """Incremental SSE decoder; one instance per response stream."""

    def __init__(self, sentinel: str = END_OF_STREAM_MARKER) -> None:
        self._sentinel = sentinel
        self._buffer = bytearray()
        self._data: List[str] = []
        self._event: Optional[str] = None
        self._last_id: Optional[str] = None
        self._first_line = True
        # buffer offset below which no line end remains
        self._scan = 0
        self.retry: Optional[int] = None
        self.done = False

    def feed(self, chunk: Chunk) -> List[ServerSentEvent]:
        """Consume ``chunk`` and return the records it completed, in order."""
        if self.done or not chunk:
            return []
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        self._buffer.extend(chunk)
        return self._drain(final=False)

    def close(self) -> List[ServerSentEvent]:
        """Finish the stream.

        A trailing ``\\r`` held back by :meth:`feed` is treated as a line end;
        an unterminated record is discarded.
        """
        events = [] if self.done else self._drain(final=True)
        self._buffer.clear()
        self._scan = 0
        self._data = []
        self._event = None
        return events

    def _drain(self, final: bool) -> List[ServerSentEvent]:
        events: List[ServerSentEvent] = []
        buf = self._buffer
        pos = 0
        scan = self._scan
        while not self.done:
            idx = _find_line_end(buf, scan)
            if idx < 0:
                scan = len(buf)
                break
            end = idx + 1
            if buf[idx] == 0x0D:  # \r
                if end == len(buf) and not final:
                    scan = idx  # a \n may follow in the next chunk
                    break
                if end < len(buf) and buf[end] == 0x0A:
                    end += 1
            line = bytes(buf[pos:idx])
            pos = scan = end
            event = self._process_line(line)
            if event is not None:
                events.append(event)
        if self.done:
            buf.clear()
            self._scan = 0
        else:
            del buf[:pos]
            self._scan = scan - pos
        return events

    def _process_line(self, raw: bytes) -> Optional[ServerSentEvent]:
        line = raw.decode("utf-8", errors="replace")
        if self._first_line:
            self._first_line = False
            line = line.lstrip("\ufeff")
        if not line:
            return self._dispatch()
        if line.startswith(":"):
            return None
        field, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]
        if field == "data":
            self._data.append(value)
        elif field == "event":
            self._event = value
        elif field == "id":
            if "\0" not in value:
                self._last_id = value
        elif field == "retry" and value.isdigit():
            self.retry = int(value)
        return None

    def _dispatch(self) -> Optional[ServerSentEvent]:
        if not self._data:
            self._event = None
            return None
        data = "\n".join(self._data)
        event = self._event or "message"
        self._data = []
        self._event = None
        if data == self._sentinel:
            self.done = True
            return None
        return ServerSentEvent(event=event, data=data, id=self._last_id)


def _find_line_end(buf: bytearray, start: int) -> int:
    """Return the index of the first ``\\r`` or ``\\n`` at or after ``start``."""
    lf = buf.find(b"\n", start)
    cr = buf.find(b"\r", start, lf if lf >= 0 else len(buf))
    return cr if cr >= 0 else lf


def iter_sse_events(chunks: Iterable[Chunk], decoder: Optional[SSEDecoder] = None) -> Iterator[ServerSentEvent]:
    """Lazily decode ``chunks`` into records, stopping at the sentinel."""
    decoder = decoder or SSEDecoder()
    for chunk in chunks:
        yield from decoder.feed(chunk)
        if decoder.done:
            return
    yield from decoder.close()


__all__ = ["ServerSentEvent", "SSEDecoder", "iter_sse_events"]
