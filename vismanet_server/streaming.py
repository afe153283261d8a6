"""Lazy deserialization of JSON arrays from a chunked text stream.

Visma.net list endpoints can return tens of thousands of records in one
array. The helpers here yield elements one at a time so only the element
currently being decoded is held in memory.
"""

from __future__ import annotations

import json
from typing import Any, AsyncIterable, Iterable, Iterator, List, Union

from .errors import VismaNetClientError

_WHITESPACE = " \t\n\r"
_NUMBER_CONTINUATION = "0123456789.eE+-"

# _FIRST follows "[", _ITEM follows ","
_START, _FIRST, _ITEM, _SEPARATOR, _DONE = range(5)


class _ArrayParser:
    """Incremental parser state shared by the sync and async front-ends."""

    def __init__(self) -> None:
        self._decoder = json.JSONDecoder()
        self._buffer = ""
        self._state = _START
        self._first_chunk = True
        # Undecodable element prefix: retry only once the buffer has doubled
        self._retry_len = 0

    @property
    def done(self) -> bool:
        return self._state == _DONE

    def feed(self, chunk: str) -> None:
        if self._first_chunk and chunk:
            chunk = chunk.lstrip("\ufeff")
            self._first_chunk = False
        self._buffer += chunk

    def _skip_whitespace(self, pos: int) -> int:
        while pos < len(self._buffer) and self._buffer[pos] in _WHITESPACE:
            pos += 1
        return pos

    def _may_continue(self, value: Any, end: int) -> bool:
        """True when more input could still extend the value just decoded."""
        if end == len(self._buffer):
            return True
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return self._buffer[end] in _NUMBER_CONTINUATION

    def drain(self, eof: bool) -> List[Any]:
        """Return every element that can be fully decoded from the buffer."""
        items: List[Any] = []
        pos = 0
        while self._state != _DONE:
            pos = self._skip_whitespace(pos)
            if pos >= len(self._buffer):
                break

            char = self._buffer[pos]
            if self._state == _START:
                if char != "[":
                    raise VismaNetClientError(
                        "Expected start of array in the deserialized json string"
                    )
                pos += 1
                self._state = _FIRST
            elif self._state == _SEPARATOR:
                if char == ",":
                    pos += 1
                    self._state = _ITEM
                elif char == "]":
                    pos += 1
                    self._state = _DONE
                else:
                    raise VismaNetClientError(
                        f"Unexpected character {char!r} between array elements"
                    )
            else:
                if char == "]":
                    if self._state == _ITEM:
                        raise VismaNetClientError(
                            "Unexpected character ']' after ',' in array"
                        )
                    pos += 1
                    self._state = _DONE
                    continue
                if not eof and len(self._buffer) - pos < self._retry_len:
                    break
                try:
                    value, end = self._decoder.raw_decode(self._buffer, pos)
                except json.JSONDecodeError:
                    if eof:
                        raise VismaNetClientError(
                            "Malformed JSON element in array stream"
                        ) from None
                    self._retry_len = 2 * (len(self._buffer) - pos)
                    break
                self._retry_len = 0
                if not eof and self._may_continue(value, end):
                    break
                items.append(value)
                pos = end
                self._state = _SEPARATOR

        self._buffer = self._buffer[pos:]
        return items

    def finish(self) -> List[Any]:
        items = self.drain(eof=True)
        if self._state == _START:
            raise VismaNetClientError(
                "Expected start of array in the deserialized json string"
            )
        if self._state != _DONE:
            raise VismaNetClientError("Unexpected end of JSON array stream")
        return items


async def iter_json_array(chunks: AsyncIterable[str]):
    """Yield the elements of a JSON array read from an async text stream."""
    parser = _ArrayParser()
    async for chunk in chunks:
        parser.feed(chunk)
        for item in parser.drain(eof=False):
            yield item
        if parser.done:
            return
    for item in parser.finish():
        yield item


def deserialize_sequence(source: Union[str, Iterable[str]]) -> Iterator[Any]:
    """Synchronous variant of :func:`iter_json_array`.

    ``source`` is either a complete JSON string or an iterable of text chunks.
    """
    parser = _ArrayParser()
    chunks: Iterable[str] = [source] if isinstance(source, str) else source
    for chunk in chunks:
        parser.feed(chunk)
        yield from parser.drain(eof=False)
        if parser.done:
            return
    yield from parser.finish()
