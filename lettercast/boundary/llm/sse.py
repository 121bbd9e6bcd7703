"""
Server-sent-event reader.

Pull-based parser that turns a byte stream into the payloads of its
``data:`` lines, one at a time.

Dependencies: codecs (stdlib)
System role: Upstream stream framing
"""

import codecs
from typing import AsyncIterable, AsyncIterator, Iterator

DONE_SENTINEL = "[DONE]"


def _data_payloads(lines: list[str]) -> Iterator[str]:
    for line in lines:
        line = line.rstrip("\r")
        if not line.startswith("data:"):
            continue
        payload = line[len("data:"):].strip()
        if payload:
            yield payload


async def iter_sse_data(byte_chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """
    Yield the payload of every ``data:`` line in a byte stream.

    Partial lines are buffered across chunks and multi-byte UTF-8
    sequences split between chunks are decoded correctly. A final line
    without a trailing newline is flushed when the stream ends. The
    ``[DONE]`` sentinel is yielded like any other payload.

    Args:
        byte_chunks: Raw body chunks as received

    Yields:
        str: Payload text with the ``data:`` prefix and surrounding whitespace removed
    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    buffer = ""

    async for chunk in byte_chunks:
        buffer += decoder.decode(chunk)
        lines = buffer.split("\n")
        buffer = lines.pop()
        for payload in _data_payloads(lines):
            yield payload

    buffer += decoder.decode(b"", final=True)
    if buffer.strip():
        for payload in _data_payloads(buffer.split("\n")):
            yield payload
