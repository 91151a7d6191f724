"""Drain subprocess output pipes into text buffers."""

import asyncio
import codecs
import logging
from typing import TextIO

log = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


async def drain_stream(
    stream: asyncio.StreamReader,
    *,
    name: str,
    mirror: TextIO | None = None,
) -> str:
    """Read a pipe until it closes and return everything it produced.

    Bytes are decoded incrementally, so multi-byte characters split across
    chunks survive. A read error ends the loop and keeps what was read so far.

    Args:
        stream: Pipe of the running subprocess
        name: Stream name used in log messages ("stdout" or "stderr")
        mirror: When set, each chunk is echoed to it as soon as it arrives

    Returns:
        Full decoded text of the stream

    """
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    chunks: list[str] = []

    try:
        while data := await stream.read(CHUNK_SIZE):
            chunk = decoder.decode(data)
            chunks.append(chunk)
            if mirror is not None:
                mirror.write(f"  [{name}] {chunk}")
                mirror.flush()
            else:
                log.debug("%s: %s", name, chunk.strip())
    except OSError as e:
        log.debug("%s read error: %s", name, e)

    chunks.append(decoder.decode(b"", final=True))
    return "".join(chunks)
