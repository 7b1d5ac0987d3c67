from __future__ import annotations


async def byte_stream(*chunks: bytes):
    for chunk in chunks:
        yield chunk


async def failing_stream(*chunks: bytes, error: Exception | None = None):
    for chunk in chunks:
        yield chunk
    raise error or ConnectionResetError("connection reset by peer")


def split_every(data: bytes, size: int) -> list[bytes]:
    return [data[i : i + size] for i in range(0, len(data), size)]
