"""TCP server that reads ZSP frames and answers each one."""

from __future__ import annotations

import argparse
import asyncio
import io
import logging
import sys
from typing import Optional, Sequence

from zumic.decoder import ZSPDecoder
from zumic.errors import ZSPError
from zumic.frame import Frame, FrameError, Integer, SimpleString

logger = logging.getLogger(__name__)

BUFFER_CAPACITY = 4096
DEFAULT_ADDRESS = "127.0.0.1:6379"


def format_response(frame: Frame) -> bytes:
    """Return the reply sent for a received frame."""
    if isinstance(frame, SimpleString):
        return f"+{frame.value}\r\n".encode("utf-8")
    if isinstance(frame, Integer):
        return f":{frame.value}\r\n".encode("utf-8")
    if isinstance(frame, FrameError):
        return f"-{frame.message}\r\n".encode("utf-8")
    return b"+OK\r\n"


async def handle_connection(
    reader: asyncio.StreamReader, writer: asyncio.StreamWriter
) -> None:
    """Serve one client until it closes the connection."""
    decoder = ZSPDecoder()
    buffer = bytearray()
    try:
        while True:
            chunk = await reader.read(BUFFER_CAPACITY)
            if not chunk:
                print("Connection closed")
                return

            buffer += chunk
            cursor = io.BytesIO(bytes(buffer))
            while True:
                try:
                    frame = decoder.decode(cursor)
                except ZSPError:
                    break
                if frame is None:
                    break
                logger.info("received frame: %r", frame)
                writer.write(format_response(frame))
                await writer.drain()

            del buffer[: cursor.tell()]
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except (ConnectionError, OSError):
            pass


async def _serve_client(
    reader: asyncio.StreamReader, writer: asyncio.StreamWriter
) -> None:
    print(f"Accepted connection from {writer.get_extra_info('peername')}")
    try:
        await handle_connection(reader, writer)
    except Exception as exc:  # a failing client must not stop the server
        print(f"Error handling connection: {exc}", file=sys.stderr)


def _split_address(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"invalid address {addr!r}, expected host:port")
    return host, int(port)


async def run_tcp_server(addr: str) -> None:
    """Listen on ``addr`` (host:port) and serve clients forever."""
    host, port = _split_address(addr)
    server = await asyncio.start_server(_serve_client, host, port)
    print(f"Listening on {addr}")
    async with server:
        await server.serve_forever()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the server on the given address."""
    parser = argparse.ArgumentParser(prog="zumic", description="Run the ZSP server.")
    parser.add_argument("address", nargs="?", default=DEFAULT_ADDRESS)
    args = parser.parse_args(argv)
    try:
        asyncio.run(run_tcp_server(args.address))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())