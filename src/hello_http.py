import asyncio
from typing import List, Optional, Tuple

HTTP_HOST = "127.0.0.1"
HTTP_PORT = 8080
REQUEST_LOG_FILE = "log.txt"

RESPONSE = (
    b"HTTP/1.1 200 OK\r\n"
    b"Content-Type: text/html; charset=utf-8\r\n"
    b"Content-Length: 20\r\n"
    b"\r\n"
    b"<h1>hello world</h1>"
)


async def read_request_lines(reader: asyncio.StreamReader) -> List[str]:
    """Read request lines up to the blank line that ends the header block (or EOF)."""
    lines: List[str] = []
    while True:
        raw = await reader.readline()
        line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
        if not line:
            return lines
        lines.append(line)


def append_request_log(path: str, lines: List[str]) -> None:
    with open(path, "a", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")


class HelloServer:
    """Answers every request with a fixed page and appends the request lines to a log file."""

    def __init__(self, host: str = HTTP_HOST, port: int = HTTP_PORT, log_file: str = REQUEST_LOG_FILE):
        self.host = host
        self.port = port
        self.log_file = log_file
        self.server: Optional[asyncio.AbstractServer] = None

    async def listen(self) -> Tuple[str, int]:
        self.server = await asyncio.start_server(self.handle_client, self.host, self.port)
        self.host, self.port = self.server.sockets[0].getsockname()[:2]

        print("[http] ======================")
        print(f"[http] Server Started! addr: http://{self.host}:{self.port}")
        print("[http] ======================")
        return self.host, self.port

    async def start(self) -> None:
        if self.server is None:
            await self.listen()
        async with self.server:
            await self.server.serve_forever()

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        print("[http] Incoming connection")
        try:
            print("[http] Reading request")
            try:
                lines = await read_request_lines(reader)
            except ConnectionError as exc:
                print(f"[http] [connection error] {exc!r}")
                return

            try:
                append_request_log(self.log_file, lines)
            except OSError as exc:
                print(f"[http] [file opening error] {exc}")

            print("[http] Writing response")
            writer.write(RESPONSE)
            await writer.drain()
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass  # peer already gone


async def main() -> None:
    import argparse
    p = argparse.ArgumentParser()
    p.add_argument("--host", default=HTTP_HOST)
    p.add_argument("--port", type=int, default=HTTP_PORT)
    p.add_argument("--log-file", default=REQUEST_LOG_FILE)
    args = p.parse_args()

    server = HelloServer(args.host, args.port, args.log_file)
    await server.start()


if __name__ == "__main__":
    asyncio.run(main())
