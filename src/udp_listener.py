import asyncio
import socket
from typing import Callable, Optional, Tuple

from udp_common import LISTEN_HOST, LISTEN_PORT, MAX_DATAGRAM_SIZE, DatagramEvent, format_datagram

DatagramHandler = Callable[[DatagramEvent], None]


def log_datagram(event: DatagramEvent) -> None:
    print(format_datagram(event), flush=True)


class DatagramListener:
    """
    Receive-only UDP listener:
      - binds one socket to (host, port); bind errors propagate
      - calls on_datagram once per datagram, in the order the OS delivers them
      - never replies to the sender
    """

    def __init__(self, host: str = LISTEN_HOST, port: int = LISTEN_PORT,
                 on_datagram: Optional[DatagramHandler] = None):
        self.host = host
        self.port = port
        self.on_datagram: DatagramHandler = on_datagram or log_datagram
        self.sock: Optional[socket.socket] = None

    @property
    def bound(self) -> bool:
        return self.sock is not None

    def bind(self) -> Tuple[str, int]:
        """Bind the socket and return the local (host, port) actually in use."""
        # No SO_REUSEADDR: a second listener on the same port must fail here.
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((self.host, self.port))
        except OSError:
            sock.close()
            raise
        sock.setblocking(False)

        self.sock = sock
        self.host, self.port = sock.getsockname()[:2]
        return self.host, self.port

    async def serve_forever(self) -> None:
        if not self.bound:
            self.bind()

        loop = asyncio.get_running_loop()
        print(f"[listener] Listening UDP on {self.host}:{self.port}")

        while True:
            data, addr = await loop.sock_recvfrom(self.sock, MAX_DATAGRAM_SIZE)
            self.on_datagram(DatagramEvent(payload=data, host=addr[0], port=addr[1]))

    def close(self) -> None:
        if self.sock is not None:
            self.sock.close()
            self.sock = None


async def main() -> None:
    import argparse
    p = argparse.ArgumentParser()
    p.add_argument("--host", default=LISTEN_HOST)
    p.add_argument("--port", type=int, default=LISTEN_PORT)
    args = p.parse_args()

    listener = DatagramListener(args.host, args.port)
    listener.bind()
    await listener.serve_forever()


if __name__ == "__main__":
    asyncio.run(main())
