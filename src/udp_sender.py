import socket
import sys
from typing import Iterable

from udp_common import LISTEN_HOST, LISTEN_PORT

# Stand-in for `nc -u 127.0.0.1 5500` when poking the listener by hand.


def send_datagrams(messages: Iterable[str], host: str = LISTEN_HOST,
                   port: int = LISTEN_PORT) -> int:
    """Send each message as its own datagram; return the ephemeral source port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # Wildcard bind: the source address is chosen per route, only the port is fixed.
        sock.bind(("", 0))
        local_port = sock.getsockname()[1]
        for msg in messages:
            sock.sendto(msg.encode("utf-8"), (host, port))
            print(f"[sender] Sent: {msg!r}")
        return local_port
    finally:
        sock.close()


def stdin_lines() -> Iterable[str]:
    for line in sys.stdin:
        yield line.rstrip("\r\n")


def main() -> None:
    import argparse
    p = argparse.ArgumentParser()
    p.add_argument("--host", default=LISTEN_HOST)
    p.add_argument("--port", type=int, default=LISTEN_PORT)
    p.add_argument("messages", nargs="*", help="sent one per datagram; stdin lines if omitted")
    args = p.parse_args()

    local_port = send_datagrams(args.messages or stdin_lines(), args.host, args.port)
    print(f"[sender] Done (local port {local_port})")


if __name__ == "__main__":
    main()
