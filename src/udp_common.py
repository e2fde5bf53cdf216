from dataclasses import dataclass
from typing import Tuple

LISTEN_HOST = "127.0.0.1"   # loopback only
LISTEN_PORT = 5500

MAX_DATAGRAM_SIZE = 65535


@dataclass(frozen=True)
class DatagramEvent:
    payload: bytes
    host: str
    port: int

    @property
    def sender(self) -> Tuple[str, int]:
        return self.host, self.port


def decode_payload(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def format_datagram(event: DatagramEvent) -> str:
    text = decode_payload(event.payload)
    return f"[listener] Got datagram {text!r} from {event.host}:{event.port}"
