import asyncio

from hello_http import RESPONSE, HelloServer

REQUEST = b"GET / HTTP/1.1\r\nHost: localhost\r\nUser-Agent: test\r\n\r\n"


async def exchange(log_file, request=REQUEST):
    server = HelloServer("127.0.0.1", 0, str(log_file))
    host, port = await server.listen()
    try:
        reader, writer = await asyncio.open_connection(host, port)
        writer.write(request)
        await writer.drain()
        reply = await asyncio.wait_for(reader.read(), 2.0)
        writer.close()
        await writer.wait_closed()
        return reply
    finally:
        server.server.close()
        await server.server.wait_closed()


def test_fixed_response_and_request_log(tmp_path, capsys):
    log_file = tmp_path / "log.txt"
    reply = asyncio.run(exchange(log_file))

    assert reply == RESPONSE
    assert reply.endswith(b"<h1>hello world</h1>")
    assert log_file.read_text() == "GET / HTTP/1.1\nHost: localhost\nUser-Agent: test\n"

    out = capsys.readouterr().out
    assert "[http] Server Started! addr: http://127.0.0.1:" in out
    assert "[http] Incoming connection" in out
    assert "[http] Writing response" in out


def test_request_log_appends(tmp_path):
    log_file = tmp_path / "log.txt"
    log_file.write_text("earlier\n")
    asyncio.run(exchange(log_file, b"GET /a HTTP/1.1\r\n\r\n"))
    asyncio.run(exchange(log_file, b"GET /b HTTP/1.1\r\n\r\n"))

    assert log_file.read_text().splitlines() == ["earlier", "GET /a HTTP/1.1", "GET /b HTTP/1.1"]


def test_unwritable_log_still_responds(tmp_path, capsys):
    # a directory cannot be opened for appending
    reply = asyncio.run(exchange(tmp_path))

    assert reply == RESPONSE
    assert "[http] [file opening error]" in capsys.readouterr().out


class ClosedWriter:
    def __init__(self):
        self.written = b""
        self.closed = False

    def write(self, data):
        self.written += data

    async def drain(self):
        pass

    def close(self):
        self.closed = True

    async def wait_closed(self):
        raise ConnectionResetError("peer reset")


def test_client_reset_mid_request_is_logged(tmp_path, capsys):
    log_file = tmp_path / "log.txt"
    server = HelloServer("127.0.0.1", 0, str(log_file))
    writer = ClosedWriter()

    async def scenario():
        reader = asyncio.StreamReader()
        reader.feed_data(b"GET / HTTP/1.1\r\n")
        reader.set_exception(ConnectionResetError("peer reset"))
        await server.handle_client(reader, writer)

    asyncio.run(scenario())

    assert writer.closed
    assert writer.written == b""
    assert not log_file.exists()
    out = capsys.readouterr().out
    assert "[http] [connection error] ConnectionResetError('peer reset')" in out
    assert "[http] Writing response" not in out
