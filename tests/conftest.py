import http.server
import json
import socketserver
import threading

import pytest


class EchoHandler(http.server.BaseHTTPRequestHandler):
        """Replies with a JSON description of the request it received."""

        def log_message(self, format, *args):
                pass

        def _echo(self):
                length = int(self.headers.get("Content-Length", 0))
                body = self.rfile.read(length) if length else b""
                if self.path.startswith("/big"):
                        data = b"x" * 5000
                else:
                        data = json.dumps({
                                "method": self.command,
                                "path": self.path,
                                "headers": dict(self.headers),
                                "body": body.decode("utf-8"),
                        }).encode()
                self.send_response(200)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(data)))
                self.end_headers()
                self.wfile.write(data)

        do_GET = _echo
        do_POST = _echo
        do_PUT = _echo


@pytest.fixture
def echo_server():
        socketserver.TCPServer.allow_reuse_address = True
        httpd = socketserver.ThreadingTCPServer(("127.0.0.1", 0), EchoHandler)
        httpd.daemon_threads = True
        t = threading.Thread(target=httpd.serve_forever, daemon=True)
        t.start()
        yield f"http://127.0.0.1:{httpd.server_address[1]}"
        httpd.shutdown()
        httpd.server_close()


@pytest.fixture
def closed_port():
        # bind then release so nothing is listening on it
        s = socketserver.TCPServer(("127.0.0.1", 0), http.server.BaseHTTPRequestHandler)
        port = s.server_address[1]
        s.server_close()
        return port
