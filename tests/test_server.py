"""Tests for sitegen.server."""

import threading
import urllib.error
import urllib.request

import pytest

from sitegen.server import make_server
from sitegen.utils import SiteError

from conftest import write


@pytest.fixture
def base_url(tmp_path):
    write(tmp_path / "index.html", "<h1>Home</h1>\n")
    write(tmp_path / "about.html", "<p>About</p>\n")
    write(tmp_path / "posts" / "2024-03-01-hello-world.html", "<p>Hello</p>\n")
    httpd = make_server(tmp_path, "127.0.0.1", 0)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()
    thread.join()


def _get(url, method="GET"):
    with urllib.request.urlopen(urllib.request.Request(url, method=method)) as resp:
        return resp.status, resp.headers.get("Content-Type"), resp.read()


class TestRoutes:
    def test_root_serves_index(self, base_url):
        assert _get(base_url + "/") == _get(base_url + "/index.html")
        assert _get(base_url + "/")[2] == b"<h1>Home</h1>\n"

    def test_root_ignores_query_string(self, base_url):
        assert _get(base_url + "/?ref=feed")[2] == b"<h1>Home</h1>\n"

    def test_head_on_root(self, base_url):
        status, content_type, body = _get(base_url + "/", method="HEAD")
        assert status == 200
        assert content_type == "text/html"
        assert body == b""

    def test_static_file(self, base_url):
        status, content_type, body = _get(base_url + "/posts/2024-03-01-hello-world.html")
        assert status == 200
        assert content_type == "text/html"
        assert body == b"<p>Hello</p>\n"

    def test_unknown_path_is_404(self, base_url):
        with pytest.raises(urllib.error.HTTPError) as excinfo:
            _get(base_url + "/missing.html")
        assert excinfo.value.code == 404


class TestBind:
    def test_port_in_use_is_fatal(self, tmp_path):
        first = make_server(tmp_path, "127.0.0.1", 0)
        try:
            with pytest.raises(SiteError):
                make_server(tmp_path, "127.0.0.1", first.server_address[1])
        finally:
            first.server_close()
