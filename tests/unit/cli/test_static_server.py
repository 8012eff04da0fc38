import socket

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import unused_port
from devport.cli.models import ServeConfiguration, ServeOptions
from devport.cli.services import DevServerApp, ServeStaticTaskService


def make_configuration(output_path, base_url="/", **options) -> ServeConfiguration:
    return ServeConfiguration.from_options(
        ServeOptions(port=4200, output_path=output_path, **options),
        port=4200,
        live_reload_port=49152,
        live_reload_host=None,
        base_url=base_url
    )


@pytest.fixture
def output_path(tmp_path):
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text("<html>app</html>")
    (dist / "assets" / "app.js").write_text("console.log('app');")
    (tmp_path / "secret.txt").write_text("secret")
    return dist


class TestDevServerApp:
    """Tests for the development server application."""

    def test_serves_files_from_output_path(self, output_path):
        """Test a file in the output directory is returned."""
        client = TestClient(DevServerApp(make_configuration(output_path)).app)

        response = client.get("/assets/app.js")

        assert response.status_code == 200
        assert response.text == "console.log('app');"

    def test_root_serves_index(self, output_path):
        """Test the base URL itself serves index.html."""
        client = TestClient(DevServerApp(make_configuration(output_path)).app)

        assert client.get("/").text == "<html>app</html>"

    def test_html_requests_fall_back_to_index(self, output_path):
        """Test client side routes get index.html."""
        client = TestClient(DevServerApp(make_configuration(output_path)).app)

        response = client.get("/users/1", headers={"accept": "text/html"})

        assert response.status_code == 200
        assert response.text == "<html>app</html>"

    def test_missing_asset_is_not_found(self, output_path):
        """Test non HTML requests for missing files get 404 without a proxy."""
        client = TestClient(DevServerApp(make_configuration(output_path)).app)

        assert client.get("/assets/missing.js", headers={"accept": "*/*"}).status_code == 404

    def test_files_served_under_base_url(self, output_path):
        """Test files are only served below the base URL."""
        client = TestClient(DevServerApp(make_configuration(output_path, base_url="/app/")).app)

        assert client.get("/app/assets/app.js").status_code == 200
        assert client.get("/app").text == "<html>app</html>"
        assert client.get("/assets/app.js", headers={"accept": "*/*"}).status_code == 404

    def test_base_url_matched_on_path_segments(self, output_path):
        """Test a base URL without trailing slash does not match longer sibling paths."""
        (output_path / "lication").mkdir()
        (output_path / "lication" / "secret.txt").write_text("leak")
        client = TestClient(DevServerApp(make_configuration(output_path, base_url="/app")).app)

        assert client.get("/application/secret.txt", headers={"accept": "*/*"}).status_code == 404
        assert client.get("/app/assets/app.js").text == "console.log('app');"
        assert client.get("/app").text == "<html>app</html>"

    def test_paths_outside_output_not_resolved(self, output_path):
        """Test files outside the output directory are never resolved."""
        dev_app = DevServerApp(make_configuration(output_path))

        assert dev_app._resolve_file("../secret.txt") is None
        assert dev_app._resolve_file("assets/app.js") == (output_path / "assets" / "app.js").resolve()

    def test_unmatched_requests_forwarded_to_proxy(self, output_path):
        """Test requests without a matching file are forwarded to the proxy."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["method"] = request.method
            return httpx.Response(201, json={"ok": True})

        dev_app = DevServerApp(make_configuration(output_path, proxy="http://backend:3000"))

        with TestClient(dev_app.app) as client:
            dev_app.http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            response = client.post("/api/users?page=2", json={"name": "x"})

        assert response.status_code == 201
        assert response.json() == {"ok": True}
        assert seen == {"url": "http://backend:3000/api/users?page=2", "method": "POST"}

    def test_unreachable_proxy_is_service_unavailable(self, output_path):
        """Test a connection failure to the proxy target maps to 503."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        dev_app = DevServerApp(make_configuration(output_path, proxy="http://backend:3000"))

        with TestClient(dev_app.app) as client:
            dev_app.http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            response = client.get("/api/users", headers={"accept": "application/json"})

        assert response.status_code == 503


class TestServeStaticTaskService:
    """Tests for the default serve task."""

    def test_server_uses_resolved_port_and_host(self, output_path):
        """Test uvicorn is configured with the resolved port on all interfaces."""
        server = ServeStaticTaskService().build_server(make_configuration(output_path))

        assert server.config.port == 4200
        assert server.config.host == "::"
        assert server.config.ssl_keyfile is None

    def test_explicit_host_left_to_uvicorn(self, output_path):
        """Test an explicit host is bound by uvicorn itself."""
        configuration = make_configuration(output_path, host="127.0.0.1")

        assert ServeStaticTaskService().build_server(configuration).config.host == "127.0.0.1"
        assert ServeStaticTaskService().bind_sockets(configuration) is None

    @pytest.mark.skipif(not socket.has_dualstack_ipv6(), reason="dual stack IPv6 not supported")
    def test_wildcard_host_listens_dual_stack(self, output_path):
        """Test the default host gets one IPv6 listener that also accepts IPv4."""
        port = unused_port()
        configuration = ServeConfiguration.from_options(
            ServeOptions(port=port, output_path=output_path),
            port=port,
            live_reload_port=49152,
            live_reload_host=None,
            base_url="/"
        )

        sockets = ServeStaticTaskService().bind_sockets(configuration)
        try:
            assert len(sockets) == 1
            assert sockets[0].family == socket.AF_INET6
            assert sockets[0].getsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY) == 0
            assert sockets[0].getsockname()[1] == port
        finally:
            for sock in sockets:
                sock.close()

    def test_server_uses_ssl_files(self, output_path):
        """Test SSL key and certificate are passed to uvicorn."""
        configuration = make_configuration(
            output_path, ssl=True, ssl_key="certs/key.pem", ssl_cert="certs/cert.pem"
        )

        server = ServeStaticTaskService().build_server(configuration)

        assert server.config.ssl_keyfile == "certs/key.pem"
        assert server.config.ssl_certfile == "certs/cert.pem"

    @pytest.mark.asyncio
    async def test_missing_ssl_files_rejected(self, output_path, tmp_path):
        """Test serving with SSL fails early when the key is missing."""
        configuration = make_configuration(
            output_path, ssl=True, ssl_key=tmp_path / "missing.key", ssl_cert=tmp_path / "missing.crt"
        )

        with pytest.raises(FileNotFoundError, match="missing.key"):
            await ServeStaticTaskService().execute(configuration)
