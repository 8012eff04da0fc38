"""Service for running the development server over the build output"""
import socket
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

import httpx
import uvicorn
from fastapi import FastAPI, HTTPException, Request, Response
from starlette.responses import FileResponse

from devport.cli.models import ALL_INTERFACES_HOST, ServeConfiguration
from devport.cli.utils.cli_messages import generate_welcome_message
from devport.cli.utils.proxy_utils import build_proxy_target
from devport.shared.base import BaseExecuteService
from devport.shared.logging import get_logger
from devport.shared.settings import app_settings

logger = get_logger()

INDEX_FILE = "index.html"
HOP_BY_HOP_HEADERS = ("content-encoding", "content-length", "transfer-encoding", "connection")


class DevServerApp:
    """
    Serves the build output under the base URL.

    Requests are answered from the output directory first. GET requests that
    accept HTML fall back to index.html so client side routes resolve. Any
    other request is forwarded to the proxy when one is configured.
    """

    def __init__(self, configuration: ServeConfiguration):
        self.configuration = configuration
        self.root = Path(configuration.output_path).resolve()
        self.http_client: Optional[httpx.AsyncClient] = None
        self.app = FastAPI(
            title="devport",
            lifespan=self._lifespan,
            docs_url=None,
            redoc_url=None,
            openapi_url=None
        )
        self._setup_routes()

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        if self.configuration.proxy:
            self.http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(30.0),
                verify=not self.configuration.insecure_proxy
            )
            logger.debug(f"Proxying unmatched requests to {self.configuration.proxy}")

        yield

        if self.http_client:
            await self.http_client.aclose()
            self.http_client = None

    def _setup_routes(self):
        @self.app.api_route(
            "/{path:path}",
            methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "HEAD"])
        async def serve_request(path: str, request: Request):
            return await self._handle_request(request)

    async def _handle_request(self, request: Request) -> Response:
        if request.method in ("GET", "HEAD"):
            relative_path = self._strip_base_url(request.url.path)
            if relative_path is not None:
                file_path = self._resolve_file(relative_path)
                if file_path is not None:
                    return FileResponse(file_path)

                if "text/html" in request.headers.get("accept", ""):
                    index_path = self._resolve_file(INDEX_FILE)
                    if index_path is not None:
                        return FileResponse(index_path)

        if self.http_client is not None:
            return await self._forward_request(request)

        raise HTTPException(status_code=404, detail=f"Not found: {request.url.path}")

    def _strip_base_url(self, path: str) -> Optional[str]:
        """Return the path relative to the base URL, or None if it lies outside it."""
        prefix = self.configuration.base_url.rstrip("/")
        if path == prefix:
            return ""
        if not path.startswith(f"{prefix}/"):
            return None
        return path[len(prefix) + 1:]

    def _resolve_file(self, relative_path: str) -> Optional[Path]:
        candidate = (self.root / relative_path.lstrip("/")).resolve()
        if candidate != self.root and self.root not in candidate.parents:
            return None
        if candidate.is_dir():
            candidate = candidate / INDEX_FILE
        return candidate if candidate.is_file() else None

    async def _forward_request(self, request: Request) -> Response:
        target_url = build_proxy_target(self.configuration.proxy, request.url.path, request.url.query)

        headers = dict(request.headers)
        headers.pop("host", None)

        try:
            response = await self.http_client.request(
                method=request.method,
                url=target_url,
                headers=headers,
                content=await request.body()
            )
        except httpx.ConnectError:
            logger.error(f"Failed to connect to proxy target {target_url}")
            raise HTTPException(status_code=503, detail=f"Proxy target {self.configuration.proxy} is not available")
        except httpx.TimeoutException:
            logger.error(f"Timeout when forwarding to {target_url}")
            raise HTTPException(status_code=504, detail=f"Timeout when connecting to {self.configuration.proxy}")
        except httpx.HTTPError as ex:
            logger.error(f"Error forwarding request to {target_url}: {ex}")
            raise HTTPException(status_code=502, detail=f"Error forwarding request to {self.configuration.proxy}")

        response_headers = {
            key: value for key, value in response.headers.items()
            if key.lower() not in HOP_BY_HOP_HEADERS
        }
        return Response(
            content=response.content,
            status_code=response.status_code,
            headers=response_headers,
            media_type=response.headers.get("content-type")
        )


class ServeStaticTaskService(BaseExecuteService):
    """
    Default serve task: runs DevServerApp on uvicorn with the resolved configuration.
    """

    def build_server(self, configuration: ServeConfiguration) -> uvicorn.Server:
        ssl_options = {}
        if configuration.ssl:
            ssl_options = {
                "ssl_keyfile": str(configuration.ssl_key),
                "ssl_certfile": str(configuration.ssl_cert),
            }

        config = uvicorn.Config(
            app=DevServerApp(configuration).app,
            host=configuration.listen_host,
            port=configuration.port,
            log_level=app_settings.log_level.lower(),
            log_config=None,
            **ssl_options
        )
        return uvicorn.Server(config)

    def bind_sockets(self, configuration: ServeConfiguration) -> Optional[List[socket.socket]]:
        """Return a dual stack listener for the wildcard host, None to let uvicorn bind."""
        if configuration.listen_host != ALL_INTERFACES_HOST or not socket.has_dualstack_ipv6():
            return None
        return [socket.create_server(
            (ALL_INTERFACES_HOST, configuration.port),
            family=socket.AF_INET6,
            dualstack_ipv6=True
        )]

    async def execute(self, configuration: ServeConfiguration) -> None:
        """
        Serve until the server is stopped.

        Args:
            configuration: Final serve configuration with resolved ports
        """
        if configuration.ssl:
            for path in (configuration.ssl_key, configuration.ssl_cert):
                if not Path(path).is_file():
                    raise FileNotFoundError(f"SSL file not found: {path}")

        server = self.build_server(configuration)
        self.logger.info(
            f"Starting development server on {configuration.listen_host}:{configuration.port}"
        )
        print(generate_welcome_message(configuration))
        await server.serve(sockets=self.bind_sockets(configuration))
