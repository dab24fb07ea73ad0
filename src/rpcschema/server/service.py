from __future__ import annotations

import logging
from typing import Any

import anyio
import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from rpcschema.config.default import SchemaSettings
from rpcschema.log import configure_logging
from rpcschema.schemas import ApiDefinition, BtcMethod


# ──────────────────────────────────────────────────────────────
# SchemaService – serves a loaded API definition over HTTP
# ──────────────────────────────────────────────────────────────
class SchemaService:
    def __init__(
        self,
        api: ApiDefinition | None = None,
        name: str | None = None,
        settings: SchemaSettings | dict | None = None,
    ):
        self._settings = SchemaSettings.resolve(settings)
        self._name = name or "RPCSchema"
        self._api = api if api is not None else ApiDefinition.new()
        self._logger = logging.getLogger("rpcschema.server")
        self._app: FastAPI | None = None

        configure_logging(self._settings.log_level)
        self._logger.info(f"Initialized {self._name} with {len(self._api.rpcs)} methods")

    @classmethod
    def from_file(cls, path: str | None = None, **kwargs: Any) -> "SchemaService":
        """Load the definition at ``path`` (or the configured api_path) and wrap it."""
        settings = SchemaSettings.resolve(kwargs.pop("settings", None), api_path=path)
        return cls(ApiDefinition.load(settings.api_path), settings=settings, **kwargs)

    # ───── Properties ─────
    @property
    def name(self) -> str:
        return self._name

    @property
    def api(self) -> ApiDefinition:
        return self._api

    @property
    def settings(self) -> SchemaSettings:
        return self._settings

    @property
    def app(self) -> FastAPI:
        self._setup_fastapi_app()
        return self._app

    # ───── Get Method ─────
    def get(self, method_name: str) -> BtcMethod:
        method = self._api.get_method(method_name)
        if method is None:
            self._logger.error(f"Method not found: {method_name}")
            raise HTTPException(status_code=404, detail=f"No method named '{method_name}'")
        return method

    # ───── FastAPI App Setup ─────
    def _setup_fastapi_app(self):
        if self._app is not None:
            return

        app = FastAPI(title=self._name)

        async def methods_endpoint():
            return JSONResponse(content={"result": self._api.list_methods(), "error": None})

        async def method_endpoint(method_name: str):
            method = self.get(method_name)
            return JSONResponse(content=method.model_dump(mode="json", by_alias=True))

        async def schema_endpoint():
            return JSONResponse(content=self._api.model_dump(mode="json", by_alias=True))

        async def health_check():
            return {"status": "healthy", "methods": len(self._api.rpcs)}

        app.get("/methods")(methods_endpoint)
        app.get("/methods/{method_name}")(method_endpoint)
        app.get("/schema")(schema_endpoint)
        app.get("/health")(health_check)

        self._app = app

    # ───── Run ─────
    def run(self, *, host: str | None = None, port: int | None = None) -> None:
        """Serve the definition over HTTP until interrupted."""
        host = host or self._settings.host
        port = port or self._settings.port
        print(f"Schema server starting at http://{host}:{port}/methods")
        anyio.run(self._run_http_async, host, port)

    async def _run_http_async(self, host: str, port: int):
        self._setup_fastapi_app()
        config = uvicorn.Config(
            self._app,
            host=host,
            port=port,
            log_level=self._settings.log_level.lower() if isinstance(self._settings.log_level, str) else "info",
        )
        server = uvicorn.Server(config)
        self._logger.info(f"Starting HTTP server at http://{host}:{port}")
        await server.serve()
