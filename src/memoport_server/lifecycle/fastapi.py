"""The memoport FastAPI application and its request-scoped dependencies."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from logging import Logger

from fastapi import FastAPI, Request
from scitrera_app_framework import (
    Plugin, Variables, get_logger as _saf_get_logger, get_variables as _saf_get_variables, get_extension as _saf_get_extension
)
from scitrera_app_framework.core.plugins import init_all_plugins as _saf_init_all_plugins

from .. import __version__

EXT_FASTAPI_SERVER = 'memoport-server-fastapi-server'

APP_NAME = "memoport"
APP_DESCRIPTION = "Export and import server for personal memo collections"


async def get_variables_dep(request: Request) -> Variables:
    return request.app.state.v


async def get_logger(request: Request) -> Logger:
    return _saf_get_logger(request.app.state.v)


class FastApiPlugin(Plugin):
    """Builds the app; its lifespan brings storage up and down."""

    def extension_point_name(self, v: Variables) -> str:
        return EXT_FASTAPI_SERVER

    def initialize(self, v, logger) -> object | None:
        logger.info('Creating memoport FastAPI app')

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
            from ..dependencies import initialize_services, shutdown_services

            await initialize_services(v)
            app.state.v = v
            try:
                yield
            finally:
                await shutdown_services(v)

        app = FastAPI(title=APP_NAME, description=APP_DESCRIPTION, version=__version__, lifespan=lifespan)

        @app.get("/")
        async def root() -> dict:
            return {"name": APP_NAME, "version": __version__, "description": APP_DESCRIPTION}

        return app


def fastapi_app_factory(v: Variables = None) -> FastAPI:
    """Return the app with routers mounted; async service startup is left to the lifespan."""
    v: Variables = _saf_get_variables(v)
    _saf_init_all_plugins(v, async_enabled=False)
    return _saf_get_extension(EXT_FASTAPI_SERVER, v)
