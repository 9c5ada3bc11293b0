from typing import Iterable

from scitrera_app_framework import get_extensions, Plugin, Variables
from ..api import EXT_MULTI_API_ROUTERS
from .fastapi import EXT_FASTAPI_SERVER
from .cors import EXT_CORS

EXT_ROUTES = 'memoport-server-fastapi-routes'


class RoutesPlugin(Plugin):
    """Mounts the health and memo routers on the app."""

    def extension_point_name(self, v: Variables) -> str:
        return EXT_ROUTES

    def initialize(self, v, logger) -> object | None:
        app = self.get_extension(EXT_FASTAPI_SERVER, v)
        for ext_name, router in get_extensions(EXT_MULTI_API_ROUTERS, v).items():
            logger.info('Mounting router %s', ext_name)
            app.include_router(router)
        return None

    def get_dependencies(self, v: Variables) -> Iterable[str] | None:
        # CORS middleware must be installed before routes are mounted
        return EXT_FASTAPI_SERVER, EXT_CORS
