"""
FastAPI application stub for memoport

This provides compatibility with typical uvicorn/gunicorn deployment setups,
e.g. ``uvicorn memoport_server.main:app``.
"""

from memoport_server.dependencies import preconfigure
from memoport_server.lifecycle.fastapi import fastapi_app_factory, get_logger, get_variables_dep

_v = preconfigure()
app = fastapi_app_factory(_v)

__all__ = (
    'app', 'get_logger', 'get_variables_dep',
)
