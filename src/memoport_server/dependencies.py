"""Framework bootstrap for memoport.

``preconfigure`` registers the ``services``, ``lifecycle`` and ``api`` plugin
packages once per Variables instance. Storage connects when the async
lifecycle starts (``initialize_services``) and disconnects on
``shutdown_services``.
"""
import logging
from logging import Logger

from scitrera_app_framework import (
    Variables, get_variables, get_logger, init_framework_desktop,
    async_plugins_ready, async_plugins_stopping
)
from .config import MEMOPORT_DATA_DIR

_QUIET_LOGGERS = ('aiosqlite', 'httpcore.http11', 'httpcore.connection', 'httpx')


def preconfigure(v: Variables = None, test_mode: bool = False, test_logger: Logger = None) -> Variables:
    """Initialize the framework and register memoport's plugins (idempotent)."""
    from scitrera_app_framework import register_package_plugins
    from . import api, services, lifecycle  # noqa: F401

    test_kwargs = {} if not test_mode else {
        'fault_handler': False,
        'fixed_logger': test_logger,
        'pyroscope': False,
        'shutdown_hooks': False,
    }

    # the sqlite file lands under MEMOPORT_DATA_DIR
    v: Variables = init_framework_desktop(
        'memoport-server',
        base_plugins=False,
        stateful_chdir=True,
        stateful_root_env_key=MEMOPORT_DATA_DIR,
        async_auto_enabled=False,
        v=v,
        **test_kwargs
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if v.get('__memoport_plugins_registered__', default=False):
        return v

    logger = get_logger(v)
    for package in (services, lifecycle, api):
        logger.debug('Registering plugins from %s', package.__package__)
        register_package_plugins(package.__package__, v, recursive=True)

    v.set('__memoport_plugins_registered__', True)
    return v


async def initialize_services(v: Variables = None) -> Variables:
    """Initialize plugins, then run their async readiness hooks (storage connect)."""
    v = preconfigure(v)
    get_logger(v).debug("Initializing services")

    from scitrera_app_framework.core.plugins import init_all_plugins
    init_all_plugins(v, async_enabled=False)
    await async_plugins_ready(v)
    return v


async def shutdown_services(v: Variables = None) -> None:
    """Run async stopping hooks (storage disconnect), then shut plugins down."""
    v = get_variables(v)
    get_logger(v).debug("Shutting down services")
    await async_plugins_stopping(v)

    from scitrera_app_framework.core.plugins import shutdown_all_plugins
    shutdown_all_plugins(v)
