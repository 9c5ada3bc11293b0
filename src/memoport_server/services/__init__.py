"""Services package for memoport.

This package provides all core services using the plugin dependency injection pattern from scitrera-app-framework.

Prefer importing from specific service submodules (e.g., `from .transfer import get_transfer_service`)
rather than from this top-level package.
"""
