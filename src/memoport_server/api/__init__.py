"""HTTP API for memoport.

Every router module registers a multi-extension plugin on
EXT_MULTI_API_ROUTERS; the routes lifecycle plugin mounts them all.
"""

EXT_MULTI_API_ROUTERS = 'memoport-multi-api-routers'
