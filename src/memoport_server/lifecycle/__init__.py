"""Application lifecycle plugins (FastAPI app, middleware, routes)."""
