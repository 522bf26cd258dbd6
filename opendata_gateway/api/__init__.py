"""API Package - FastAPI routes, middleware, and dependencies.

Components:
- routes: API endpoint routers (health, tools, context)
- middleware: Request logging with correlation IDs
- deps: FastAPI dependency injection functions

Note: Import routers directly from opendata_gateway.api.routes to avoid circular imports.
"""

__all__ = ["routes", "middleware", "deps"]
