"""
Dashboard Package.

REST API for project metrics and cross-chain comparison.

Modules:
- main: application factory (create_app) and default app
- routers/: health, metrics and cross-chain endpoints
- services: database queries behind the endpoints
"""

from .main import create_app

__all__ = ["create_app"]
