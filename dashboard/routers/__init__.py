"""
Dashboard API Routers.
"""
from . import health, metrics, cross_chain

__all__ = ["health", "metrics", "cross_chain"]
