"""
Scripts Package.

This package contains operational scripts for the metrics backend.

Scripts:
- refresh_metrics: Recalculate and store project metrics
"""

# Scripts are meant to be run directly, not imported
