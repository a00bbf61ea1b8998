"""HTTP API: upload an archive or source file, receive the analysis as JSON."""

from .app import create_app

__all__ = ["create_app"]
