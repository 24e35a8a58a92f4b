"""HTTP server for the extraction API."""

from .app import create_app, run_server

__all__ = ["create_app", "run_server"]
