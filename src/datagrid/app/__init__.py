"""Application layer: bootstrap and lifecycle of the component host."""

from .bootstrap import AppContext, create_app, shutdown_app  # noqa: F401

__all__ = ["AppContext", "create_app", "shutdown_app"]
