"""Terminal chat client for a WebSocket chat server, with HTML-rendering chat and login views."""

__version__ = "0.1.0"
__all__ = ["__version__"]