"""API package for HTTP routing and application composition."""

from .application import create_api_application

__all__ = ["create_api_application"]
