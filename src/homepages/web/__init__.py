# ABOUTME: Web package for the homepages frontend.
# ABOUTME: Exports the FastAPI application factory.

from homepages.web.app import create_app

__all__ = ["create_app"]
