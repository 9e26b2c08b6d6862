# ABOUTME: Routes module initialization.
# ABOUTME: Exports all route modules for FastAPI app.

from homepages.web.routes import admin, home, rest

__all__ = ["admin", "home", "rest"]
