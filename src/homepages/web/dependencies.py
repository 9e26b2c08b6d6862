# ABOUTME: FastAPI dependency injection for the site, templates and request context.
# ABOUTME: Editors are recognised by a bearer token; previews are only honoured for editors.

import secrets
from typing import Annotated

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from homepages.models import RequestContext
from homepages.site import Site

PREVIEW_VALUES = {"1", "true", "yes"}


def get_templates(request: Request) -> Jinja2Templates:
    """Get Jinja2 templates from app state."""
    return request.app.state.templates


Templates = Annotated[Jinja2Templates, Depends(get_templates)]


def get_site(request: Request) -> Site:
    """Get the site attached to the app."""
    return request.app.state.site


CurrentSite = Annotated[Site, Depends(get_site)]


def is_editor(request: Request, site: Site) -> bool:
    """Check the Authorization header against the configured editor token."""
    token = site.settings.editor_token
    auth_header = request.headers.get("Authorization", "")
    if token is None or not auth_header.startswith("Bearer "):
        return False
    return secrets.compare_digest(auth_header[7:], token.get_secret_value())


def get_request_context(request: Request, site: CurrentSite) -> RequestContext:
    """Build the request context from headers and query parameters."""
    params = dict(request.query_params)
    logged_in = is_editor(request, site)
    return RequestContext(
        is_admin=request.url.path.startswith("/admin"),
        is_logged_in=logged_in,
        is_preview=logged_in and params.get("preview", "").lower() in PREVIEW_VALUES,
        params=params,
    )


Context = Annotated[RequestContext, Depends(get_request_context)]
