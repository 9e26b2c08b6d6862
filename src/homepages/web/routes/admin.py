# ABOUTME: Admin routes for editors.
# ABOUTME: Shows configuration notices collected from the admin_notices filter.

import structlog
from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse
from markupsafe import Markup

from homepages.web.dependencies import Context, CurrentSite

router = APIRouter(prefix="/admin", tags=["admin"])
log = structlog.get_logger()


@router.get("/notices", response_class=HTMLResponse)
def admin_notices(site: CurrentSite, context: Context):
    """Render admin notices. Editors only."""
    if not context.is_logged_in:
        log.warning("admin_notices_unauthorized")
        raise HTTPException(status_code=401, detail="Authorization header required")
    return HTMLResponse(str(Markup("\n").join(site.plugin.admin_notices())))
