# ABOUTME: REST API routes under /wp-json.
# ABOUTME: Hands collection requests to the site's REST dispatcher and serializes errors.

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from homepages.models import RestError, RestRequest
from homepages.web.dependencies import Context, CurrentSite

router = APIRouter(prefix="/wp-json", tags=["rest"])


@router.get("/{route:path}")
def rest_collection(route: str, site: CurrentSite, context: Context):
    """Dispatch ``GET /wp-json/<namespace>/<post_type>``."""
    request = RestRequest(method="GET", route=f"/{route.strip('/')}", params=context.params)
    result = site.rest.dispatch(request, context)
    if isinstance(result, RestError):
        return JSONResponse(result.to_response_body(), status_code=result.status)
    return result
