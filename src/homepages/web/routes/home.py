# ABOUTME: Front-end routes for the site root, paginated listings and permalinks.
# ABOUTME: Renders whatever the main query resolves to, or a 404 page.

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from homepages.models import RequestContext
from homepages.site import Site
from homepages.web.dependencies import Context, CurrentSite, Templates

router = APIRouter()


def render_main_query(
    request: Request, site: Site, context: RequestContext, templates
) -> HTMLResponse:
    """Run the request lifecycle and render the resulting view."""
    query = site.lifecycle.run(context)

    if query.is_404:
        return templates.TemplateResponse(
            request=request,
            name="404.html",
            context={"site_name": site.settings.site_name},
            status_code=404,
        )

    default_title = query.posts[0].title if query.is_singular and query.posts else ""
    title = site.hooks.apply_filters("document_title", default_title, query, context)
    return templates.TemplateResponse(
        request=request,
        name="home.html",
        context={
            "site_name": site.settings.site_name,
            "title": title,
            "posts": query.posts,
            "is_home": query.is_home,
        },
    )


@router.get("/", response_class=HTMLResponse)
def home(request: Request, site: CurrentSite, context: Context, templates: Templates):
    """Display the site root (also serves ``?p=`` permalinks and ``?paged=`` listings)."""
    return render_main_query(request, site, context, templates)


@router.get("/page/{paged}", response_class=HTMLResponse)
def paged_home(
    paged: int, request: Request, site: CurrentSite, context: Context, templates: Templates
):
    """Display page N of the home listing."""
    context.params["paged"] = str(paged)
    return render_main_query(request, site, context, templates)
