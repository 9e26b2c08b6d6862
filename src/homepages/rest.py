# ABOUTME: REST API guard for the homepage listing endpoint.
# ABOUTME: Forces a single-item listing and rejects paginated requests for older homepages.

from typing import Any

import structlog

from homepages.config import Settings, get_settings
from homepages.models import RequestContext, RestError, RestRequest
from homepages.utils import absint

log = structlog.get_logger()

FORBIDDEN_MESSAGE = "Sorry, you are not allowed to do that."


def authorization_required_status(context: RequestContext) -> int:
    """401 for anonymous callers, 403 for authenticated ones."""
    return 403 if context.is_logged_in else 401


class ApiGuard:
    """Filters for the ``/<namespace>/<post_type>`` listing route."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def rest_only_expose_latest_homepage(
        self, args: dict[str, Any], request: RestRequest | None = None
    ) -> dict[str, Any]:
        """Always list only the latest homepage, whatever per_page was asked for."""
        args["posts_per_page"] = 1
        return args

    def prevent_paginated_rest_requests(
        self,
        result: Any,
        server: Any,
        request: RestRequest,
        context: RequestContext | None = None,
    ) -> Any:
        """``rest_pre_dispatch`` filter.

        Returns a ``rest_forbidden`` error for page 2 and beyond of the
        homepage route; anything else passes through unchanged.
        """
        if "/" + request.route.strip("/") != self.settings.rest_route:
            return result

        if absint(request.params.get("page")) > 1:
            context = context or RequestContext()
            log.info("paginated_rest_request_rejected", page=request.params.get("page"))
            return RestError(
                code="rest_forbidden",
                message=FORBIDDEN_MESSAGE,
                status=authorization_required_status(context),
            )

        return result
