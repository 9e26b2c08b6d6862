# ABOUTME: Accessors for the host's reading settings (what the site root displays).
# ABOUTME: Wraps the show_on_front and page_on_front options with safe defaults.

import structlog

from homepages.host.ports import OptionStore
from homepages.models import FrontPageMode
from homepages.utils import absint

log = structlog.get_logger()

SHOW_ON_FRONT = "show_on_front"
PAGE_ON_FRONT = "page_on_front"


def get_front_page_mode(options: OptionStore) -> FrontPageMode:
    """Read the configured front-page mode, defaulting to latest posts."""
    raw = options.get(SHOW_ON_FRONT, FrontPageMode.POSTS.value)
    try:
        return FrontPageMode(raw)
    except ValueError:
        log.warning("unknown_front_page_mode", value=raw, fallback=FrontPageMode.POSTS.value)
        return FrontPageMode.POSTS


def get_page_on_front(options: OptionStore) -> int:
    """Id of the fixed front page, or 0 when none is configured."""
    return absint(options.get(PAGE_ON_FRONT, 0))
