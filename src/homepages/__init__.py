# ABOUTME: Main package for the homepages plugin.
# ABOUTME: Exports the plugin, the site assembler and the latest-homepage helper.

from homepages.config import Settings, get_settings
from homepages.models import FrontPageMode, Post, PostStatus, RequestContext
from homepages.plugin import Homepages
from homepages.site import Site, get_latest_homepage_id

__all__ = [
    "FrontPageMode",
    "Homepages",
    "Post",
    "PostStatus",
    "RequestContext",
    "Settings",
    "Site",
    "get_latest_homepage_id",
    "get_settings",
]
