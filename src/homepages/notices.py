# ABOUTME: Admin notice shown when the site is not configured for homepages.
# ABOUTME: Warns (without enforcing) when the root is not set to display the latest posts.

from markupsafe import Markup

from homepages.config import Settings, get_settings
from homepages.host.ports import OptionStore
from homepages.host.reading import get_front_page_mode
from homepages.models import FrontPageMode

NOTICE_TEMPLATE = Markup(
    '<div class="notice notice-error"><p>%s <a href="%s">here</a>.</p></div>'
)
NOTICE_TEXT = (
    "Homepages will only work when the site is set to display the latest posts "
    "on the homepage. Please update this setting"
)


class AdminNotices:
    """``admin_notices`` filter that appends configuration warnings."""

    def __init__(self, options: OptionStore, settings: Settings | None = None) -> None:
        self.options = options
        self.settings = settings or get_settings()

    def admin_notices(self, notices: list[Markup]) -> list[Markup]:
        if get_front_page_mode(self.options) != FrontPageMode.POSTS:
            # Markup's % operator escapes both arguments.
            notices.append(NOTICE_TEMPLATE % (NOTICE_TEXT, self.settings.reading_settings_url))
        return notices
