# ABOUTME: Declares the homepage post type with the host.
# ABOUTME: Public and REST-exposed, excluded from search, no rewrite slug.

import structlog

from homepages.config import Settings, get_settings
from homepages.host.ports import PostTypeRegistry
from homepages.models import PostTypeDefinition

log = structlog.get_logger()

SUPPORTS = ["title", "editor", "thumbnail", "revisions", "custom-fields"]


def build_labels() -> dict[str, str]:
    """Admin labels for the homepage post type."""
    return {
        "name": "Homepages",
        "singular_name": "Homepage",
        "add_new": "Add New Homepage",
        "add_new_item": "Add New Homepage",
        "edit_item": "Edit Homepage",
        "new_item": "New Homepage",
        "view_item": "View Homepage",
        "view_items": "View Homepages",
        "search_items": "Search Homepages",
        "not_found": "No homepages found",
        "not_found_in_trash": "No homepages found in Trash",
        "parent_item_colon": "Parent Homepage:",
        "all_items": "All Homepages",
        "archives": "Homepage Archives",
        "attributes": "Homepage Attributes",
        "insert_into_item": "Insert into Homepage",
        "uploaded_to_this_item": "Uploaded to this Homepage",
        "filter_items_list": "Filter Homepage list",
        "items_list_navigation": "Homepages list navigation",
        "items_list": "Homepages list",
        "menu_name": "Homepages",
    }


def homepage_post_type() -> PostTypeDefinition:
    return PostTypeDefinition(
        labels=build_labels(),
        public=True,
        exclude_from_search=True,
        show_ui=True,
        show_in_rest=True,
        rewrite=False,
        menu_icon="dashicons-admin-home",
        supports=list(SUPPORTS),
    )


class PostTypeRegistrar:
    """``init`` callback that registers the homepage post type."""

    def __init__(self, registry: PostTypeRegistry, settings: Settings | None = None) -> None:
        self.registry = registry
        self.settings = settings or get_settings()

    def create_post_type(self) -> None:
        self.registry.register_post_type(self.settings.post_type, homepage_post_type())
        log.info("homepage_post_type_registered", post_type=self.settings.post_type)
