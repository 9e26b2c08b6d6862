# ABOUTME: Tests for CLI argument parsing and command dispatch.
# ABOUTME: Runs commands against an in-memory site patched in place of the database-backed one.

import argparse
from collections.abc import Callable
from unittest.mock import patch

import pytest

from homepages.__main__ import COMMANDS, cmd_reading, create_parser, main
from homepages.host.reading import PAGE_ON_FRONT, SHOW_ON_FRONT
from homepages.models import Post
from homepages.site import Site


class TestCreateParser:
    """Tests for argument parser creation."""

    def test_parser_creation(self) -> None:
        parser = create_parser()
        assert isinstance(parser, argparse.ArgumentParser)

    def test_every_command_dispatches(self) -> None:
        parser = create_parser()
        for command in COMMANDS:
            if command == "reading":
                continue
            assert parser.parse_args([command]).command == command

    def test_reading_command(self) -> None:
        """Reading command parses mode and page id."""
        args = create_parser().parse_args(["reading", "page", "--page-id", "7"])
        assert args.mode == "page"
        assert args.page_id == 7

    def test_reading_rejects_unknown_mode(self) -> None:
        with pytest.raises(SystemExit):
            create_parser().parse_args(["reading", "archive"])

    def test_serve_defaults(self) -> None:
        args = create_parser().parse_args(["serve"])
        assert args.host == "127.0.0.1"
        assert args.port == 8000


class TestMain:
    """Tests for the main entry point."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1
        assert "usage: homepages" in capsys.readouterr().out

    def test_latest(
        self,
        site: Site,
        create_homepages: Callable[[int], list[int]],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        ids = create_homepages(2)

        with patch("homepages.site.get_site", return_value=site):
            result = main(["latest"])

        assert result == 0
        assert capsys.readouterr().out.strip() == str(ids[-1])

    def test_status(
        self,
        site: Site,
        static_front_page: Post,
        create_homepage: Callable[..., Post],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        homepage = create_homepage()

        with patch("homepages.site.get_site", return_value=site):
            result = main(["status"])

        out = capsys.readouterr().out
        assert result == 0
        assert "Front page mode: page" in out
        assert f"Page on front: {static_front_page.id}" in out
        assert "Homepage published: yes" in out
        assert f"Latest homepage id: {homepage.id}" in out
        assert "Notices:" in out

    def test_flush_cache(self, site: Site, create_homepage: Callable[..., Post]) -> None:
        create_homepage()
        site.plugin.get_latest_homepage_id()
        assert site.transients.get(site.settings.latest_cache_key) is not None

        with patch("homepages.site.get_site", return_value=site):
            result = main(["flush-cache"])

        assert result == 0
        assert site.transients.get(site.settings.latest_cache_key) is None


class TestCmdReading:
    """Tests for the reading command."""

    def test_switch_to_page_mode(self, site: Site) -> None:
        args = argparse.Namespace(mode="page", page_id=5)

        with patch("homepages.site.get_site", return_value=site):
            result = cmd_reading(args)

        assert result == 0
        assert site.options.get(SHOW_ON_FRONT) == "page"
        assert site.options.get(PAGE_ON_FRONT) == 5

    def test_page_mode_requires_page_id(self, site: Site) -> None:
        args = argparse.Namespace(mode="page", page_id=0)

        with patch("homepages.site.get_site", return_value=site):
            result = cmd_reading(args)

        assert result == 1
        assert site.options.get(SHOW_ON_FRONT) is None

    def test_switch_back_to_posts(self, site: Site, static_front_page: Post) -> None:
        args = argparse.Namespace(mode="posts", page_id=0)

        with patch("homepages.site.get_site", return_value=site):
            result = cmd_reading(args)

        assert result == 0
        assert site.options.get(SHOW_ON_FRONT) == "posts"
        assert site.plugin.admin_notices() == []
