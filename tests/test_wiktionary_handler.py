"""
Tests for the WiktionarySearchHandler.

Tests matching, the immediate loading item, pushed updates and activation.
"""

from unittest.mock import MagicMock

import pytest

from wiktsearch.search.handlers.wiktionary import ICON, WiktionarySearchHandler
from wiktsearch.services.provider import WiktionarySearchProvider
from wiktsearch.services.results import ERROR_ID, LOADING_ID


@pytest.fixture
def opener():
    return MagicMock()


@pytest.fixture
def updates():
    return []


@pytest.fixture
def handler(api, scheduler, opener, updates):
    provider = WiktionarySearchProvider(api, scheduler, opener=opener)
    return WiktionarySearchHandler(provider, on_update=updates.append)


class TestWiktionaryMatching:
    """Test query matching for the marker."""

    def test_matches_marker(self, handler):
        assert handler.matches("wikt chat") is True

    def test_matches_marker_with_language(self, handler):
        assert handler.matches("wikt-fr chat") is True

    def test_no_match_plain_text(self, handler):
        assert handler.matches("firefox") is False

    def test_no_match_marker_only(self, handler):
        assert handler.matches("wikt") is False
        assert handler.matches("wikt-fr ") is False


class TestWiktionaryResults:
    """Test immediate and pushed results."""

    def test_immediate_result_is_loading_message(self, handler, updates):
        results = handler.get_results("wikt-fr chat")
        assert len(results) == 1
        assert results[0].result_id == LOADING_ID
        assert results[0].on_activate is None
        assert updates == []

    def test_final_results_are_pushed(self, handler, scheduler, updates):
        handler.get_results("wikt-fr chat")
        scheduler.fire_timers()
        scheduler.complete_jobs()

        assert len(updates) == 1
        item, = updates[0]
        assert item.title == "chat"
        assert item.description == "cat (fr)"
        assert item.icon == ICON
        assert item.result_type == "dictionary"

    def test_activate_opens_result(self, handler, scheduler, updates, opener):
        handler.get_results("wikt-fr chat")
        scheduler.fire_timers()
        scheduler.complete_jobs()

        updates[0][0].on_activate()
        opener.assert_called_once_with("https://en.wiktionary.org/wiki/chat?setlang=fr")

    def test_error_is_pushed_as_message(self, failing_api, scheduler, updates):
        provider = WiktionarySearchProvider(failing_api, scheduler, opener=MagicMock())
        handler = WiktionarySearchHandler(provider, on_update=updates.append)
        handler.get_results("wikt chat")
        scheduler.fire_timers()
        scheduler.complete_jobs()

        assert [item.result_id for item in updates[0]] == [ERROR_ID]

    def test_results_capped_at_limit(self, scheduler, updates):
        from conftest import FakeApi
        from wiktsearch.services.results import ResultRecord

        records = [ResultRecord(id=f"Q{i}", label=f"word {i}") for i in range(15)]
        provider = WiktionarySearchProvider(FakeApi(records=records), scheduler, opener=MagicMock())
        handler = WiktionarySearchHandler(provider, on_update=updates.append)
        handler.get_results("wikt word")
        scheduler.fire_timers()
        scheduler.complete_jobs()

        assert len(updates[0]) == 10

    def test_no_update_callback(self, api, scheduler):
        provider = WiktionarySearchProvider(api, scheduler, opener=MagicMock())
        handler = WiktionarySearchHandler(provider)
        handler.get_results("wikt chat")
        scheduler.fire_timers()
        scheduler.complete_jobs()  # must not raise
