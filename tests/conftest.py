"""
Shared test fixtures for the wiktsearch test suite.

Provides a deterministic scheduler (timers and worker jobs run only when
the test says so), a scripted search API, a loguru capture sink and real
settings files on disk.
"""

import pytest
import toml
from loguru import logger

from wiktsearch.exceptions import TransportError
from wiktsearch.services.results import ResultRecord


class FakeScheduler:
    """Records timers and background jobs instead of running them."""

    def __init__(self):
        self.timers = {}
        self.removed = []
        self.jobs = []
        self._next_id = 1

    def timeout_add(self, delay_ms, callback):
        source_id = self._next_id
        self._next_id += 1
        self.timers[source_id] = (delay_ms, callback)
        return source_id

    def source_remove(self, source_id):
        del self.timers[source_id]
        self.removed.append(source_id)

    def run_in_thread(self, func, on_done):
        self.jobs.append((func, on_done))

    def fire_timers(self):
        """Fire every pending timer, oldest first."""
        for source_id in sorted(self.timers):
            _delay, callback = self.timers.pop(source_id)
            callback()

    def complete_job(self, index=0):
        """Run one background job and deliver its outcome."""
        func, on_done = self.jobs.pop(index)
        try:
            result = func()
        except Exception as e:
            on_done(None, e)
        else:
            on_done(result, None)

    def complete_jobs(self):
        while self.jobs:
            self.complete_job()


class FakeApi:
    """Scripted stand-in for WiktionaryApi.search."""

    limit = 10

    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error
        self.calls = []
        self.closed = False

    def search(self, text, language, limit=None, offset=0):
        self.calls.append((text, language))
        if self.error:
            raise self.error
        return list(self.records)

    def get_full_search_url(self, term, language):
        return f"https://en.wiktionary.org/w/index.php?search={term}&setlang={language}"

    def build_result_url(self, fragment, language):
        return f"https:{fragment}?setlang={language}"

    def close(self):
        self.closed = True


class Collector:
    """Callback that remembers every identifier list it receives."""

    def __init__(self):
        self.calls = []

    def __call__(self, identifiers):
        self.calls.append(list(identifiers))


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def chat_record():
    return ResultRecord(id="Q1", label="chat", description="cat (fr)", url="//en.wiktionary.org/wiki/chat")


@pytest.fixture
def api(chat_record):
    return FakeApi(records=[chat_record])


@pytest.fixture
def failing_api():
    return FakeApi(error=TransportError("Error code: 503"))


@pytest.fixture
def collector():
    return Collector()


@pytest.fixture
def log_records():
    """Capture loguru messages as (level, message) tuples."""
    records = []
    handler_id = logger.add(
        lambda message: records.append((message.record["level"].name, message.record["message"])),
        level="DEBUG",
    )
    yield records
    logger.remove(handler_id)


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file overriding a few keys."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "wiktionary": {"language": "de", "limit": 5, "request_delay_ms": 150},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path
