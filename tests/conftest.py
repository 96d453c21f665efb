import sys
import os

# Add project root to sys.path so tests can import top-level modules like 'ingest', 'normalize', 'report', etc.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest

from ingest.base import ActivityProvider


class StaticProvider(ActivityProvider):
    """Provider returning a fixed list of items, recording the dates it was asked for."""

    def __init__(self, name, items):
        self.name = name
        self.items = list(items)
        self.calls = []

    async def fetch_activity(self, date_str):
        self.calls.append(date_str)
        return list(self.items)


class FailingProvider(ActivityProvider):
    def __init__(self, name, exc):
        self.name = name
        self.exc = exc

    async def fetch_activity(self, date_str):
        raise self.exc


class FakeResponse:
    """Stand-in for requests.Response with the attributes the Jira client reads."""

    def __init__(self, status_code=200, payload=None, text='', reason='OK'):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError('No JSON object could be decoded')
        return self._payload


def jira_issue(key, summary, status='In Progress', project='Platform', project_key=None):
    return {
        'key': key,
        'fields': {
            'summary': summary,
            'status': {'name': status},
            'project': {'name': project, 'key': project_key or key.split('-')[0]},
        },
    }


@pytest.fixture
def static_provider():
    return StaticProvider


@pytest.fixture
def failing_provider():
    return FailingProvider


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def make_issue():
    return jira_issue
