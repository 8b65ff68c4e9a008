from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

BASE_URL = "https://api.example.com/v1/agenda_item/?order_by=-last_modified_time"


def make_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


class FakeBackend:
    """Serves offset-paginated listing pages from an in-memory list."""

    def __init__(self, total=30, limit=10, fail_offsets=()):
        self.objects = [
            {"id": str(i), "subject": f"Item {i}", "version": 1} for i in range(total)
        ]
        self.limit = limit
        self.fail_offsets = set(fail_offsets)
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        query = parse_qs(urlsplit(url).query)
        offset = int(query.get("offset", ["0"])[0])
        if offset in self.fail_offsets:
            raise requests.ConnectionError(f"Connection refused for offset {offset}")
        return make_response(
            {
                "meta": {
                    "limit": self.limit,
                    "offset": offset,
                    "total_count": len(self.objects),
                },
                "objects": self.objects[offset : offset + self.limit],
            }
        )

    @property
    def requested_offsets(self):
        return [
            int(parse_qs(urlsplit(url).query).get("offset", ["0"])[0])
            for url in self.requested
        ]


@pytest.fixture
def base_url():
    return BASE_URL


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def mock_get(backend, monkeypatch):
    """Routes ``requests.get`` in the page client through the fake backend."""
    mock = MagicMock(side_effect=backend.get)
    monkeypatch.setattr("tastyharvest.harvester.paginated.client.requests.get", mock)
    return mock
