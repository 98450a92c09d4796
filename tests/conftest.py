import os
import sys
from typing import Any, Dict, List, Optional

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from searxng_node.description import parameter_default
from searxng_node.models import SearxngCredentials


class FakeContext:
    """In-memory host context; queued responses are returned (or raised) in order."""

    def __init__(
        self,
        items: List[Any],
        parameters: Optional[Dict[str, Any]] = None,
        responses: Optional[List[Any]] = None,
        credentials: Any = None,
        continue_on_fail: bool = False,
    ):
        self.items = items
        self.parameters = parameters or {}
        self.responses = list(responses or [])
        self.credentials = credentials if credentials is not None else SearxngCredentials(
            api_url="https://search.example.org", api_key="secret"
        )
        self._continue_on_fail = continue_on_fail
        self.calls: List[Dict[str, Any]] = []

    def get_input_data(self):
        return self.items

    async def get_credentials(self, name):
        if isinstance(self.credentials, Exception):
            raise self.credentials
        return self.credentials

    def get_parameter(self, name, index, default=None):
        if name in self.parameters:
            value = self.parameters[name]
            # per-item values may be given as a list under a "*" key
            if isinstance(value, dict) and "*" in value:
                return value["*"][index]
            return value
        return parameter_default(name)

    def continue_on_fail(self):
        return self._continue_on_fail

    async def http_get(self, url, query, headers):
        self.calls.append({"url": url, "query": dict(query), "headers": dict(headers)})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def raw_response():
    return {
        "results": [{"title": "T", "url": "U", "content": "C"}],
        "number_of_results": 1,
        "search_time": 0.1,
        "engine": "x",
    }


@pytest.fixture
def make_context():
    return FakeContext
