import httpx
import pytest_asyncio
import pytest

from searxng_node.context import SearxngAPIError

SEARXNG_PAYLOAD = {
    "results": [
        {"title": "Test Result", "url": "https://example.com", "content": "A snippet"}
    ],
    "number_of_results": 1,
    "search_time": 0.2,
    "engine": "mock",
}


@pytest.fixture
def patch_http_get(monkeypatch):
    """Replace outbound SearXNG calls with a queue of canned responses."""
    from searxng_node.context import LocalExecutionContext

    calls = []
    queue = []

    async def fake_http_get(self, url, query, headers):
        calls.append({"url": url, "query": dict(query), "headers": dict(headers)})
        response = queue.pop(0) if queue else SEARXNG_PAYLOAD
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(LocalExecutionContext, "http_get", fake_http_get)
    return calls, queue


@pytest_asyncio.fixture
async def client():
    from host.fastapi_app import app
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def _body(**overrides):
    body = {
        "items": [{"query": "test"}],
        "parameters": {},
        "credentials": {"api_url": "http://searx.test", "api_key": "k"},
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_execute_returns_full_results(client, patch_http_get):
    calls, _ = patch_http_get
    r = await client.post("/execute", json=_body())
    assert r.status_code == 200
    data = r.json()["data"]
    assert len(data) == 1
    assert data[0]["success"] is True
    assert data[0]["results"][0]["title"] == "Test Result"
    assert data[0]["metadata"] == {"total": 1, "time": 0.2, "engine": "mock"}
    assert calls[0]["url"] == "http://searx.test/search"


@pytest.mark.asyncio
async def test_execute_single_response(client, patch_http_get):
    r = await client.post("/execute", json=_body(parameters={"single_response": True}))
    assert r.status_code == 200
    assert r.json()["data"] == [{"success": True, "query": "test", "answer": "A snippet"}]


@pytest.mark.asyncio
async def test_execute_continue_on_fail(client, patch_http_get):
    _, queue = patch_http_get
    queue.extend([SearxngAPIError("API error 502: bad gateway"), SEARXNG_PAYLOAD])
    r = await client.post("/execute", json=_body(
        items=[{"query": "one"}, {"query": "two"}],
        continue_on_fail=True,
    ))
    assert r.status_code == 200
    data = r.json()["data"]
    assert data[0] == {"success": False, "error": "API error 502: bad gateway", "query": "one"}
    assert data[1]["success"] is True


@pytest.mark.asyncio
async def test_execute_failure_is_500(client, patch_http_get):
    _, queue = patch_http_get
    queue.append(SearxngAPIError("API error 502: bad gateway"))
    r = await client.post("/execute", json=_body())
    assert r.status_code == 500
    assert "bad gateway" in r.text


@pytest.mark.asyncio
async def test_execute_invalid_body(client):
    r = await client.post("/execute", json={"parameters": {}})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_description_and_health(client):
    r = await client.get("/description")
    assert r.status_code == 200
    assert r.json()["name"] == "searxng"
    r = await client.get("/health")
    assert r.json() == {"status": "healthy"}


@pytest.mark.parametrize("module_name", ["host.fastapi_app", "searxng_node.mcp_server"])
def test_entry_points_share_log_format(monkeypatch, module_name):
    import importlib
    import logging
    from searxng_node.config import LOG_FORMAT

    configured = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: configured.append(kw))
    importlib.reload(importlib.import_module(module_name))
    assert configured[-1]["format"] == LOG_FORMAT
