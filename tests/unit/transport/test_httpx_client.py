import httpx
import pytest

from wpcom_remote.config import resolve_config
from wpcom_remote.core.exceptions import TransportError
from wpcom_remote.transport.base import HttpClient
from wpcom_remote.transport.httpx_client import HttpxClient


def make_client(handler, **kwargs):
    return HttpxClient(
        "https://api.example.test/", transport=httpx.MockTransport(handler), **kwargs
    )


@pytest.mark.unit
def test_satisfies_the_protocol():
    assert isinstance(make_client(lambda request: httpx.Response(200)), HttpClient)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_sends_query_and_headers_and_parses_json():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"views": 7})

    async with make_client(handler, user_agent="tests/1.0", auth_token="secret") as client:
        body = await client.get("rest/v1.1/sites/1/stats/post/42", {"fields": "views"})

    assert body == {"views": 7}
    request = seen[0]
    assert request.url.path == "/rest/v1.1/sites/1/stats/post/42"
    assert request.url.params["fields"] == "views"
    assert request.headers["User-Agent"] == "tests/1.0"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Accept"] == "application/json"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_anonymous_client_sends_no_authorization():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    async with make_client(handler) as client:
        assert await client.get("rest/v1.1/sites/1/posts/", {}) == []

    assert "Authorization" not in seen[0].headers


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("status", [301, 400, 403, 404, 500])
async def test_non_success_status_is_a_transport_error(status):
    def handler(request):
        return httpx.Response(status, json={"error": "unknown_blog"})

    async with make_client(handler) as client:
        with pytest.raises(TransportError) as excinfo:
            await client.get("rest/v1.1/sites/1/stats/", {})

    assert str(status) in excinfo.value.detail


@pytest.mark.unit
@pytest.mark.asyncio
async def test_non_json_body_is_a_transport_error():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    async with make_client(handler) as client:
        with pytest.raises(TransportError, match="invalid JSON"):
            await client.get("rest/v1.1/sites/1/stats/", {})


@pytest.mark.unit
@pytest.mark.asyncio
async def test_network_failure_is_a_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(TransportError) as excinfo:
            await client.get("rest/v1.1/sites/1/stats/", {})

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_from_config_applies_base_url_and_user_agent():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={})

    config = resolve_config(
        {"base_url": "https://proxy.example.test/api", "user_agent": "cfg-agent"}
    ).to_frozen()
    async with HttpxClient.from_config(config, transport=httpx.MockTransport(handler)) as client:
        await client.get("wpcom/v2/sites/3/scan", {})

    assert str(seen[0].url) == "https://proxy.example.test/api/wpcom/v2/sites/3/scan"
    assert seen[0].headers["User-Agent"] == "cfg-agent"
