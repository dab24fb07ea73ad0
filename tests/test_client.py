import anyio
import httpx
import pytest

from rpcschema.client import SchemaClient
from rpcschema.errors import SchemaIOError, SchemaParseError
from rpcschema.server.service import SchemaService


def make_client(app):
    return SchemaClient("http://testserver/", transport=httpx.ASGITransport(app=app))


def run(client, coro_fn, *args):
    async def _main():
        try:
            return await coro_fn(*args)
        finally:
            await client.close()
    return anyio.run(_main)


def test_fetch_definition_is_normalized(api_file):
    service = SchemaService.from_file(str(api_file))
    client = make_client(service.app)
    api = run(client, client.fetch_definition)

    assert api == service.api
    outer = api.get_method("getblock").results[0]
    assert outer.required is False
    assert outer.inner[0].required is True


def test_fetch_method(api_file):
    service = SchemaService.from_file(str(api_file))
    client = make_client(service.app)
    method = run(client, client.fetch_method, "getblock")

    assert method.name == "getblock"
    assert method.results[0].inner[0].required is True


def test_fetch_unknown_method_returns_none(api_file):
    client = make_client(SchemaService.from_file(str(api_file)).app)
    assert run(client, client.fetch_method, "nope") is None


def test_server_error_is_io_error():
    def handler(request):
        return httpx.Response(500, text="boom")

    client = SchemaClient("http://schema", transport=httpx.MockTransport(handler))
    with pytest.raises(SchemaIOError):
        run(client, client.fetch_definition)


def test_network_error_is_io_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = SchemaClient("http://schema", transport=httpx.MockTransport(handler))
    with pytest.raises(SchemaIOError) as exc:
        run(client, client.fetch_method, "getblock")
    assert isinstance(exc.value.cause, httpx.ConnectError)


def test_bad_payload_is_parse_error():
    def handler(request):
        return httpx.Response(200, json={"name": "getblock"})

    client = SchemaClient("http://schema", transport=httpx.MockTransport(handler))
    with pytest.raises(SchemaParseError):
        run(client, client.fetch_method, "getblock")
    client = SchemaClient("http://schema", transport=httpx.MockTransport(lambda r: httpx.Response(200, text="not json")))
    with pytest.raises(SchemaParseError):
        run(client, client.fetch_definition)


def test_settings_reach_the_client():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, json={"rpcs": {}})

    client = SchemaClient(
        settings={"schema_url": "http://configured:9100/", "request_timeout": 2.5},
        transport=httpx.MockTransport(handler),
    )
    assert client.base_url == "http://configured:9100"
    assert client.client.timeout.read == 2.5
    assert run(client, client.fetch_definition).rpcs == {}
    assert seen == ["http://configured:9100/schema"]


def test_base_url_overrides_settings():
    client = SchemaClient("http://explicit", settings={"schema_url": "http://configured"})
    assert client.base_url == "http://explicit"
    anyio.run(client.close)


def test_method_name_is_quoted_as_one_segment():
    paths = []

    def handler(request):
        paths.append(request.url.raw_path)
        return httpx.Response(404)

    client = SchemaClient("http://schema", transport=httpx.MockTransport(handler))
    assert run(client, client.fetch_method, "a/b?c") is None
    assert paths == [b"/methods/a%2Fb%3Fc"]
