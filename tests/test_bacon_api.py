"""Tests for the bacon ipsum API client using httpx.MockTransport."""

from unittest.mock import patch

import httpx
import pytest

from bacon_ipsum.core.config import Settings
from bacon_ipsum.core.exceptions import InvalidResponse, UpstreamStatusError, UpstreamUnreachable
from bacon_ipsum.services.bacon_api import BaconIpsumClient, build_query, parse_paragraphs


def _client(settings: Settings, handler) -> BaconIpsumClient:
    return BaconIpsumClient(settings, transport=httpx.MockTransport(handler))


class TestBuildQuery:

    def test_lorem_on(self):
        assert build_query("all-meat", 2, True) == {
            "format": "json",
            "type": "all-meat",
            "paras": "2",
            "start-with-lorem": "1",
        }

    def test_lorem_off_is_explicit(self):
        assert build_query("meat-and-filler", 5, False)["start-with-lorem"] == "0"


class TestParseParagraphs:

    def test_accepts_list_of_strings(self):
        assert parse_paragraphs(["a", "b"]) == ["a", "b"]

    @pytest.mark.parametrize(
        "body",
        [[], {"text": "a"}, "a", None, [1, 2], ["a", None]],
        ids=["empty", "object", "string", "null", "numbers", "mixed"],
    )
    def test_rejects_other_shapes(self, body):
        with pytest.raises(InvalidResponse):
            parse_paragraphs(body)


class TestFetchParagraphs:

    async def test_sends_expected_request(self, test_settings: Settings):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=["Bacon.", "Ham."])

        client = _client(test_settings, handler)
        paragraphs = await client.fetch_paragraphs("all-meat", 2, True)
        await client.close()

        assert paragraphs == ["Bacon.", "Ham."]
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        assert request.url.host == "baconipsum.test"
        assert dict(request.url.params) == {
            "format": "json",
            "type": "all-meat",
            "paras": "2",
            "start-with-lorem": "1",
        }

    async def test_any_2xx_is_success(self, test_settings: Settings):
        client = _client(test_settings, lambda r: httpx.Response(201, json=["x"]))
        assert await client.fetch_paragraphs("all-meat", 1, False) == ["x"]

    @pytest.mark.parametrize(
        "error",
        [httpx.ConnectError, httpx.ReadTimeout],
        ids=["connect", "timeout"],
    )
    async def test_transport_failure_is_unreachable(self, test_settings: Settings, error):
        def handler(request: httpx.Request) -> httpx.Response:
            raise error("failed", request=request)

        client = _client(test_settings, handler)
        with pytest.raises(UpstreamUnreachable):
            await client.fetch_paragraphs("all-meat", 1, True)

    @pytest.mark.parametrize("status", [404, 500, 503])
    async def test_error_status(self, test_settings: Settings, status: int):
        client = _client(test_settings, lambda r: httpx.Response(status, text="nope"))
        with pytest.raises(UpstreamStatusError) as exc_info:
            await client.fetch_paragraphs("all-meat", 1, True)
        assert exc_info.value.upstream_status == status
        assert exc_info.value.status_code == 502

    async def test_non_json_body(self, test_settings: Settings):
        client = _client(test_settings, lambda r: httpx.Response(200, text="<html>"))
        with pytest.raises(InvalidResponse):
            await client.fetch_paragraphs("all-meat", 1, True)

    @pytest.mark.parametrize(
        "body",
        [[], {"error": "x"}, [1, 2]],
        ids=["empty", "object", "numbers"],
    )
    async def test_wrong_shape(self, test_settings: Settings, body):
        client = _client(test_settings, lambda r: httpx.Response(200, json=body))
        with pytest.raises(InvalidResponse):
            await client.fetch_paragraphs("all-meat", 1, True)

    async def test_client_is_reused_until_closed(self, test_settings: Settings):
        client = _client(test_settings, lambda r: httpx.Response(200, json=["x"]))
        first = await client._get_client()
        assert await client._get_client() is first
        await client.close()
        assert client._client is None
        assert first.is_closed

    async def test_close_without_client(self, test_settings: Settings):
        client = BaconIpsumClient(test_settings)
        await client.close()
        assert client.api_url == "https://baconipsum.test/api/"


class TestClientConfiguration:

    async def test_timeout_from_settings(self, test_settings: Settings):
        client = BaconIpsumClient(test_settings)
        http = await client._get_client()
        assert http.timeout == httpx.Timeout(15.0)
        await client.close()

    async def test_custom_timeout(self, test_settings: Settings):
        settings = test_settings.model_copy(update={"upstream_timeout_seconds": 3.5})
        client = BaconIpsumClient(settings)
        assert (await client._get_client()).timeout == httpx.Timeout(3.5)
        await client.close()

    async def test_tls_verified_and_redirects_followed(self, test_settings: Settings):
        with patch("bacon_ipsum.services.bacon_api.httpx.AsyncClient") as client_cls:
            await BaconIpsumClient(test_settings)._get_client()
        kwargs = client_cls.call_args.kwargs
        assert kwargs["verify"] is True
        assert kwargs["follow_redirects"] is True

    async def test_redirect_is_followed(self, test_settings: Settings):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/":
                return httpx.Response(301, headers={"Location": "https://baconipsum.test/api/v2/"})
            return httpx.Response(200, json=["Moved bacon."])

        client = _client(test_settings, handler)
        assert await client.fetch_paragraphs("all-meat", 1, True) == ["Moved bacon."]
        await client.close()
