"""Tests for HttpxSearchEndpoint (httpx + respx)."""

from __future__ import annotations

import httpx
import pytest
import respx

from livesearch.domain.entities import DecodeError, NetworkError
from livesearch.infrastructure.decoders import PaddedJsonDecoder, RestJsonDecoder
from livesearch.infrastructure.endpoints import (
    HttpxSearchEndpoint,
    build_search_url,
    encode_uri_component,
)

_GITHUB = "https://api.github.com/search/repositories"
_SUGGEST = "https://suggestqueries.google.com/complete/search"
_YT_RESULTS = "https://www.youtube.com/results?search_query={query}"


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


@pytest.fixture()
def github(http_client: httpx.AsyncClient) -> HttpxSearchEndpoint:
    return HttpxSearchEndpoint(
        name="github",
        search_url=_GITHUB,
        decoder=RestJsonDecoder(),
        http_client=http_client,
        params={"per_page": "10"},
        error_label="GitHub search",
        results_url_template="https://github.com/search?type=repositories&q={query}",
    )


@pytest.fixture()
def youtube(http_client: httpx.AsyncClient) -> HttpxSearchEndpoint:
    return HttpxSearchEndpoint(
        name="youtube",
        search_url=_SUGGEST,
        decoder=PaddedJsonDecoder(
            results_url=lambda term: build_search_url(_YT_RESULTS, term)
        ),
        http_client=http_client,
        params={"client": "youtube", "ds": "yt"},
        error_label="Suggestion request",
        results_url_template=_YT_RESULTS,
    )


class TestUrlEncoding:
    def test_encode_uri_component(self) -> None:
        assert encode_uri_component("a b&c/d?e=f") == "a%20b%26c%2Fd%3Fe%3Df"

    def test_unreserved_marks_kept(self) -> None:
        assert encode_uri_component("it's-(ok)!~*_.") == "it's-(ok)!~*_."

    def test_non_ascii(self) -> None:
        assert encode_uri_component("café") == "caf%C3%A9"

    def test_build_search_url(self) -> None:
        assert (
            build_search_url(_YT_RESULTS, "lofi beats")
            == "https://www.youtube.com/results?search_query=lofi%20beats"
        )

    def test_results_url(self, youtube: HttpxSearchEndpoint) -> None:
        assert youtube.results_url("a+b") == (
            "https://www.youtube.com/results?search_query=a%2Bb"
        )


class TestRequest:
    @respx.mock
    async def test_fixed_params_precede_query(
        self, github: HttpxSearchEndpoint
    ) -> None:
        route = respx.get(_GITHUB).respond(200, json={"items": []})

        await github.search("fast api")

        request = route.calls.last.request
        assert request.url.params["per_page"] == "10"
        assert request.url.params["q"] == "fast api"
        query = request.url.query.decode()
        assert query.index("per_page=10") < query.index("q=")

    @respx.mock
    async def test_suggestion_params(self, youtube: HttpxSearchEndpoint) -> None:
        route = respx.get(_SUGGEST).respond(200, text='window.google.ac.h(["q",[]])')

        await youtube.search("lofi")

        params = route.calls.last.request.url.params
        assert params["client"] == "youtube"
        assert params["ds"] == "yt"
        assert params["q"] == "lofi"


class TestSuccess:
    @respx.mock
    async def test_rest_payload_decoded(self, github: HttpxSearchEndpoint) -> None:
        respx.get(_GITHUB).respond(
            200,
            json={
                "items": [
                    {
                        "id": 1,
                        "full_name": "a/b",
                        "stargazers_count": 1234,
                        "language": "Go",
                        "html_url": "https://github.com/a/b",
                        "description": None,
                    }
                ]
            },
        )

        items = await github.search("a")

        assert len(items) == 1
        assert items[0].accessories == ("Go", "★ 1,234")

    @respx.mock
    async def test_padded_payload_decoded(self, youtube: HttpxSearchEndpoint) -> None:
        respx.get(_SUGGEST).respond(
            200, text='window.google.ac.h(["q",[["x",1],"y"]]);'
        )

        items = await youtube.search("q")

        assert [i.title for i in items] == ["x", "y"]
        assert items[0].url == "https://www.youtube.com/results?search_query=x"


class TestFailure:
    @respx.mock
    async def test_non_2xx_raises_network_error_with_status(
        self, github: HttpxSearchEndpoint
    ) -> None:
        respx.get(_GITHUB).respond(503)

        with pytest.raises(NetworkError) as excinfo:
            await github.search("a")

        assert excinfo.value.status_code == 503
        assert str(excinfo.value) == "GitHub search failed with status 503"

    @respx.mock
    async def test_suggestion_status_label(self, youtube: HttpxSearchEndpoint) -> None:
        respx.get(_SUGGEST).respond(429)

        with pytest.raises(NetworkError, match="Suggestion request failed with status 429"):
            await youtube.search("a")

    @respx.mock
    async def test_transport_error_raises_network_error(
        self, github: HttpxSearchEndpoint
    ) -> None:
        respx.get(_GITHUB).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(NetworkError) as excinfo:
            await github.search("a")

        assert excinfo.value.status_code is None
        assert str(excinfo.value).startswith("GitHub search failed:")
        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)

    @respx.mock
    async def test_timeout_raises_network_error(
        self, github: HttpxSearchEndpoint
    ) -> None:
        respx.get(_GITHUB).mock(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(NetworkError):
            await github.search("a")

    @respx.mock
    async def test_decode_error_passes_through(
        self, youtube: HttpxSearchEndpoint
    ) -> None:
        respx.get(_SUGGEST).respond(200, text="not-wrapped")

        with pytest.raises(DecodeError, match="Unexpected suggestion response format"):
            await youtube.search("a")
