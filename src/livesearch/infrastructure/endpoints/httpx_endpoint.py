"""Remote search endpoint backed by a shared httpx.AsyncClient."""

from __future__ import annotations

from urllib.parse import quote

import httpx
import structlog

from livesearch.domain.entities.search import NetworkError, ResultItem
from livesearch.domain.ports.decoder import ResponseDecoderPort

log = structlog.get_logger(__name__)

# Characters JavaScript's encodeURIComponent leaves untouched besides [A-Za-z0-9_.-].
_URI_COMPONENT_SAFE = "!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_search_url(template: str, term: str) -> str:
    """Fill ``{query}`` in *template* with the URL-encoded *term*."""
    return template.replace("{query}", encode_uri_component(term))


class HttpxSearchEndpoint:
    """``GET <search_url>?<params>&q=<query>``, decoded by *decoder*.

    Implements ``SearchEndpointPort``. Transport failures and non-2xx
    statuses become NetworkError; decoding errors pass through untouched.
    """

    def __init__(
        self,
        *,
        name: str,
        search_url: str,
        decoder: ResponseDecoderPort,
        http_client: httpx.AsyncClient,
        params: dict[str, str] | None = None,
        error_label: str = "Search",
        results_url_template: str,
    ) -> None:
        self.name = name
        self._search_url = search_url
        self._decoder = decoder
        self._http = http_client
        self._params = dict(params or {})
        self._error_label = error_label
        self._results_url_template = results_url_template

    def results_url(self, term: str) -> str:
        return build_search_url(self._results_url_template, term)

    async def search(self, query: str) -> list[ResultItem]:
        try:
            resp = await self._http.get(
                self._search_url, params={**self._params, "q": query}
            )
        except httpx.HTTPError as exc:
            log.warning(
                "endpoint_network_error",
                endpoint=self.name,
                query=query,
                error=str(exc) or type(exc).__name__,
            )
            raise NetworkError(
                f"{self._error_label} failed: {str(exc) or type(exc).__name__}"
            ) from exc

        if not resp.is_success:
            log.warning(
                "endpoint_http_error",
                endpoint=self.name,
                query=query,
                status=resp.status_code,
            )
            raise NetworkError(
                f"{self._error_label} failed with status {resp.status_code}",
                status_code=resp.status_code,
            )

        items = self._decoder.decode(resp.text)
        log.debug("endpoint_results", endpoint=self.name, query=query, count=len(items))
        return items
