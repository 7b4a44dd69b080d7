"""Build configured endpoints from AppConfig."""

from __future__ import annotations

from functools import partial

import httpx

from livesearch.domain.entities.search import EndpointNotFoundError
from livesearch.domain.ports.decoder import ResponseDecoderPort
from livesearch.infrastructure.config.schema import AppConfig, EndpointConfig
from livesearch.infrastructure.decoders import PaddedJsonDecoder, RestJsonDecoder

from .httpx_endpoint import HttpxSearchEndpoint, build_search_url


def create_http_client(config: AppConfig) -> httpx.AsyncClient:
    """Shared client for all endpoints (owned by the composition root)."""
    return httpx.AsyncClient(
        timeout=config.http_timeout_seconds,
        follow_redirects=config.http_follow_redirects,
        headers={"User-Agent": config.http_user_agent},
    )


def create_decoder(endpoint: EndpointConfig) -> ResponseDecoderPort:
    if endpoint.kind == "rest_json":
        return RestJsonDecoder()
    if endpoint.kind == "padded_json":
        results_url = partial(build_search_url, endpoint.results_url_template)
        if endpoint.padding_prefix:
            return PaddedJsonDecoder(
                results_url=results_url, prefix=endpoint.padding_prefix
            )
        return PaddedJsonDecoder(results_url=results_url)
    raise ValueError(f"Unknown decoder kind: {endpoint.kind!r}")


def create_endpoint(
    name: str,
    *,
    config: AppConfig,
    http_client: httpx.AsyncClient,
) -> HttpxSearchEndpoint:
    """Create the endpoint configured under *name*.

    Raises:
        EndpointNotFoundError: *name* is not in ``config.endpoints``.
    """
    endpoint = config.endpoints.get(name)
    if endpoint is None:
        raise EndpointNotFoundError(name)

    return HttpxSearchEndpoint(
        name=name,
        search_url=endpoint.search_url,
        decoder=create_decoder(endpoint),
        http_client=http_client,
        params=endpoint.params,
        error_label=endpoint.error_label,
        results_url_template=endpoint.results_url_template,
    )
