from .factory import create_decoder, create_endpoint, create_http_client
from .httpx_endpoint import HttpxSearchEndpoint, build_search_url, encode_uri_component

__all__ = [
    "HttpxSearchEndpoint",
    "build_search_url",
    "create_decoder",
    "create_endpoint",
    "create_http_client",
    "encode_uri_component",
]
