from .decoder import ResponseDecoderPort
from .search_endpoint import SearchEndpointPort
from .url_opener import UrlOpenerPort

__all__ = [
    "ResponseDecoderPort",
    "SearchEndpointPort",
    "UrlOpenerPort",
]
