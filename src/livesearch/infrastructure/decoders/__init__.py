from .padded_json import PaddedJsonDecoder
from .rest_json import RestJsonDecoder, format_stars

__all__ = ["PaddedJsonDecoder", "RestJsonDecoder", "format_stars"]
