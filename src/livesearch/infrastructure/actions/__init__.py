from .url_opener import WebbrowserUrlOpener

__all__ = ["WebbrowserUrlOpener"]
