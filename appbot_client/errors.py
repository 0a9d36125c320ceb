"""Exceptions raised by the AppBot client library."""


class ConfigurationError(ValueError):
    """Required configuration is missing or malformed"""


class AppBotError(Exception):
    """An AppBot API call failed.

    The message always names the failed operation
    ("Failed to get app info: ..."); the underlying transport or HTTP error
    is kept as ``__cause__``.
    """
