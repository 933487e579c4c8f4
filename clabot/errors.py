"""Exceptions raised while checking a pull request for CLA compliance."""


class ClaBotError(Exception):
    """Base class for every error the bot raises on purpose."""


class ConfigurationError(ClaBotError):
    """Raised when required configuration is missing or malformed."""


class SourceNotConfigured(ClaBotError):
    """Raised by a signer reader whose location is empty.

    Not a failure: the aggregator treats the source as skipped.
    """


class FetchError(ClaBotError):
    """Raised when a remote document cannot be retrieved."""


class FormatError(ClaBotError):
    """Raised when a retrieved document cannot be parsed."""


class DecodeError(ClaBotError):
    """Raised when an event payload does not match the declared event kind."""
