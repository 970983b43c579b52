"""Domain errors raised by the config loader, record generator and handlers.

``str(exc)`` is the message shown to the operator or written back to the
HTTP client, so constructors take the final message text.
"""
from __future__ import annotations


class DiagError(Exception):
    """Base class for all httpdiag errors."""


class ConfigError(DiagError):
    """Startup configuration could not be loaded."""


class ConfigReadError(ConfigError):
    """Config file is missing or unreadable."""


class ConfigParseError(ConfigError):
    """Config file is not valid JSON or has wrongly typed fields."""


class TLSStartupError(DiagError):
    """TLS listener could not load its certificate or key."""


class RequestError(DiagError):
    """Per-request failure answered with HTTP 500 and a plain-text body."""


class ParameterParseError(RequestError):
    """A numeric query parameter did not parse."""


class UnsupportedFormatError(RequestError):
    """``format`` was neither ``json`` nor ``ndjson``."""


class SizeFormatError(RequestError):
    """``size`` lacked a KB/MB/GB suffix or had a non-integer prefix."""


class SerializationError(RequestError):
    """A record could not be encoded to JSON."""
