from __future__ import annotations


class SparkError(Exception):
    """Base class for errors raised by the scheduler core."""


class MissingFieldsError(SparkError, ValueError):
    """Request is missing input the handler cannot do without.

    Raised before any remote call is made.
    """


class RemoteCallError(SparkError, RuntimeError):
    """The language-model call failed (network, auth, quota or bad envelope)."""


class ParseError(SparkError, ValueError):
    """Model output was not valid JSON or did not have the expected shape."""
