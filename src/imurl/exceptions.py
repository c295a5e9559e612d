"""src/imurl/exceptions.py

imurl Exceptions hierarchy.
"""


class ImUrlError(Exception):
    """Base exception for all imurl errors."""


class ParseError(ImUrlError):
    """The input string is not a syntactically valid URL."""


class BuildError(ImUrlError):
    """
    Base exception for rejected builder calls.
    Raised when a structural change is disallowed by URL semantics even
    though the new value may be well-formed on its own.
    """

    def __init__(self, message: str = "Invalid URL modification"):
        super().__init__(message)


class InvalidSchemeError(BuildError):
    """Scheme is malformed or cannot replace the current one."""


class InvalidHostError(BuildError):
    """Host fails host syntax rules or cannot be set on this URL."""


class InvalidPortError(BuildError):
    """Port is not an integer in the 16-bit range."""


class MissingHostError(BuildError):
    """
    The URL has no host to attach credentials or a port to.
    """


class CannotBeABaseError(BuildError):
    """Non-hierarchical URL has no segmentable path."""


class InvalidCharacterError(BuildError):
    """Value holds characters that cannot be UTF-8 encoded."""
