"""src/imurl/__init__.py

imurl - Immutable, copy-on-write URL value type for Python.

An ImmutableUrl keeps the exact string it was parsed from next to a
yarl URL parsed from it. Every ``with_*`` builder returns a new, re-validated
instance and leaves the original untouched.

Key Features:
    - Parsing and encoding delegated to yarl
    - Verbatim preservation of parsed input
    - Uniformly fallible builders with a typed exception hierarchy
    - Hashable, ordered, picklable values
    - Full type hints (PEP 561)
    - Memory optimized with __slots__

Example:
    Builder usage::

        from imurl import ImmutableUrl

        base = ImmutableUrl.parse('https://example.com')
        users = base.with_path_segments(['api', 'v1', 'users']).with_port(8080)
        print(users)  # https://example.com:8080/api/v1/users

    Error handling::

        from imurl import BuildError, ImmutableUrl

        mail = ImmutableUrl.parse('mailto:user@example.com')
        try:
            mail.with_path_segments(['test'])
        except BuildError as exc:
            print(exc)
"""

from imurl.exceptions import (
    BuildError,
    CannotBeABaseError,
    ImUrlError,
    InvalidCharacterError,
    InvalidHostError,
    InvalidPortError,
    InvalidSchemeError,
    MissingHostError,
    ParseError,
)
from imurl.url import ImmutableUrl
from imurl.version import __version__

__all__ = [
    "ImmutableUrl",
    "ImUrlError",
    "ParseError",
    "BuildError",
    "InvalidSchemeError",
    "InvalidHostError",
    "InvalidPortError",
    "MissingHostError",
    "CannotBeABaseError",
    "InvalidCharacterError",
    "__version__",
]
