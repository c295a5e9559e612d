"""src/imurl/url.py

Immutable URL value type for imurl.

Parsing, percent-encoding and serialization are done by yarl. Every
``with_*`` builder applies one change to the parsed URL, serializes the
result and parses that string again, so the returned instance is validated
exactly like user input.
"""

import functools
import re
from typing import Any, Iterable, NoReturn, Optional, Tuple
from urllib.parse import quote

from yarl import URL

from imurl.exceptions import (
    CannotBeABaseError,
    InvalidCharacterError,
    InvalidHostError,
    InvalidPortError,
    InvalidSchemeError,
    MissingHostError,
    ParseError,
)

__all__ = ["ImmutableUrl", "SPECIAL_SCHEMES"]

# Schemes that never switch to or from a scheme outside this set.
SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp", "file"})

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+\-.]*")
_FORBIDDEN_RE = re.compile(r"[\x00-\x20\x7f]")
_SEGMENT_SAFE = "!$&'()*+,;=:@"


def _require_encodable(*values: Any) -> None:
    """Reject strings that cannot be UTF-8 encoded (lone surrogates)."""
    for value in values:
        if not isinstance(value, str):
            continue
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidCharacterError(f"Cannot percent-encode {value!r}") from exc


def _parse(text: Any) -> URL:
    """Parse an absolute URL with yarl, raising ParseError on failure."""
    if not isinstance(text, str):
        raise ParseError(f"URL must be a string, not {type(text).__name__}")
    if _FORBIDDEN_RE.search(text):
        raise ParseError(f"URL contains whitespace or control characters: {text!r}")

    try:
        text.encode("utf-8")
        url = URL(text)
    except ValueError as exc:
        raise ParseError(f"Invalid URL {text!r}: {exc}") from exc

    if not url.scheme:
        raise ParseError(f"Missing scheme in {text!r}")
    if url.scheme in SPECIAL_SCHEMES and url.scheme != "file" and not url.raw_host:
        raise ParseError(f"Missing host for {url.scheme!r} URL {text!r}")
    return url


def _keep_authority_out(url: URL) -> URL:
    """Prefix ``/.`` so a leading ``//`` is not read back as an authority."""
    if not url.absolute and url.raw_path.startswith("//"):
        return url.with_path(
            "/." + url.raw_path, encoded=True, keep_query=True, keep_fragment=True
        )
    return url


@functools.total_ordering
class ImmutableUrl:
    """
    Immutable, validated URL.

    Equality, ordering, hashing and ``str()`` all use the serialized form.
    For instances built with :meth:`parse` that is the caller's input,
    verbatim. For instances returned by a builder it is yarl's
    serialization of the modified URL.

    Attributes:
        scheme: Lowercase scheme.
        host: Decoded host, or None for URLs without an authority.
        port: Explicit port, or None.
        path: Encoded path; ``/`` for URLs with an authority and no path.
        query: Encoded query without ``?``, or None.
        fragment: Encoded fragment without ``#``, or None.
    """

    __slots__ = ("_serialized", "_url")

    _serialized: str
    _url: URL

    def __init__(self, url: str) -> None:
        """
        Parse url and keep it verbatim as the serialized form.

        Raises:
            ParseError: If url is not a valid absolute URL.
        """
        parsed = _parse(url)
        object.__setattr__(self, "_serialized", url)
        object.__setattr__(self, "_url", parsed)

    @classmethod
    def parse(cls, url: str) -> "ImmutableUrl":
        """Parse url into a new instance. Raises ParseError on failure."""
        return cls(url)

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> Tuple[type, Tuple[str]]:
        return (type(self), (self._serialized,))

    def as_string(self) -> str:
        """Return the serialized form."""
        return self._serialized

    @property
    def scheme(self) -> str:
        return self._url.scheme

    @property
    def username(self) -> Optional[str]:
        """Percent-encoded username, or None."""
        return self._url.raw_user if self._url.absolute else None

    @property
    def password(self) -> Optional[str]:
        return self._url.raw_password if self._url.absolute else None

    @property
    def host(self) -> Optional[str]:
        return self._url.host if self._url.absolute else None

    @property
    def port(self) -> Optional[int]:
        return self._url.explicit_port if self._url.absolute else None

    @property
    def path(self) -> str:
        return self._url.raw_path

    @property
    def path_segments(self) -> Optional[Tuple[str, ...]]:
        """Raw path segments, or None for non-hierarchical URLs."""
        if self.cannot_be_a_base:
            return None
        return tuple(self._url.raw_path[1:].split("/"))

    @property
    def query(self) -> Optional[str]:
        return self._url.raw_query_string or None

    @property
    def fragment(self) -> Optional[str]:
        return self._url.raw_fragment or None

    @property
    def cannot_be_a_base(self) -> bool:
        """True for non-hierarchical URLs such as ``mailto:`` addresses."""
        return not self._url.absolute and not self._url.raw_path.startswith("/")

    def _can_carry_credentials(self) -> bool:
        return bool(self._url.raw_host) and self._url.scheme != "file"

    def _reparse(self, url: URL) -> "ImmutableUrl":
        return type(self).parse(str(url))

    def with_path(self, path: str) -> "ImmutableUrl":
        """Return a copy with the path replaced."""
        _require_encodable(path)
        url = self._url
        if self.cannot_be_a_base:
            # yarl's with_path roots every path; opaque paths stay as given.
            url = URL.build(
                scheme=url.scheme,
                path=path,
                query_string=url.raw_query_string,
                fragment=url.raw_fragment,
            )
        else:
            url = url.with_path(path, keep_query=True, keep_fragment=True)
        return self._reparse(_keep_authority_out(url))

    def with_query(self, query: Optional[str]) -> "ImmutableUrl":
        """Return a copy with the query replaced; None removes it."""
        _require_encodable(query)
        return self._reparse(self._url.with_query(query))

    def with_fragment(self, fragment: Optional[str]) -> "ImmutableUrl":
        """Return a copy with the fragment replaced; None removes it."""
        _require_encodable(fragment)
        return self._reparse(self._url.with_fragment(fragment))

    def with_scheme(self, scheme: str) -> "ImmutableUrl":
        """
        Return a copy with the scheme replaced.

        Raises:
            InvalidSchemeError: If the scheme is malformed, or switching to
                it would change the shape of the URL.
        """
        if not isinstance(scheme, str) or not _SCHEME_RE.fullmatch(scheme):
            raise InvalidSchemeError(f"Invalid scheme: {scheme!r}")

        url = self._url
        current, scheme = url.scheme, scheme.lower()
        if (scheme in SPECIAL_SCHEMES) != (current in SPECIAL_SCHEMES):
            raise InvalidSchemeError(
                f"Cannot switch scheme from {current!r} to {scheme!r}"
            )
        if scheme == "file" and (
            url.raw_user or url.raw_password or url.explicit_port is not None
        ):
            raise InvalidSchemeError(
                "Cannot switch to 'file' while credentials or a port are set"
            )
        if current == "file" and scheme != "file" and not url.raw_host:
            raise InvalidSchemeError(
                f"Cannot switch from 'file' to {scheme!r} without a host"
            )

        try:
            changed = url.with_scheme(scheme)
        except ValueError as exc:
            raise InvalidSchemeError(str(exc)) from exc
        return self._reparse(changed)

    def with_username(self, username: str) -> "ImmutableUrl":
        """
        Return a copy with the username set.

        Raises:
            MissingHostError: If the URL has no host to attach it to.
        """
        _require_encodable(username)
        if not self._can_carry_credentials():
            raise MissingHostError(f"Cannot set username on {self._serialized!r}")
        return self._reparse(self._url.with_user(username))

    def with_password(self, password: Optional[str]) -> "ImmutableUrl":
        """
        Return a copy with the password set; None or ``""`` removes it.

        Raises:
            MissingHostError: If the URL has no host to attach it to.
        """
        _require_encodable(password)
        if not self._can_carry_credentials():
            raise MissingHostError(f"Cannot set password on {self._serialized!r}")
        return self._reparse(self._url.with_password(password or None))

    def with_host(self, host: str) -> "ImmutableUrl":
        """
        Return a copy with the host replaced.

        IPv6 addresses are given without brackets. Non-ASCII names are
        IDNA-encoded.

        Raises:
            InvalidHostError: If host is empty or malformed, or the URL has
                no authority to hold it.
            InvalidCharacterError: If host cannot be UTF-8 encoded.
        """
        _require_encodable(host)
        if self.cannot_be_a_base:
            raise InvalidHostError(
                f"Cannot set host on non-hierarchical URL {self._serialized!r}"
            )
        try:
            changed = self._url.with_host(host)
        except (TypeError, ValueError) as exc:
            raise InvalidHostError(f"Invalid host {host!r}: {exc}") from exc
        return self._reparse(changed)

    def with_port(self, port: Optional[int]) -> "ImmutableUrl":
        """
        Return a copy with the port replaced; None removes it.

        A port equal to the scheme's default is not rendered.

        Raises:
            MissingHostError: If the URL cannot carry a port.
            InvalidPortError: If port is not an int in 0-65535.
        """
        if not self._can_carry_credentials():
            raise MissingHostError(f"Cannot set port on {self._serialized!r}")
        try:
            changed = self._url.with_port(port)
        except (TypeError, ValueError) as exc:
            raise InvalidPortError(str(exc)) from exc
        return self._reparse(changed)

    def with_path_segments(self, segments: Iterable[str]) -> "ImmutableUrl":
        """
        Return a copy whose path is made of the given segments.

        Each segment is encoded literally, ``/`` and ``%`` included.
        ``.`` and ``..`` segments are skipped.

        Raises:
            CannotBeABaseError: If the URL is non-hierarchical.
        """
        if self.cannot_be_a_base:
            raise CannotBeABaseError(
                f"Non-hierarchical URL has no path segments: {self._serialized!r}"
            )
        if isinstance(segments, str):
            raise TypeError("segments must be an iterable of strings, not a string")

        kept = [segment for segment in segments if segment not in (".", "..")]
        _require_encodable(*kept)
        path = "/" + "/".join(quote(segment, safe=_SEGMENT_SAFE) for segment in kept)
        changed = self._url.with_path(
            path, encoded=True, keep_query=True, keep_fragment=True
        )
        return self._reparse(_keep_authority_out(changed))

    def __str__(self) -> str:
        return self._serialized

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._serialized!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImmutableUrl):
            return NotImplemented
        return self._serialized == other._serialized

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ImmutableUrl):
            return NotImplemented
        return self._serialized < other._serialized

    def __hash__(self) -> int:
        return hash(self._serialized)
