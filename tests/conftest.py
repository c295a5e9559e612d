import pytest

from imurl import ImmutableUrl


@pytest.fixture
def https_url():
    """Fixture providing a bare https URL."""
    return ImmutableUrl.parse("https://example.com")


@pytest.fixture
def mailto_url():
    """Fixture providing a non-hierarchical URL."""
    return ImmutableUrl.parse("mailto:user@example.com")


@pytest.fixture
def snapshot():
    """Fixture capturing every observable accessor of a URL."""

    def _snapshot(url):
        return (
            url.as_string(),
            url.scheme,
            url.username,
            url.password,
            url.host,
            url.port,
            url.path,
            url.path_segments,
            url.query,
            url.fragment,
        )

    return _snapshot
