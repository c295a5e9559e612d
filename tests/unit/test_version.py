"""tests/unit/test_version.py"""

import imurl


def test_version():
    """Verify that the version string is present and valid."""
    assert isinstance(imurl.__version__, str)
    assert len(imurl.__version__) > 0
    # Basic semver-ish check
    assert imurl.__version__.count(".") >= 1
