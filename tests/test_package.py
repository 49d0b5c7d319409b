"""Tests for package structure and imports."""

import pytest


@pytest.mark.unit
def test_package_imports():
    """Package imports without errors."""
    import avatica_client

    assert avatica_client is not None


@pytest.mark.unit
def test_version_accessible():
    """Version is accessible from package."""
    from avatica_client import __version__

    assert __version__ is not None
    assert isinstance(__version__, str)
    assert len(__version__) > 0


@pytest.mark.unit
def test_version_format():
    """Version follows semver format."""
    from avatica_client import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    for part in parts:
        assert part.isdigit()


@pytest.mark.unit
def test_public_api_exports():
    import avatica_client

    for name in avatica_client.__all__:
        assert hasattr(avatica_client, name)
