"""Unit tests for version consistency."""

import importlib.metadata

import pytest

import infocanvas


@pytest.mark.unit
class TestVersionConsistency:
    """Test that version is consistently reported across the package."""

    def test_version_matches_package_metadata(self):
        """Verify infocanvas.__version__ matches installed package metadata."""
        try:
            pkg_version = importlib.metadata.version("infocanvas")
        except importlib.metadata.PackageNotFoundError:
            # Package not installed (development mode without -e install)
            pytest.skip("Package not installed, can't verify metadata version")

        assert infocanvas.__version__ == pkg_version

    def test_version_format(self):
        """Verify version is either major.minor[.patch] or the development marker."""
        version = infocanvas.__version__

        assert isinstance(version, str)
        assert len(version) > 0

        if version.endswith(".dev"):
            assert version == "0.0.0.dev"
        else:
            parts = version.split(".")
            assert len(parts) >= 2, f"Version {version} should have at least major.minor"
