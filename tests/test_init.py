"""Test pywmo module level stuff."""

import importlib
from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

import pywmo


def test_version_not_installed():
    """Test the version when the distribution is not installed."""
    with patch("importlib.metadata.version", side_effect=PackageNotFoundError):
        importlib.reload(pywmo)
        assert pywmo.__version__ == "dev"


def test_version_dev():
    """Test the suffix when running from a source checkout."""
    with patch("os.path.dirname", return_value="/path/to/source"):
        importlib.reload(pywmo)
        assert pywmo.__version__.endswith("-dev")


def test_version():
    """Test that version works."""
    assert pywmo.__version__ is not None
