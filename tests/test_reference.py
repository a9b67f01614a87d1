"""Is our reference data usable."""

# Local
from pywmo import reference


def test_offsets():
    """Test that the offsets are sane hours."""
    for key, val in reference.offsets.items():
        assert key.isupper()
        assert -12 <= val <= 12


def test_radar_capability():
    """Test the RECCO radar indicator table."""
    assert reference.radar_capability == {"222": -1, "555": 0, "777": 1}


def test_storm_classifications():
    """Test that the longer phrases come first."""
    assert reference.storm_classifications[0] == "POTENTIAL TROPICAL CYCLONE"
