"""Unit tests for Datum and StateFiles."""

from pathlib import Path

import pytest

from propdb.core.models import Datum, StateFiles


class TestDatum:
    """Tests for the opaque byte-string type."""

    def test_absent(self) -> None:
        """Test that a default datum is absent and falsy."""
        datum = Datum()

        assert datum.is_absent
        assert not datum
        assert datum.data is None
        assert datum.size == 0

    def test_empty_is_present(self) -> None:
        """Test that an empty byte string is present."""
        datum = Datum(b"")

        assert datum
        assert not datum.is_absent
        assert datum.size == 0

    def test_of_coerces_text(self) -> None:
        """Test UTF-8 coercion and pass-through of existing datums."""
        datum = Datum.of("é")

        assert datum.data == b"\xc3\xa9"
        assert Datum.of(datum) is datum
        assert Datum.of(bytearray(b"x")) == b"x"

    def test_release(self) -> None:
        """Test that a released datum reads as absent."""
        datum = Datum(b"value")
        datum.release()

        assert datum.is_absent

    def test_equality(self) -> None:
        """Test comparing datums with each other and with bytes."""
        assert Datum(b"a") == Datum(b"a")
        assert Datum(b"a") != Datum(b"b")
        assert Datum() == Datum()
        assert Datum(b"a") == b"a"

    def test_unhashable(self) -> None:
        """Test that datums cannot be dict keys, since release changes them."""
        with pytest.raises(TypeError):
            hash(Datum(b"a"))


def test_state_files_single_member() -> None:
    """Test that a one-file set lists only its primary."""
    files = StateFiles(state_dir=Path("/d/.DAV"), base=Path("/d/.DAV/f"), primary=Path("/d/.DAV/f"))

    assert files.paths == [Path("/d/.DAV/f")]
