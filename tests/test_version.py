"""Tests for version extraction and parsing."""

import pytest


class TestReadVersionString:
    """Tests for the version window."""

    def test_reads_full_window(self, make_image):
        """The whole 0x7a-byte window is decoded, padding included."""
        from ibootldr.loader.version import read_version_string

        text = read_version_string(make_image(version=b"7429.0.0.0.1"))
        assert len(text) == 0x7A
        assert text.startswith("7429.0.0.0.1")
        assert text.endswith("\x00")

    def test_invalid_utf8(self, make_image):
        """Invalid bytes fail instead of being replaced."""
        from ibootldr.core.errors import InvalidVersionEncodingError
        from ibootldr.loader.version import read_version_string

        image = make_image(version=b"6603.\xff\xfe.0")
        with pytest.raises(InvalidVersionEncodingError):
            read_version_string(image)

    def test_truncated_window(self, make_image):
        """An image ending inside the window is truncated."""
        from ibootldr.core.errors import TruncatedImageError
        from ibootldr.loader.version import read_version_string

        image = make_image(size=0x290)
        with pytest.raises(TruncatedImageError):
            read_version_string(image)


class TestParseVersionMajor:
    """Tests for major number parsing."""

    @pytest.mark.parametrize("text,major", [
        ("7429.0.0.0.1", 7429),
        ("6603.0.0.1.0", 6603),
        ("6602.0.0", 6602),
        ("0.1", 0),
        ("5540", 5540),
        ("4513.0.0.0.5\x00\x00\x00", 4513),
        ("2817.1.94.2.1.iBoot-trailing metadata", 2817),
    ])
    def test_valid(self, text, major):
        """Leading component parses regardless of the remainder."""
        from ibootldr.loader.version import parse_version_major

        assert parse_version_major(text) == major

    @pytest.mark.parametrize("text", [
        "x.0.0",
        "",
        ".1.2",
        "-1.0",
        "+6603.0",
        " 6603.0",
        "66O3.0",
        "\x00" * 0x7A,
        "99999999999999999999999.0",
    ])
    def test_invalid(self, text):
        """Non-numeric, empty, signed and overflowing components fail."""
        from ibootldr.core.errors import InvalidVersionFormatError
        from ibootldr.loader.version import parse_version_major

        with pytest.raises(InvalidVersionFormatError):
            parse_version_major(text)


class TestReadVersion:
    """Tests for IBootVersion."""

    def test_display_strips_padding(self, make_image):
        """Display text stops at the first NUL."""
        from ibootldr.loader.version import read_version

        version = read_version(make_image(version=b"7429.0.0.0.1"))
        assert version.major == 7429
        assert version.display == "7429.0.0.0.1"
        assert str(version) == "7429.0.0.0.1"

    def test_missing_version(self, make_image):
        """A zeroed window has no major number."""
        from ibootldr.core.errors import InvalidVersionFormatError
        from ibootldr.loader.version import read_version

        with pytest.raises(InvalidVersionFormatError):
            read_version(make_image(version=None))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
