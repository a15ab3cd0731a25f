"""Tests for format detection."""

import pytest


class TestIsSupported:
    """Tests for the tag check."""

    def test_iboot_at_tag_offset(self, make_image):
        """iBoot exactly at 0x200 is detected."""
        from ibootldr.loader.detector import is_supported

        assert is_supported(make_image(tag=b"iBoot")) is True

    @pytest.mark.parametrize("tag", [b"SecureROM", b"AVPBooter", b"iBoot", b"iBEC", b"iBSS"])
    def test_every_known_tag(self, make_image, tag):
        """Each known tag is detected."""
        from ibootldr.loader.detector import detect_tag, is_supported

        image = make_image(tag=tag)
        assert is_supported(image)
        assert detect_tag(image).value == tag.decode()

    def test_tag_shifted_by_one(self):
        """A tag at 0x201 is not detected."""
        from ibootldr.loader.detector import is_supported

        data = bytearray(0x400)
        data[0x201:0x206] = b"iBoot"
        assert is_supported(bytes(data)) is False

    def test_tag_one_byte_altered(self, make_image):
        """A single altered byte defeats the check."""
        from ibootldr.loader.detector import is_supported

        assert is_supported(make_image(tag=b"iBoos")) is False
        assert is_supported(make_image(tag=b"IBoot")) is False

    def test_no_tag(self, make_image):
        """Zeroed header is not detected."""
        from ibootldr.loader.detector import is_supported

        assert is_supported(make_image(tag=None)) is False

    @pytest.mark.parametrize("size", [0, 1, 0x100, 0x1FF, 0x200, 0x203])
    def test_short_buffers(self, size):
        """Buffers shorter than every tag window are rejected without fault."""
        from ibootldr.loader.detector import is_supported

        assert is_supported(b"\xff" * size) is False

    def test_short_buffer_with_partial_tag(self):
        """A tag cut off by the end of the buffer is not a match."""
        from ibootldr.loader.detector import is_supported

        data = b"\x00" * 0x200 + b"iBo"
        assert is_supported(data) is False

    def test_short_tag_fits_when_long_tag_does_not(self):
        """iBEC fits in a buffer too short for SecureROM."""
        from ibootldr.loader.detector import is_supported

        data = b"\x00" * 0x200 + b"iBEC"
        assert is_supported(data) is True

    def test_garbage_bytes(self):
        """Arbitrary bytes never raise."""
        from ibootldr.loader.detector import is_supported

        data = bytes(range(256)) * 16
        assert is_supported(data) is False

    def test_accepts_raw_image(self, make_image):
        """RawImage and bytes give the same answer."""
        from ibootldr.core.image import RawImage
        from ibootldr.loader.detector import is_supported

        data = make_image(tag=b"iBSS")
        assert is_supported(RawImage(data)) is is_supported(data) is True


class TestFormatTag:
    """Tests for FormatTag."""

    def test_check_order(self):
        """Tags are checked in a fixed order."""
        from ibootldr.loader.detector import FormatTag

        assert [t.value for t in FormatTag] == [
            "SecureROM", "AVPBooter", "iBoot", "iBEC", "iBSS",
        ]

    def test_magic(self):
        """Test magic bytes."""
        from ibootldr.loader.detector import FormatTag

        assert FormatTag.SECUREROM.magic == b"SecureROM"


class TestFormatDetector:
    """Tests for FormatDetector."""

    def test_detector_check(self, make_image):
        """Test detector instance probing."""
        from ibootldr.loader.detector import FormatDetector, FormatTag

        detector = FormatDetector()
        assert detector.detect(make_image(tag=b"SecureROM")) == FormatTag.SECUREROM
        assert detector.is_supported(make_image(tag=None)) is False

    def test_assume_supported(self):
        """The always-true configuration claims anything."""
        from ibootldr.loader.detector import FormatDetector

        detector = FormatDetector(assume_supported=True)
        assert detector.is_supported(b"") is True
        assert detector.detect(b"") is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
