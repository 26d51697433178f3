import pytest

from core.utils.mime import detect_mime_type, extension_for


class TestDetectMimeType:
    def test_jpeg(self, sample_jpeg_binary) -> None:
        assert detect_mime_type(sample_jpeg_binary) == "image/jpeg"

    def test_png(self, sample_image_binary) -> None:
        assert detect_mime_type(sample_image_binary) == "image/png"

    def test_gif(self) -> None:
        assert detect_mime_type(b"GIF89a\x01\x00") == "image/gif"

    def test_webp(self) -> None:
        assert detect_mime_type(b"RIFF\x00\x00\x00\x00WEBP") == "image/webp"

    def test_unknown_raises(self) -> None:
        with pytest.raises(ValueError):
            detect_mime_type(b"%PDF-1.7")


class TestExtensionFor:
    @pytest.mark.parametrize(
        ("content_type", "expected"),
        [
            ("image/jpeg", "jpg"),
            ("image/png", "png"),
            ("IMAGE/GIF", "gif"),
            ("image/webp; charset=binary", "webp"),
            ("application/pdf", "jpg"),
            (None, "jpg"),
        ],
    )
    def test_mapping(self, content_type: str | None, expected: str) -> None:
        assert extension_for(content_type) == expected
