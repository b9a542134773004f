"""Tests for ImageStore and JPEG re-encoding."""

import base64
import io

import pytest
from PIL import Image

from docbridge.bridge.images import ImageStore, image_subtype, reencode_jpeg
from docbridge.core.errors import ResponseParseError


@pytest.mark.parametrize(
    "content_type, expected",
    [
        ("image/jpeg", "jpeg"),
        ("image/PNG; charset=binary", "png"),
        ("text/plain", None),
        (None, None),
    ],
)
def test_image_subtype(content_type, expected):
    assert image_subtype(content_type) == expected


class TestReencode:
    def test_rgba_becomes_rgb_jpeg(self, png_bytes):
        with Image.open(io.BytesIO(reencode_jpeg(png_bytes))) as img:
            assert img.format == "JPEG"
            assert img.mode == "RGB"
            assert img.size == (48, 32)

    def test_lower_quality_is_smaller(self):
        buf = io.BytesIO()
        Image.linear_gradient("L").save(buf, format="JPEG", quality=100)
        data = buf.getvalue()
        assert len(reencode_jpeg(data, quality=20)) < len(data)


class TestImageStore:
    def test_jpeg_is_reencoded(self, tmp_path, jpeg_bytes):
        stored = ImageStore(tmp_path).save(jpeg_bytes, "JPEG")

        assert stored.reencoded
        assert stored.subtype == "jpeg"
        assert stored.path.read_bytes() == jpeg_bytes
        assert stored.reencoded_path.name == stored.path.name + ".reencode.jpeg"
        assert stored.reencoded_path.read_bytes() == stored.data
        assert base64.b64decode(stored.base64) == stored.data
        assert sorted(p.name for p in tmp_path.iterdir()) == sorted(
            [
                stored.path.name,
                stored.path.name + ".base64",
                stored.reencoded_path.name,
                stored.reencoded_path.name + ".base64",
            ]
        )

    def test_png_is_kept(self, tmp_path, png_bytes):
        stored = ImageStore(tmp_path).save(png_bytes, "png")

        assert not stored.reencoded
        assert stored.data == png_bytes
        assert stored.path.suffix == ".png"
        assert (tmp_path / (stored.path.name + ".base64")).read_text() == stored.base64

    def test_policy_is_configurable(self, tmp_path, png_bytes):
        stored = ImageStore(tmp_path, reencode_subtypes=["PNG"]).save(png_bytes, "png")
        assert stored.reencoded
        assert stored.data[:2] == b"\xff\xd8"

    def test_undecodable_image(self, tmp_path):
        with pytest.raises(ResponseParseError):
            ImageStore(tmp_path).save(b"not an image", "jpeg")

    def test_unique_names(self, tmp_path, png_bytes):
        store = ImageStore(tmp_path)
        assert store.save(png_bytes, "png").path != store.save(png_bytes, "png").path
