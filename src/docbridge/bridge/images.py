"""Image scratch storage and lossy re-encoding for image tool results.

Image bodies are written to the process scratch directory (raw bytes plus a
``.base64`` sibling) so they can be inspected after the fact. Subtypes in
the re-encode policy are recompressed with Pillow before being returned,
because MCP clients cap message size and remote image models tend to send
very large JPEGs.

Scratch layout::

    <scratch>/<millis>-<id>.jpeg
    <scratch>/<millis>-<id>.jpeg.base64
    <scratch>/<millis>-<id>.jpeg.reencode.jpeg          (re-encoded only)
    <scratch>/<millis>-<id>.jpeg.reencode.jpeg.base64
"""

from __future__ import annotations

import base64
import io
import re
import time
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from docbridge.core.errors import ResponseParseError
from docbridge.core.logging import get_logger

logger = get_logger(__name__)

_IMAGE_SUBTYPE = re.compile(r"image/(\w+)", re.IGNORECASE)


def image_subtype(content_type: str | None) -> str | None:
    """``image/jpeg; q=1`` → ``jpeg``; None for non-image types."""
    if not content_type:
        return None
    match = _IMAGE_SUBTYPE.search(content_type)
    return match.group(1).lower() if match else None


def reencode_jpeg(data: bytes, quality: int = 80) -> bytes:
    """Decode any Pillow-readable image and re-encode it as JPEG."""
    with Image.open(io.BytesIO(data)) as img:
        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        buf = io.BytesIO()
        img.save(buf, format="JPEG", quality=quality)
    return buf.getvalue()


@dataclass(frozen=True)
class StoredImage:
    """Result of saving one image body.

    ``data`` is the payload to return (re-encoded when the policy applied)
    and ``base64`` its encoding.
    """

    path: Path
    subtype: str
    data: bytes
    base64: str
    reencoded_path: Path | None = None

    @property
    def reencoded(self) -> bool:
        return self.reencoded_path is not None


class ImageStore:
    """Persist image bodies and apply the re-encode policy.

    Args:
        scratch_dir: Directory created at startup, scoped to the process
        quality: JPEG quality of the recompression pass
        reencode_subtypes: Subtypes that are recompressed (default ``jpeg``)
    """

    def __init__(
        self,
        scratch_dir: str | Path,
        *,
        quality: int = 80,
        reencode_subtypes: Iterable[str] = ("jpeg",),
    ):
        self.scratch_dir = Path(scratch_dir)
        self.quality = quality
        self.reencode_subtypes = frozenset(s.lower() for s in reencode_subtypes)

    def _write(self, path: Path, data: bytes) -> str:
        encoded = base64.b64encode(data).decode("ascii")
        path.write_bytes(data)
        path.with_name(path.name + ".base64").write_text(encoded, encoding="ascii")
        return encoded

    def save(self, data: bytes, subtype: str) -> StoredImage:
        """Write ``data`` to the scratch directory, re-encoding if the policy says so.

        Raises:
            ResponseParseError: If a re-encodable image cannot be decoded
        """
        subtype = subtype.lower()
        path = self.scratch_dir / f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.{subtype}"
        encoded = self._write(path, data)

        if subtype not in self.reencode_subtypes:
            logger.info("image_saved", path=str(path), bytes=len(data))
            return StoredImage(path=path, subtype=subtype, data=data, base64=encoded)

        try:
            smaller = reencode_jpeg(data, self.quality)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise ResponseParseError(
                f"Could not re-encode {subtype} image: {e}", cause=e
            ).with_context(path=str(path), content_type=f"image/{subtype}") from e

        reencoded_path = path.with_name(f"{path.name}.reencode.jpeg")
        encoded = self._write(reencoded_path, smaller)
        logger.info(
            "image_saved",
            path=str(path),
            bytes=len(data),
            reencoded_bytes=len(smaller),
            quality=self.quality,
        )
        return StoredImage(
            path=path,
            subtype=subtype,
            data=smaller,
            base64=encoded,
            reencoded_path=reencoded_path,
        )


__all__ = ["ImageStore", "StoredImage", "image_subtype", "reencode_jpeg"]
