"""Byte-budget enforcement for page and image artifacts.

Every image leaving the pipeline goes through ``ImageBudget``:

1. Encode at the configured JPEG quality.
2. If the result is above ``max_bytes``, shrink once into a
   ``max_dimension`` square box and re-encode at the retry quality.
3. Accept whatever the single retry produced. Results still above the
   budget are flagged ``oversized`` instead of being dropped.
"""

import io
from dataclasses import dataclass

from PIL import Image

JPEG_MEDIA_TYPE = "image/jpeg"


@dataclass(frozen=True)
class EncodedImage:
    data: bytes
    media_type: str
    width: int
    height: int
    resized: bool = False
    oversized: bool = False

    @property
    def byte_size(self) -> int:
        return len(self.data)


class ImageBudget:
    """Encodes images so they fit a per-artifact byte ceiling."""

    def __init__(
        self,
        max_bytes: int,
        max_dimension: int = 2000,
        quality: int = 85,
        retry_quality: int = 80,
    ) -> None:
        self.max_bytes = max_bytes
        self.max_dimension = max_dimension
        self.quality = quality
        self.retry_quality = retry_quality

    def fit(self, image: Image.Image) -> EncodedImage:
        """Encode a freshly rendered page, retrying once smaller if needed."""
        first = self.encode(image, self.quality)
        if first.byte_size <= self.max_bytes:
            return first
        return self.shrink(image, self.retry_quality)

    def shrink(self, image: Image.Image, quality: int) -> EncodedImage:
        """Downscale into the bounding box and encode; never enlarges."""
        resized = image.copy()
        resized.thumbnail((self.max_dimension, self.max_dimension), Image.Resampling.LANCZOS)
        encoded = self.encode(resized, quality)
        return EncodedImage(
            data=encoded.data,
            media_type=encoded.media_type,
            width=encoded.width,
            height=encoded.height,
            resized=True,
            oversized=encoded.byte_size > self.max_bytes,
        )

    def encode(self, image: Image.Image, quality: int) -> EncodedImage:
        rgb = _to_rgb(image)
        buffer = io.BytesIO()
        rgb.save(buffer, format="JPEG", quality=quality, optimize=True)
        data = buffer.getvalue()
        return EncodedImage(
            data=data,
            media_type=JPEG_MEDIA_TYPE,
            width=rgb.width,
            height=rgb.height,
            oversized=len(data) > self.max_bytes,
        )


def _to_rgb(image: Image.Image) -> Image.Image:
    """JPEG has no alpha; flatten transparency onto white."""
    if image.mode == "RGB":
        return image
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return image.convert("RGB")
