from pathlib import Path
from typing import ClassVar

from PIL import Image

from planvision.documents.exceptions import ImageProcessingError
from planvision.documents.models import RasterPage
from planvision.logging.logger import Log
from planvision.rendering.budget import JPEG_MEDIA_TYPE, ImageBudget


class ImageNormalizer:
    """Applies the page byte budget to standalone image uploads."""

    MEDIA_TYPES: ClassVar[dict[str, str]] = {
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".png": "image/png",
        ".gif": "image/gif",
        ".webp": "image/webp",
    }
    FALLBACK_MEDIA_TYPE: ClassVar[str] = JPEG_MEDIA_TYPE

    def __init__(self, budget: ImageBudget) -> None:
        self._budget = budget

    @classmethod
    def media_type_for(cls, filename: str) -> str:
        return cls.MEDIA_TYPES.get(Path(filename).suffix.lower(), cls.FALLBACK_MEDIA_TYPE)

    def normalize(self, path: Path, filename: str) -> RasterPage:
        """Return the image as page 1, downscaled once if over budget.

        Images within budget whose extension is in ``MEDIA_TYPES`` pass through
        untouched. Everything else is re-encoded as JPEG inside the bounding
        box and accepted as is, flagged ``oversized`` if still too large.

        Raises:
            ImageProcessingError: if the image cannot be read or decoded.
        """
        try:
            data = path.read_bytes()
            with Image.open(path) as image:
                image.load()
                passthrough = (
                    len(data) <= self._budget.max_bytes
                    and Path(filename).suffix.lower() in self.MEDIA_TYPES
                )
                if passthrough:
                    return RasterPage(
                        source_filename=filename,
                        page_index=1,
                        image_bytes=data,
                        media_type=self.media_type_for(filename),
                        width=image.width,
                        height=image.height,
                    )
                encoded = self._budget.shrink(image, self._budget.quality)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise ImageProcessingError(f"Cannot process image '{filename}': {exc}") from exc

        Log.info(
            f"Re-encoded {filename}: {len(data) // 1024}KB -> {encoded.byte_size // 1024}KB "
            f"({encoded.width}x{encoded.height})"
        )
        if encoded.oversized:
            Log.warning(f"{filename} still exceeds the page byte budget after resizing")
        return RasterPage(
            source_filename=filename,
            page_index=1,
            image_bytes=encoded.data,
            media_type=encoded.media_type,
            width=encoded.width,
            height=encoded.height,
            oversized=encoded.oversized,
        )
