from io import BytesIO
from typing import Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

FULL_SIZE = (1024, 1024)
FULL_QUALITY = 80
THUMBNAIL_SIZE = (200, 200)
THUMBNAIL_QUALITY = 70


class ImageTransformError(Exception):
    pass


def _open(data: bytes) -> Image.Image:
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageTransformError(f"Could not decode image: {e}") from e
    # JPEG has no alpha channel or palette
    if img.mode != "RGB":
        img = img.convert("RGB")
    return img


def _encode_jpeg(img: Image.Image, quality: int) -> bytes:
    buf = BytesIO()
    img.save(buf, format="JPEG", quality=quality)
    return buf.getvalue()


def make_full_size(img: Image.Image) -> bytes:
    """Fit inside 1024x1024 keeping the aspect ratio; never upscales."""
    full = img.copy()
    full.thumbnail(FULL_SIZE, Image.Resampling.LANCZOS)
    return _encode_jpeg(full, FULL_QUALITY)


def make_thumbnail(img: Image.Image) -> bytes:
    """Scale to cover 200x200, then center-crop to exactly that size."""
    thumb = ImageOps.fit(img, THUMBNAIL_SIZE, method=Image.Resampling.LANCZOS)
    return _encode_jpeg(thumb, THUMBNAIL_QUALITY)


def derive_images(data: bytes) -> Tuple[bytes, bytes]:
    """
    Produce the two rasters stored for every product image.
    Returns (full_size_jpeg, thumbnail_jpeg).
    """
    img = _open(data)
    return make_full_size(img), make_thumbnail(img)
