import io

import pytest
from PIL import Image

from catalog.services.image_service import ImageTransformError, derive_images


def _open(data):
    return Image.open(io.BytesIO(data))


def test_landscape_is_bounded(make_image):
    full, thumb = derive_images(make_image(size=(2048, 1024)))
    assert _open(full).size == (1024, 512)
    assert _open(thumb).size == (200, 200)


def test_portrait_is_bounded(make_image):
    full, _ = derive_images(make_image(size=(600, 3000)))
    width, height = _open(full).size
    assert height == 1024
    assert width in (204, 205)


def test_small_image_is_not_upscaled(make_image):
    full, thumb = derive_images(make_image(size=(120, 80)))
    assert _open(full).size == (120, 80)
    # the thumbnail is always exactly 200x200, even from a small source
    assert _open(thumb).size == (200, 200)


def test_outputs_are_jpeg(make_image):
    full, thumb = derive_images(make_image(size=(400, 400), fmt="PNG", mode="RGBA"))
    assert _open(full).format == "JPEG"
    assert _open(thumb).format == "JPEG"
    assert _open(full).mode == "RGB"


def test_thumbnail_smaller_than_full(make_image):
    full, thumb = derive_images(make_image(size=(1600, 1200)))
    assert len(thumb) < len(full)


def test_garbage_raises():
    with pytest.raises(ImageTransformError):
        derive_images(b"not an image at all")
