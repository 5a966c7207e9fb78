import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy.orm import Session

from catalog.adapters.media_store import MediaStore, StoredAsset
from catalog.config import settings
from catalog.models.product import Product
from catalog.repositories.category_repo import CategoryRepository
from catalog.repositories.product_repo import ProductRepository
from catalog.services.image_service import derive_images
from catalog.services.validation import (
    ALLOWED_MIME_TYPES,
    ValidationResult,
    validate_product_fields,
    validate_product_id,
)

logger = logging.getLogger(__name__)


class ProductValidationError(Exception):
    """Request data was rejected; carries field -> reasons."""

    def __init__(self, errors: Dict[str, List[str]], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = errors
        self.message = message

    def first_errors(self) -> Dict[str, str]:
        return {name: reasons[0] for name, reasons in self.errors.items() if reasons}


class ProductNotFound(Exception):
    pass


@dataclass
class ImageUpload:
    filename: str
    content_type: Optional[str]
    data: bytes


class ProductService:
    def __init__(
        self,
        db: Session,
        media: MediaStore,
        folder: Optional[str] = None,
        max_image_bytes: Optional[int] = None,
    ):
        self.db = db
        self.media = media
        self.folder = folder or settings.MEDIA_FOLDER
        self.max_image_bytes = max_image_bytes or settings.MAX_IMAGE_BYTES
        self.products = ProductRepository(db)
        self.categories = CategoryRepository(db)

    # -- helpers --------------------------------------------------------

    def _raise_if_invalid(self, result: ValidationResult):
        if not result.ok:
            raise ProductValidationError(result.errors)

    def _check_image(self, image: Optional[ImageUpload]):
        if image is None:
            raise ProductValidationError(
                {"image": ["No image file uploaded"]}, message="No image file uploaded"
            )
        if image.content_type not in ALLOWED_MIME_TYPES:
            raise ProductValidationError(
                {"image": ["Invalid image format"]},
                message="Invalid image format. Only JPEG and PNG are allowed.",
            )
        if len(image.data) > self.max_image_bytes:
            limit_mb = self.max_image_bytes // (1024 * 1024)
            raise ProductValidationError(
                {"image": [f"Image exceeds the {limit_mb}MB size limit"]},
                message="Image too large",
            )

    def _discard(self, asset_ids: Iterable[str]):
        """Best-effort removal of remote assets; failures only leave an orphan behind."""
        for asset_id in asset_ids:
            try:
                self.media.delete(asset_id)
            except Exception:
                logger.warning("Could not remove remote asset %s", asset_id, exc_info=True)

    def _upload_pair(self, full: bytes, thumbnail: bytes) -> Tuple[StoredAsset, StoredAsset]:
        """
        Upload the full image and the thumbnail at the same time.
        Either both end up stored or, if one fails, the other is removed again
        and the first error is raised.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [pool.submit(self.media.upload, data, self.folder) for data in (full, thumbnail)]

        stored = [f.result() for f in futures if f.exception() is None]
        errors = [f.exception() for f in futures if f.exception() is not None]
        if errors:
            self._discard(a.asset_id for a in stored)
            raise errors[0]
        return stored[0], stored[1]

    def _store_image(self, image: ImageUpload) -> Tuple[StoredAsset, StoredAsset]:
        full, thumbnail = derive_images(image.data)
        return self._upload_pair(full, thumbnail)

    def _load(self, product_id: str) -> Product:
        product = self.products.get(product_id)
        if not product:
            raise ProductNotFound("Product not found")
        return product

    # -- operations -----------------------------------------------------

    def list(self, category_id: Optional[str] = None) -> List[Product]:
        return self.products.list(category_id=category_id)

    def get(self, product_id: str) -> Product:
        self._raise_if_invalid(validate_product_id(product_id))
        return self._load(product_id)

    def create(self, fields: Mapping[str, Optional[str]], image: Optional[ImageUpload]) -> Product:
        result = validate_product_fields(fields, self.categories)
        self._raise_if_invalid(result)
        self._check_image(image)

        image_asset, thumb_asset = self._store_image(image)
        product = Product(
            **result.values,
            image=image_asset.url,
            image_id=image_asset.asset_id,
            thumbnail_image=thumb_asset.url,
            thumbnail_id=thumb_asset.asset_id,
        )
        try:
            self.products.add(product)
            self.db.commit()
        except Exception:
            self.db.rollback()
            self._discard([image_asset.asset_id, thumb_asset.asset_id])
            raise
        self.db.refresh(product)
        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    def update(
        self,
        product_id: str,
        fields: Mapping[str, Optional[str]],
        image: Optional[ImageUpload] = None,
    ) -> Product:
        """
        Overwrite the fields that were sent. A new image replaces the stored
        pair; the old remote assets are removed only once the record pointing
        at the new ones has been committed.
        """
        result = validate_product_id(product_id)
        result.merge(validate_product_fields(fields, self.categories, partial=True))
        self._raise_if_invalid(result)

        product = self._load(product_id)
        if image is not None:
            self._check_image(image)

        for name, value in result.values.items():
            if name != "id":
                setattr(product, name, value)

        stale: List[str] = []
        fresh: List[str] = []
        if image is not None:
            image_asset, thumb_asset = self._store_image(image)
            fresh = [image_asset.asset_id, thumb_asset.asset_id]
            stale = [product.image_id, product.thumbnail_id]
            product.image = image_asset.url
            product.image_id = image_asset.asset_id
            product.thumbnail_image = thumb_asset.url
            product.thumbnail_id = thumb_asset.asset_id

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            self._discard(fresh)
            raise
        self.db.refresh(product)
        self._discard(stale)
        logger.info("Updated product %s", product.id)
        return product

    def delete(self, product_id: str):
        """
        Remove both remote images, then commit the record deletion. If the
        first remote delete fails nothing has changed and the product stays.
        Once the full image is gone the record deletion is committed whatever
        happens to the thumbnail, which at worst is left behind as an orphan.
        """
        self._raise_if_invalid(validate_product_id(product_id))
        product = self._load(product_id)
        image_id, thumbnail_id = product.image_id, product.thumbnail_id
        try:
            self.products.delete(product)
            self.media.delete(image_id)
        except Exception:
            self.db.rollback()
            raise
        self._discard([thumbnail_id])
        self.db.commit()
        logger.info("Deleted product %s", product_id)
