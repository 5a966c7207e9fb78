import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from catalog.adapters.media_store import MediaStore
from catalog.api.deps import get_media_store
from catalog.config import settings
from catalog.db import get_db
from catalog.schemas.product_schema import ProductOut
from catalog.services.product_service import (
    ImageUpload,
    ProductNotFound,
    ProductService,
    ProductValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalogue"])


def _to_dict(p):
    return ProductOut.model_validate(p).model_dump()


def _read_upload(image: Optional[UploadFile]) -> Optional[ImageUpload]:
    if image is None or not image.filename:
        return None
    # one byte past the limit is enough to know the file is too big
    data = image.file.read(settings.MAX_IMAGE_BYTES + 1)
    return ImageUpload(filename=image.filename, content_type=image.content_type, data=data)


def _validation_failed(e: ProductValidationError):
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": e.message, "errors": e.first_errors()},
    )


def _not_found(e: ProductNotFound):
    return JSONResponse(status_code=404, content={"success": False, "message": str(e)})


def _server_error(message: str):
    return JSONResponse(status_code=500, content={"success": False, "message": message})


@router.get("/products", summary="List products")
def list_products(
    category_id: Optional[str] = Query(None, description="only products of this category"),
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    svc = ProductService(db, media)
    return [_to_dict(p) for p in svc.list(category_id=category_id)]


@router.post("/product/add", status_code=201, summary="Create product")
def add_product(
    name: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    fields = {"name": name, "title": title, "description": description, "category_id": category_id}
    svc = ProductService(db, media)
    try:
        product = svc.create(fields, _read_upload(image))
    except ProductValidationError as e:
        return _validation_failed(e)
    except Exception:
        logger.exception("Error processing upload")
        return _server_error("Error processing upload")
    return {"success": True, "message": "Product added successfully", "product": _to_dict(product)}


@router.get("/product/{product_id}", summary="Get product by id")
def get_product(
    product_id: str,
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    svc = ProductService(db, media)
    try:
        product = svc.get(product_id)
    except ProductValidationError as e:
        return _validation_failed(e)
    except ProductNotFound as e:
        return _not_found(e)
    except Exception:
        logger.exception("Error fetching product %s", product_id)
        return _server_error("Error fetching product")
    return {"success": True, "message": "Product fetched successfully", "product": _to_dict(product)}


@router.put("/product/{product_id}", summary="Update product")
def update_product(
    product_id: str,
    name: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    # FastAPI hands an empty form value (e.g. category_id="") over as None, so
    # it counts as "not sent" and leaves the stored field alone. Whitespace-only
    # values do arrive and are rejected as "... cannot be empty".
    fields = {"name": name, "title": title, "description": description, "category_id": category_id}
    svc = ProductService(db, media)
    try:
        product = svc.update(product_id, fields, _read_upload(image))
    except ProductValidationError as e:
        return _validation_failed(e)
    except ProductNotFound as e:
        return _not_found(e)
    except Exception:
        logger.exception("Error updating product %s", product_id)
        return _server_error("Error updating product")
    return {"success": True, "message": "Product updated successfully", "product": _to_dict(product)}


@router.delete("/product/{product_id}", summary="Delete product")
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    svc = ProductService(db, media)
    try:
        svc.delete(product_id)
    except ProductValidationError as e:
        return _validation_failed(e)
    except ProductNotFound as e:
        return _not_found(e)
    except Exception:
        logger.exception("Error deleting product %s", product_id)
        return _server_error("Error deleting product")
    return {"success": True, "message": "Product deleted successfully"}
