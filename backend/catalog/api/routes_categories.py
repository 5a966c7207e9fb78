from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from catalog.db import get_db
from catalog.schemas.category_schema import CategoryIn, CategoryOut
from catalog.services.category_service import CategoryException, CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", summary="List categories")
def list_categories(db: Session = Depends(get_db)):
    svc = CategoryService(db)
    return [CategoryOut.model_validate(c).model_dump() for c in svc.list()]


@router.post("", status_code=201, summary="Create category")
def create_category(payload: CategoryIn, db: Session = Depends(get_db)):
    svc = CategoryService(db)
    try:
        c = svc.create(payload.name)
    except CategoryException as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "success": True,
        "message": "Category added successfully",
        "category": CategoryOut.model_validate(c).model_dump(),
    }
