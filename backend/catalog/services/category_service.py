from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.models.category import Category
from catalog.repositories.category_repo import CategoryRepository


class CategoryException(Exception):
    pass


class CategoryService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoryRepository(db)

    def list(self) -> List[Category]:
        return self.repo.list()

    def create(self, name: str) -> Category:
        name = (name or "").strip()
        if not name:
            raise CategoryException("Category name is required")
        if self.repo.get_by_name(name):
            raise CategoryException("Category already exists")
        try:
            c = self.repo.create(name)
            self.db.commit()
        except IntegrityError:
            # lost a race with a concurrent insert of the same name
            self.db.rollback()
            raise CategoryException("Category already exists")
        self.db.refresh(c)
        return c
