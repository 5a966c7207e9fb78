from typing import List, Optional

from catalog.models.category import Category
from sqlalchemy.orm import Session


class CategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, category_id: str) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def exists(self, category_id: str) -> bool:
        return self.get(category_id) is not None

    def get_by_name(self, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.name == name).first()

    def list(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def create(self, name: str) -> Category:
        c = Category(name=name)
        self.db.add(c)
        self.db.flush()
        return c
