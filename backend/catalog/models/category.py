from sqlalchemy import Column, String
from catalog.db import Base, new_id


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(128), unique=True, nullable=False)

    def __repr__(self):
        return f"<Category id={self.id} name={self.name}>"
