from sqlalchemy import Column, ForeignKey, String, Text
from catalog.db import Base, new_id


class Product(Base):
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(256), nullable=False)
    title = Column(String(256), nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String(1024), nullable=False)
    thumbnail_image = Column(String(1024), nullable=False)
    # remote asset ids, kept next to the URLs so assets can be removed later
    image_id = Column(String(512), nullable=False)
    thumbnail_id = Column(String(512), nullable=False)
    category_id = Column(
        String(32), ForeignKey("categories.id"), nullable=False, index=True
    )

    def __repr__(self):
        return f"<Product id={self.id} name={self.name}>"
