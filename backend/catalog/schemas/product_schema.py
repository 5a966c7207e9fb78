# backend/catalog/schemas/product_schema.py
from pydantic import BaseModel
from pydantic import ConfigDict

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    title: str
    description: str
    image: str
    thumbnail_image: str
    category_id: str
