# backend/catalog/schemas/category_schema.py
from pydantic import BaseModel
from pydantic import ConfigDict

class CategoryIn(BaseModel):
    name: str

class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
