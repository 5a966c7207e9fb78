from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from catalog.db import is_valid_id
from catalog.repositories.category_repo import CategoryRepository

TEXT_FIELDS = ("name", "title", "description")

LABELS = {
    "name": "Product name",
    "title": "Product title",
    "description": "Product description",
    "category_id": "Category ID",
}

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png")


@dataclass
class ValidationResult:
    """
    Outcome of checking submitted product fields.

    `values` holds the cleaned fields that passed; `errors` maps a field name
    to every reason it was rejected, in the order they were found.
    """

    values: Dict[str, str] = field(default_factory=dict)
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, name: str, message: str):
        self.errors.setdefault(name, []).append(message)

    def merge(self, other: "ValidationResult"):
        self.values.update(other.values)
        for name, messages in other.errors.items():
            for message in messages:
                self.add_error(name, message)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip()


def validate_product_fields(
    submitted: Mapping[str, Optional[str]],
    categories: CategoryRepository,
    partial: bool = False,
) -> ValidationResult:
    """
    Check the text fields of a create (partial=False) or update (partial=True)
    request. On update a field that was not sent is skipped, but one that was
    sent blank is still an error.
    """
    result = ValidationResult()

    for name in TEXT_FIELDS + ("category_id",):
        raw = submitted.get(name)
        if raw is None and partial:
            continue
        value = _clean(raw)
        if not value:
            verb = "cannot be empty" if partial else "is required"
            result.add_error(name, f"{LABELS[name]} {verb}")
            continue
        result.values[name] = value

    category_id = result.values.get("category_id")
    if category_id is not None:
        if not is_valid_id(category_id):
            result.add_error("category_id", "Invalid category ID")
            del result.values["category_id"]
        elif not categories.exists(category_id):
            result.add_error("category_id", "Category not found")
            del result.values["category_id"]

    return result


def validate_product_id(product_id: str) -> ValidationResult:
    result = ValidationResult()
    if is_valid_id(product_id):
        result.values["id"] = product_id
    else:
        result.add_error("id", "Invalid product ID")
    return result
