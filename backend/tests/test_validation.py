from catalog.repositories.category_repo import CategoryRepository
from catalog.services.validation import (
    ValidationResult,
    validate_product_fields,
    validate_product_id,
)


def test_full_form_is_cleaned(db, category_id):
    result = validate_product_fields(
        {"name": " Widget ", "title": "T", "description": "D", "category_id": category_id},
        CategoryRepository(db),
    )
    assert result.ok
    assert result.values == {
        "name": "Widget",
        "title": "T",
        "description": "D",
        "category_id": category_id,
    }


def test_partial_skips_absent_fields(db):
    result = validate_product_fields({"title": "Only title"}, CategoryRepository(db), partial=True)
    assert result.ok
    assert result.values == {"title": "Only title"}


def test_unknown_category_is_not_kept(db):
    result = validate_product_fields({"category_id": "b" * 32}, CategoryRepository(db), partial=True)
    assert not result.ok
    assert result.errors == {"category_id": ["Category not found"]}
    assert "category_id" not in result.values


def test_merge_keeps_reasons_in_order():
    a = ValidationResult()
    a.add_error("name", "first")
    b = ValidationResult(values={"title": "x"})
    b.add_error("name", "second")
    a.merge(b)
    assert a.errors == {"name": ["first", "second"]}
    assert a.values == {"title": "x"}


def test_product_id_shape():
    assert validate_product_id("a" * 32).ok
    assert validate_product_id("A" * 32).errors == {"id": ["Invalid product ID"]}
    assert not validate_product_id("a" * 31).ok
