import io
import os
import tempfile

# must be set before catalog.config is imported
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(tempfile.gettempdir(), "catalog_test.db")
os.environ["MEDIA_BACKEND"] = "mock"
os.environ["MEDIA_PUBLIC_BASE_URL"] = "https://media.test"

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from catalog.db import SessionLocal, init_db
from catalog.main import app
from catalog.models.category import Category


@pytest.fixture(autouse=True)
def fresh_db():
    init_db(reset=True)
    app.state.media_store.clear()
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def media():
    return app.state.media_store


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def make_category():
    def _make(name="Gadgets"):
        s = SessionLocal()
        try:
            c = Category(name=name)
            s.add(c)
            s.commit()
            return c.id
        finally:
            s.close()

    return _make


@pytest.fixture
def category_id(make_category):
    return make_category()


@pytest.fixture
def make_image():
    def _make(size=(1600, 900), fmt="JPEG", mode="RGB"):
        buf = io.BytesIO()
        color = (30, 120, 200, 128) if mode == "RGBA" else (30, 120, 200)
        Image.new(mode, size, color).save(buf, format=fmt)
        return buf.getvalue()

    return _make


@pytest.fixture
def create_product(client, category_id, make_image):
    def _create(**overrides):
        data = {
            "name": "Widget",
            "title": "Widget Title",
            "description": "A widget",
            "category_id": category_id,
        }
        data.update(overrides)
        files = {"image": ("widget.jpg", make_image(), "image/jpeg")}
        res = client.post("/api/product/add", data=data, files=files)
        assert res.status_code == 201, res.text
        return res.json()["product"]

    return _create
