from fastapi import Request

from catalog.adapters.media_store import MediaStore


def get_media_store(request: Request) -> MediaStore:
    # built once in catalog.main and shared by every request
    return request.app.state.media_store
