from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.adapters.media_store import build_media_store
from catalog.api.health import router as health_router
from catalog.api.routes_catalogue import router as catalogue_router
from catalog.api.routes_categories import router as categories_router
from catalog.config import settings
from catalog.db import init_db
from catalog.utils.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    setup_logging(settings.LOG_LEVEL, log_file=settings.LOG_FILE)
    init_db(reset=settings.RESET_DB)
    yield


app = FastAPI(title="Product Catalog API", version="0.1.0", lifespan=lifespan)

# one media client per process, handed to handlers through get_media_store
app.state.media_store = build_media_store(settings)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api", tags=["catalogue"])

app.include_router(categories_router, prefix="/api", tags=["categories"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("catalog.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
