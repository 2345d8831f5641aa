import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from photofind.observability import setup_logging
from photofind.routes.events import router as events_router
from photofind.routes.photos import router as photos_router
from photofind.routes.search import router as search_router
from photofind.services import get_search

setup_logging()
logger = logging.getLogger("photofind.main")


def bootstrap_index() -> None:
    if os.getenv("SEARCH_BOOTSTRAP_INDEX", "").lower() in ("1", "true", "yes"):
        get_search().ensure_index()
        logger.info("Search index bootstrap complete")


@asynccontextmanager
async def lifespan(app: FastAPI):
    bootstrap_index()
    yield


app = FastAPI(title="Photofind API", lifespan=lifespan)

allow_origins = os.getenv("API_CORS_ALLOW_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_methods=["GET", "PUT", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(events_router)
app.include_router(search_router)
app.include_router(photos_router)


@app.get("/health")
def health():
    return {"status": "ok"}
