import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from app.db.couchdb import close_couch, open_couch
from app.routers import posts
from app.security import get_api_key
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Posts API", description="Blog post management backend")


@asynccontextmanager
async def lifespan(app: FastAPI):
    open_couch()
    logger.info("CouchDB connection opened")

    try:
        yield
    finally:
        close_couch()
        logger.info("CouchDB connection closed")


app.router.lifespan_context = lifespan

app.include_router(posts.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    return {"message": "Posts API is running"}
