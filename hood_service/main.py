import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hood_service import __version__
from hood_service.core.config import settings
from hood_service.graphql.router import graphql_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="[%(asctime)s] %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(f"Hood service starting up (ENV={settings.ENV})")
    yield
    logger.info("Hood service shutting down")


app = FastAPI(
    title="Hood Association Service",
    version=__version__,
    description="""
        GraphQL backend for neighborhood associations.

        * **Associations**: Members, admins and treasurer terms
        * **Cash book**: Revenues and expenses recorded by the treasurer
        * **Fields**: Reservable courts and areas with per-field booking rules

        Every operation requires JWT authentication via the `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(graphql_router, prefix="/graphql")


@app.get("/")
def read_root():
    return {"status": "Hood Association Service is running"}
