import structlog
from fastapi import FastAPI

from aquaflow.core.config import settings
from aquaflow.core.database import engine, Base
from aquaflow.core.logging import configure_logging
from aquaflow.api.rest import api_router
from aquaflow.api.graphql.router import graphql_router

configure_logging(log_level=settings.log_level, json_format=settings.log_json)
logger = structlog.get_logger(__name__)

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="AquaFlow API",
    description="Water delivery ordering for customers and vendors, with REST and GraphQL",
    version="1.0.0",
)

app.include_router(api_router, prefix="/api")
app.include_router(graphql_router, prefix="/graphql")

logger.info("app_started", database_url=settings.database_url.split("://")[0])


@app.get("/")
def root():
    return {"message": "AquaFlow API", "version": "1.0.0"}


@app.get("/health")
def health():
    return {"status": "healthy"}
