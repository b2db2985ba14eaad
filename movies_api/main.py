import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from movies_api.api.v1.movies import router as movies_router
from movies_api.core.config import settings
from movies_api.core.logger import setup_json_logging, shutdown_logging
from movies_api.core.middleware import RequestContextMiddleware
from movies_api.core.sentry import init_sentry
from movies_api.db.mongo import close_client, get_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    # logging first so startup problems are captured
    setup_json_logging(service=settings.app_name)
    init_sentry(settings.sentry_dsn, environment=settings.env)

    await get_client(ping=settings.mongo_ping_on_startup)

    try:
        yield
    finally:
        await close_client()
        shutdown_logging()


app = FastAPI(title="Movies Service", lifespan=lifespan)

app.add_middleware(RequestContextMiddleware)

# access records come from RequestContextMiddleware
logging.getLogger("uvicorn.access").setLevel("WARNING")


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(movies_router)
