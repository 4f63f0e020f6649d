import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from core import config, db, schema
from core.errors import register_exception_handlers
from projects import router as projects_router
from records import router as records_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(_: FastAPI):
    config.configure_logging()
    logger.info("app_starting env=%s backend=%s", config.app_env(), config.db_backend())
    # Open the store and bring the schema up to date once per process.
    await db.init_pool()
    try:
        await schema.init_schema()
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

origins = config.cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router.router, tags=["auth"])
app.include_router(projects_router.router, tags=["projects"])
for resource_router in records_router.build_routers():
    app.include_router(resource_router, tags=["records"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "backend": config.db_backend()}
