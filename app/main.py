import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.home.router import router as home_router
from app.api.v1.classes.classes_router import router as classes_router
from app.api.v1.students.router import router as students_router
from app.api.v1.subjects.router import router as subjects_router
from app.api.v1.teachers.router import router as teachers_router
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.db.session import AsyncSessionLocal, create_all_tables, engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    logger.info("Starting %s", settings.app_title)
    if settings.create_tables_on_startup:
        await create_all_tables()
        logger.info("Database tables ensured")
    if settings.load_sample_data:
        from app.db.seed_sample_data import seed_sample_data

        async with AsyncSessionLocal() as db:
            await seed_sample_data(db)
    yield
    await engine.dispose()
    logger.info("Shut down %s", settings.app_title)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or missing fields are a client error: 400 instead of FastAPI's 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_title, lifespan=lifespan)

    # CORS: allow frontend to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Routers
    app.include_router(home_router)
    app.include_router(subjects_router)
    app.include_router(teachers_router)
    app.include_router(students_router)
    app.include_router(classes_router)

    return app


app = create_app()
