import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.core.errors import register_exception_handlers
from app.core.logging import add_request_logging, configure_logging
from app.db.migrations import run_migrations
from app.db.seed import seed
from app.db.session import Database

from app.api.auth.routes import router as auth_router
from app.api.users.routes import router as users_router
from app.api.projects.routes import router as projects_router
from app.api.project_users.routes import router as project_users_router
from app.api.columns.routes import router as columns_router
from app.api.tasks.routes import router as tasks_router
from app.api.comments.routes import router as comments_router
from app.api.task_history.routes import router as task_history_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.db

    if settings.AUTO_MIGRATE:
        run_migrations(database)
        logger.info("Database schema is up to date")
    if settings.SEED_DATA:
        with database.session() as db:
            seed(db, settings)

    logger.info("Kanban API started (env=%s)", settings.ENV)
    yield
    database.dispose()
    logger.info("Kanban API stopped")


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Kanban Board API", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = database or Database(settings.DATABASE_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_request_logging(app)
    register_exception_handlers(app)

    # Routers
    app.include_router(auth_router, prefix="/auth", tags=["Auth"])
    app.include_router(users_router, prefix="/users", tags=["Users"])
    app.include_router(projects_router, prefix="/projects", tags=["Projects"])
    app.include_router(project_users_router, prefix="/project-users", tags=["Project Users"])
    app.include_router(columns_router, prefix="/columns", tags=["Columns"])
    app.include_router(tasks_router, prefix="/tasks", tags=["Tasks"])
    app.include_router(comments_router, prefix="/comments", tags=["Comments"])
    app.include_router(task_history_router, prefix="/task-history", tags=["Task History"])

    @app.get("/health")
    def health(request: Request):
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": request.app.state.settings.ENV,
        }

    @app.get("/ping")
    def ping():
        return {"message": "pong"}

    return app
