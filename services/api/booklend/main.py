from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from booklend.api.router import api_router
from booklend.core.config import Settings, settings as default_settings
from booklend.core.logging_config import configure_logging
from booklend.core.otel import init_otel
from booklend.core.security import build_pwd_context
from booklend.crud.users import create_user, get_user_by_email
from booklend.db.session import create_db_engine, create_session_factory
from booklend.middleware.request_id import RequestIdMiddleware
from booklend.models import Base
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


def _bootstrap_admin(app: FastAPI) -> None:
    s: Settings = app.state.settings
    if not (s.bootstrap_admin_email and s.bootstrap_admin_password):
        return

    with app.state.session_factory() as db:
        if get_user_by_email(db, s.bootstrap_admin_email) is not None:
            return
        u = create_user(
            db,
            pwd_context=app.state.pwd_context,
            email=s.bootstrap_admin_email,
            password=s.bootstrap_admin_password,
            is_admin=True,
        )
        logger.info("bootstrap administrator %s created", u.id)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.settings.auto_create_tables:
        Base.metadata.create_all(bind=app.state.engine)
    _bootstrap_admin(app)
    yield
    app.state.engine.dispose()


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.api_name, lifespan=lifespan)

    engine = create_db_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.pwd_context = build_pwd_context(settings.password_hash_rounds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(api_router)

    init_otel(app, settings)
    return app


app = create_app()
