"""
Auth Service - registration, login and profile for the agro marketplace
"""
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional
import logging

from .auth import PasswordHasher, SessionTokenCodec
from .config import DEV_JWT_SECRET, Settings, settings as default_settings
from . import db as database
from .db import init_db, make_engine, make_session_factory
from .errors import AuthServiceError, ErrorKind
from .routes import auth as auth_routes, health
from .seed import seed_reference_data

# Configure logging
logging.basicConfig(
    level=getattr(logging, default_settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and reference data on startup"""
    init_db(app.state.engine)
    if app.state.settings.SEED_REFERENCE_DATA:
        with app.state.session_factory() as db:
            seed_reference_data(db)
    yield


async def auth_error_handler(request: Request, exc: AuthServiceError) -> JSONResponse:
    body = {"mensaje": exc.message}
    if request.app.state.settings.DEBUG and exc.detail:
        body["detalle"] = exc.detail
    headers = {"WWW-Authenticate": "Bearer"} if exc.kind == ErrorKind.UNAUTHENTICATED else None
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)


def public_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """Location and message of each error; submitted values are never echoed."""
    return [{"loc": error["loc"], "msg": error["msg"], "type": error["type"]} for error in exc.errors()]


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"mensaje": "Cuerpo de la solicitud inválido", "errores": jsonable_encoder(public_errors(exc))},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    if settings.JWT_SECRET == DEV_JWT_SECRET:
        logger.warning("JWT_SECRET not set, using the development secret")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Registro, inicio de sesión y perfil de usuarios de la plataforma agrícola",
        version="1.0.0",
        lifespan=lifespan,
    )
    # Immutable process-wide configuration, read by request dependencies
    app.state.settings = settings
    if settings.DATABASE_URL == database.SQLALCHEMY_DATABASE_URL:
        app.state.engine = database.engine
        app.state.session_factory = database.SessionLocal
    else:
        app.state.engine = make_engine(settings.DATABASE_URL)
        app.state.session_factory = make_session_factory(app.state.engine)
    app.state.password_hasher = PasswordHasher(settings.PASSWORD_SCHEME, settings.PASSWORD_ROUNDS)
    app.state.token_codec = SessionTokenCodec(settings.JWT_SECRET, settings.JWT_ALGORITHM)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AuthServiceError, auth_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(health.router)
    app.include_router(auth_routes.router, prefix=settings.API_PREFIX)
    return app


app = create_app()


def main():
    import uvicorn

    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    main()
