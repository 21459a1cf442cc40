"""
Auth Router - registration, login and profile endpoints.
"""
import logging
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..auth import PasswordHasher, SessionTokenCodec
from ..db import get_db
from ..directory import UserDirectory
from ..errors import AccountInactive, AuthServiceError, InternalError, InvalidCredentials
from ..gate import authenticate, get_token_codec
from ..schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RegisterRequest,
    RegisterResponse,
    TokenClaims,
)
from ..services import CredentialService, ProfileService
from ..utils.event_logger import log_auth_event

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_credential_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: SessionTokenCodec = Depends(get_token_codec),
) -> CredentialService:
    return CredentialService(UserDirectory(db), hasher, codec)


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(UserDirectory(db))


def _unexpected(action: str, exc: Exception) -> InternalError:
    logger.exception("%s failed", action)
    return InternalError(detail=str(exc))


@router.post(
    "/registro",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def register(
    payload: RegisterRequest,
    request: Request,
    service: CredentialService = Depends(get_credential_service),
):
    """Register a productor, empresa or transportista on the default plan."""
    try:
        result = service.register(payload)
    except AuthServiceError:
        raise
    except Exception as exc:
        raise _unexpected("Registration", exc) from exc

    log_auth_event("register", request, user_id=result.usuario.id_usuario, email=result.usuario.email)
    return RegisterResponse(usuario=result.usuario, token=result.token)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def login(
    payload: LoginRequest,
    request: Request,
    service: CredentialService = Depends(get_credential_service),
):
    try:
        result = service.login(payload)
    except InvalidCredentials:
        log_auth_event("login_failure", request, email=payload.email)
        raise
    except AccountInactive:
        log_auth_event("login_inactive", request, email=payload.email)
        raise
    except AuthServiceError:
        raise
    except Exception as exc:
        raise _unexpected("Login", exc) from exc

    log_auth_event("login_success", request, user_id=result.usuario.id_usuario, email=result.usuario.email)
    return LoginResponse(usuario=result.usuario, token=result.token)


@router.get(
    "/perfil",
    response_model=ProfileResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def profile(
    claims: TokenClaims = Depends(authenticate),
    service: ProfileService = Depends(get_profile_service),
):
    """
    Profile of the authenticated user.

    Identity comes from the token claims; the role claim is not re-checked
    against the directory.
    """
    try:
        usuario = service.get_profile(claims.id)
    except AuthServiceError:
        raise
    except Exception as exc:
        raise _unexpected("Profile lookup", exc) from exc
    return ProfileResponse(usuario=usuario)
