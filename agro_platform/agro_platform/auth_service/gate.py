"""
Authorization gate for protected routes.

``authenticate`` must run before ``authorize``; use ``protected(...)`` to get
both dependencies in the right order:

    @router.get("/ofertas", dependencies=protected("productor", "empresa"))
"""
from typing import List, Optional

from fastapi import Depends, Header, Request

from .auth import SessionTokenCodec
from .errors import Forbidden, InvalidToken, Unauthenticated
from .schemas import TokenClaims
from .utils.event_logger import log_auth_event


def get_token_codec(request: Request) -> SessionTokenCodec:
    return request.app.state.token_codec


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an exact ``Bearer <token>`` header, else None."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    parts = authorization.split(" ")
    if len(parts) != 2 or not parts[1]:
        return None
    return parts[1]


def authenticate(
    request: Request,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    codec: SessionTokenCodec = Depends(get_token_codec),
) -> TokenClaims:
    token = parse_bearer(authorization)
    if token is None:
        raise Unauthenticated("Token no proporcionado")
    try:
        claims = codec.verify(token)
    except InvalidToken as exc:
        log_auth_event("token_rejected", request, detail=exc.detail)
        raise Unauthenticated("Token inválido o expirado") from exc

    request.state.usuario = claims
    return claims


def authorize(*allowed_roles: str):
    """Dependency factory rejecting authenticated callers outside ``allowed_roles``."""
    roles = tuple(allowed_roles)

    def dependency(request: Request) -> TokenClaims:
        claims: Optional[TokenClaims] = getattr(request.state, "usuario", None)
        if claims is None:
            raise Unauthenticated("No autenticado")
        if claims.rol not in roles:
            log_auth_event("access_denied", request, user_id=claims.id, email=claims.email)
            raise Forbidden.for_roles(roles)
        return claims

    return dependency


def protected(*allowed_roles: str) -> List:
    return [Depends(authenticate), Depends(authorize(*allowed_roles))]
