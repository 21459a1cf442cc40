"""
Typed failures raised by the auth service.

Every failure carries an ``ErrorKind``; the HTTP layer maps the kind to a
status code and never inspects the message text.
"""
import enum
from typing import Iterable, Optional


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_USER_TYPE = "invalid_user_type"
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_INACTIVE = "account_inactive"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    INVALID_TOKEN = "invalid_token"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.DUPLICATE_EMAIL: 409,
    ErrorKind.INVALID_USER_TYPE: 400,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.ACCOUNT_INACTIVE: 403,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_TOKEN: 401,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.INTERNAL: 500,
}


class AuthServiceError(Exception):
    """Base exception for every failure the auth service reports to callers."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message: str = "Error interno del servidor"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.default_message
        # Internal cause, only surfaced when DEBUG is enabled
        self.detail = detail
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(AuthServiceError):
    kind = ErrorKind.VALIDATION
    default_message = "Datos de entrada inválidos"


class DuplicateEmail(AuthServiceError):
    kind = ErrorKind.DUPLICATE_EMAIL
    default_message = "El email ya está registrado"


class InvalidUserType(AuthServiceError):
    kind = ErrorKind.INVALID_USER_TYPE
    default_message = "Tipo de usuario inválido"


class InvalidCredentials(AuthServiceError):
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Credenciales inválidas"


class AccountInactive(AuthServiceError):
    kind = ErrorKind.ACCOUNT_INACTIVE
    default_message = "Tu cuenta está suspendida o inactiva"


class Unauthenticated(AuthServiceError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "No autenticado"


class Forbidden(AuthServiceError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Acceso denegado"

    @classmethod
    def for_roles(cls, allowed_roles: Iterable[str]) -> "Forbidden":
        return cls(f"Acceso denegado. Se requiere uno de estos roles: {', '.join(allowed_roles)}")


class NotFound(AuthServiceError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Usuario no encontrado"


class InvalidToken(AuthServiceError):
    kind = ErrorKind.INVALID_TOKEN
    default_message = "Token inválido o expirado"


class ConfigurationError(AuthServiceError):
    kind = ErrorKind.CONFIGURATION
    default_message = "Configuración del directorio incompleta"


class InternalError(AuthServiceError):
    kind = ErrorKind.INTERNAL
