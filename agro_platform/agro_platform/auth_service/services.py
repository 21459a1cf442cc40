"""
Registration, login and profile services.

The services validate client input before touching the directory, raise
typed ``AuthServiceError`` subclasses for every domain failure, and return
pydantic projections that never include the password hash.
"""
from dataclasses import dataclass
from typing import Union
import logging

from .auth import PasswordHasher, SessionTokenCodec
from .directory import UserDirectory
from .errors import (
    AccountInactive,
    ConfigurationError,
    DuplicateEmail,
    InvalidCredentials,
    InvalidUserType,
    NotFound,
    ValidationError,
)
from .schemas import (
    USER_TYPE_NAMES,
    LoginRequest,
    RegisteredUser,
    RegisterRequest,
    SessionUser,
    UserProfile,
)

logger = logging.getLogger(__name__)

DEFAULT_PLAN = "basico"
MIN_PASSWORD_LENGTH = 6


@dataclass
class AuthResult:
    usuario: Union[RegisteredUser, SessionUser]
    token: str


def _blank(value) -> bool:
    return value is None or value == ""


class CredentialService:
    def __init__(self, directory: UserDirectory, hasher: PasswordHasher, codec: SessionTokenCodec):
        self.directory = directory
        self.hasher = hasher
        self.codec = codec

    @staticmethod
    def validate_registration(data: RegisterRequest) -> None:
        if any(_blank(v) for v in (data.nombre, data.email, data.contrasena, data.tipo_usuario)):
            raise ValidationError("Faltan campos obligatorios: nombre, email, contrasena, tipo_usuario")
        if data.tipo_usuario not in USER_TYPE_NAMES:
            raise ValidationError("tipo_usuario debe ser: productor, empresa o transportista")
        if len(data.contrasena) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"La contraseña debe tener mínimo {MIN_PASSWORD_LENGTH} caracteres")

    def register(self, data: RegisterRequest) -> AuthResult:
        self.validate_registration(data)

        if self.directory.find_user_by_email(data.email) is not None:
            raise DuplicateEmail()

        user_type = self.directory.find_user_type_by_name(data.tipo_usuario)
        if user_type is None:
            raise InvalidUserType()

        plan = self.directory.find_subscription_plan_by_name(DEFAULT_PLAN)
        if plan is None:
            logger.error("Default subscription plan %r missing from directory", DEFAULT_PLAN)
            raise ConfigurationError("Plan básico no encontrado")

        user = self.directory.create_user(
            nombre=data.nombre,
            email=data.email,
            contrasena=self.hasher.hash(data.contrasena),
            telefono=data.telefono,
            direccion=data.direccion,
            id_tipo_usuario=user_type.id_tipo_usuario,
            id_suscripcion=plan.id_suscripcion,
            suscripcion_activa=True,
        )
        token = self.codec.issue(user.id_usuario, user.email, user_type.nombre)
        return AuthResult(usuario=RegisteredUser.model_validate(user), token=token)

    def login(self, data: LoginRequest) -> AuthResult:
        if _blank(data.email) or _blank(data.contrasena):
            raise ValidationError("Email y contraseña son obligatorios")

        user = self.directory.find_user_by_email(data.email)
        if user is None:
            # Same cost and same error as a wrong password
            self.hasher.dummy_verify()
            raise InvalidCredentials()

        if not self.hasher.verify(data.contrasena, user.contrasena):
            raise InvalidCredentials()

        if not user.is_active:
            raise AccountInactive()

        token = self.codec.issue(user.id_usuario, user.email, user.tipo_usuario.nombre)
        return AuthResult(usuario=SessionUser.model_validate(user), token=token)


class ProfileService:
    def __init__(self, directory: UserDirectory):
        self.directory = directory

    def get_profile(self, user_id: int) -> UserProfile:
        user = self.directory.find_user_by_id(user_id)
        if user is None:
            raise NotFound()
        return UserProfile.model_validate(user)
