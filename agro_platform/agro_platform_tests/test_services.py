"""
Tests for the credential and profile services against the SQL directory.
"""
import pytest

from agro_platform.agro_platform.auth_service.directory import UserDirectory
from agro_platform.agro_platform.auth_service.errors import (
    AccountInactive,
    DuplicateEmail,
    ErrorKind,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from agro_platform.agro_platform.auth_service.models import User
from agro_platform.agro_platform.auth_service.schemas import LoginRequest, RegisterRequest
from agro_platform.agro_platform.auth_service.services import CredentialService, ProfileService


@pytest.fixture
def directory(db_session):
    return UserDirectory(db_session)


@pytest.fixture
def service(directory, hasher, codec):
    return CredentialService(directory, hasher, codec)


def make_request(**overrides):
    data = {"nombre": "Ana Gómez", "email": "ana@test.com", "contrasena": "secreta", "tipo_usuario": "empresa"}
    data.update(overrides)
    return RegisterRequest(**data)


def test_register_persists_user_with_default_plan(service, directory, hasher):
    result = service.register(make_request(telefono="311", direccion="Calle 1"))
    user = directory.find_user_by_id(result.usuario.id_usuario)
    assert user.suscripcion.nombre == "basico"
    assert user.suscripcion_activa is True
    assert user.estado == "activo"
    assert user.contrasena != "secreta"
    assert hasher.verify("secreta", user.contrasena)
    assert result.usuario.suscripcion.alcance == "local"


def test_register_token_role_is_user_type(service, codec):
    result = service.register(make_request())
    claims = codec.verify(result.token)
    assert claims.rol == "empresa"
    assert claims.id == result.usuario.id_usuario


@pytest.mark.parametrize("overrides", [
    {"nombre": ""},
    {"email": None},
    {"contrasena": ""},
    {"tipo_usuario": None},
    {"tipo_usuario": "admin"},
    {"contrasena": "corta"},
])
def test_register_validation_happens_before_directory(hasher, codec, overrides):
    class UntouchableDirectory:
        def __getattr__(self, name):
            raise AssertionError(f"directory.{name} must not be called")

    service = CredentialService(UntouchableDirectory(), hasher, codec)
    with pytest.raises(ValidationError) as exc_info:
        service.register(make_request(**overrides))
    assert exc_info.value.status_code == 400


def test_duplicate_email_regardless_of_other_fields(service):
    service.register(make_request())
    with pytest.raises(DuplicateEmail):
        service.register(make_request(nombre="Otra", contrasena="distinta", tipo_usuario="productor"))


def test_storage_constraint_maps_to_duplicate_email(service, directory, db_session, monkeypatch):
    service.register(make_request())
    # Simulate a concurrent registration that passed the pre-check
    monkeypatch.setattr(directory, "find_user_by_email", lambda email: None)
    with pytest.raises(DuplicateEmail):
        service.register(make_request(nombre="Carrera"))
    monkeypatch.undo()
    assert db_session.query(User).count() == 1


def test_login_success_returns_session_user(service, codec):
    service.register(make_request())
    result = service.login(LoginRequest(email="ana@test.com", contrasena="secreta"))
    assert result.usuario.email == "ana@test.com"
    assert result.usuario.tipo_usuario.nombre == "empresa"
    assert codec.verify(result.token).rol == "empresa"
    assert "contrasena" not in result.usuario.model_dump()


def test_login_failures_share_kind_and_message(service):
    service.register(make_request())
    with pytest.raises(InvalidCredentials) as wrong:
        service.login(LoginRequest(email="ana@test.com", contrasena="otra-clave"))
    with pytest.raises(InvalidCredentials) as unknown:
        service.login(LoginRequest(email="nadie@test.com", contrasena="secreta"))
    assert wrong.value.kind == unknown.value.kind == ErrorKind.INVALID_CREDENTIALS
    assert wrong.value.message == unknown.value.message


@pytest.mark.parametrize("estado", ["suspendido", "inactivo"])
def test_login_inactive_account_gets_no_token(service, db_session, estado):
    service.register(make_request())
    user = db_session.query(User).filter(User.email == "ana@test.com").first()
    user.estado = estado
    db_session.commit()
    with pytest.raises(AccountInactive) as exc_info:
        service.login(LoginRequest(email="ana@test.com", contrasena="secreta"))
    assert exc_info.value.status_code == 403


def test_login_requires_both_fields(service):
    with pytest.raises(ValidationError):
        service.login(LoginRequest(email="ana@test.com"))


def test_profile_projection(service, directory):
    created = service.register(make_request())
    profile = ProfileService(directory).get_profile(created.usuario.id_usuario)
    assert profile.nombre == "Ana Gómez"
    assert profile.tipo_usuario.descripcion
    assert profile.suscripcion.incluye_oferta_demanda is False
    assert profile.ubicacion is None
    assert "contrasena" not in profile.model_dump()


def test_profile_not_found(directory):
    with pytest.raises(NotFound) as exc_info:
        ProfileService(directory).get_profile(999)
    assert exc_info.value.status_code == 404
