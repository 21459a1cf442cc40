from pydantic import BaseModel

from datetime import datetime
from typing import Any, Literal, Optional

USER_TYPE_NAMES = ("productor", "empresa", "transportista")


# Request bodies. Fields are optional here so missing values are reported
# by the service layer as a 400 with a readable message.
class RegisterRequest(BaseModel):
    nombre: Optional[str] = None
    email: Optional[str] = None
    contrasena: Optional[str] = None
    telefono: Optional[str] = None
    direccion: Optional[str] = None
    tipo_usuario: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    contrasena: Optional[str] = None


class TokenClaims(BaseModel):
    id: int
    email: str
    rol: str


# Projections of the directory records
class UserTypeSummary(BaseModel):
    nombre: str

    class Config:
        from_attributes = True


class UserTypeDetail(UserTypeSummary):
    descripcion: Optional[str] = None


class PlanSummary(BaseModel):
    nombre: str
    alcance: str

    class Config:
        from_attributes = True


class PlanDetail(PlanSummary):
    mensualidad: Optional[float] = None
    incluye_publicidad: bool
    incluye_filtros: bool
    incluye_oferta_demanda: bool


class RegisteredUser(BaseModel):
    id_usuario: int
    nombre: str
    email: str
    estado: str
    suscripcion_activa: bool
    tipo_usuario: UserTypeSummary
    suscripcion: PlanSummary

    class Config:
        from_attributes = True


class SessionUser(RegisteredUser):
    """Every stored user field except the password hash."""
    telefono: Optional[str] = None
    direccion: Optional[str] = None
    fecha_registro: datetime
    ubicacion: Optional[Any] = None
    id_tipo_usuario: int
    id_suscripcion: int


class UserProfile(BaseModel):
    id_usuario: int
    nombre: str
    email: str
    telefono: Optional[str] = None
    direccion: Optional[str] = None
    fecha_registro: datetime
    estado: str
    suscripcion_activa: bool
    tipo_usuario: UserTypeDetail
    suscripcion: PlanDetail
    # Free-form JSON as stored; an object or a coordinate pair
    ubicacion: Optional[Any] = None

    class Config:
        from_attributes = True


# Responses
class RegisterResponse(BaseModel):
    mensaje: Literal["Usuario registrado exitosamente"] = "Usuario registrado exitosamente"
    usuario: RegisteredUser
    token: str


class LoginResponse(BaseModel):
    mensaje: Literal["Inicio de sesión exitoso"] = "Inicio de sesión exitoso"
    usuario: SessionUser
    token: str


class ProfileResponse(BaseModel):
    usuario: UserProfile


class ErrorResponse(BaseModel):
    mensaje: str
    detalle: Optional[str] = None
