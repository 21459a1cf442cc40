from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Text, Numeric, JSON
from datetime import datetime, timezone
from .db import Base
from sqlalchemy.orm import relationship

ACCOUNT_ACTIVE = "activo"
ACCOUNT_STATES = ("activo", "suspendido", "inactivo")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserType(Base):
    """Role category: productor, empresa or transportista."""
    __tablename__ = "tipo_usuario"
    id_tipo_usuario = Column(Integer, primary_key=True, index=True)
    nombre = Column(String, unique=True, index=True, nullable=False)
    descripcion = Column(Text, nullable=True)

    usuarios = relationship("User", back_populates="tipo_usuario")


class SubscriptionPlan(Base):
    __tablename__ = "suscripcion"
    id_suscripcion = Column(Integer, primary_key=True, index=True)
    nombre = Column(String, unique=True, index=True, nullable=False)
    alcance = Column(String, nullable=False)
    mensualidad = Column(Numeric(10, 2), nullable=True)
    incluye_publicidad = Column(Boolean, default=False, nullable=False)
    incluye_filtros = Column(Boolean, default=False, nullable=False)
    incluye_oferta_demanda = Column(Boolean, default=False, nullable=False)

    usuarios = relationship("User", back_populates="suscripcion")


class User(Base):
    __tablename__ = "usuario"
    id_usuario = Column(Integer, primary_key=True, index=True)
    nombre = Column(String, nullable=False)
    # Unique constraint is the authoritative duplicate-registration guard
    email = Column(String, unique=True, index=True, nullable=False)
    contrasena = Column(String, nullable=False)
    telefono = Column(String, nullable=True)
    direccion = Column(String, nullable=True)
    estado = Column(String, default=ACCOUNT_ACTIVE, nullable=False)
    fecha_registro = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    suscripcion_activa = Column(Boolean, default=False, nullable=False)
    ubicacion = Column(JSON, nullable=True)
    id_tipo_usuario = Column(Integer, ForeignKey("tipo_usuario.id_tipo_usuario"), nullable=False)
    id_suscripcion = Column(Integer, ForeignKey("suscripcion.id_suscripcion"), nullable=False)

    tipo_usuario = relationship("UserType", back_populates="usuarios")
    suscripcion = relationship("SubscriptionPlan", back_populates="usuarios")

    @property
    def is_active(self) -> bool:
        return self.estado == ACCOUNT_ACTIVE

    def __repr__(self):
        return f"<User(id_usuario={self.id_usuario}, email={self.email}, estado={self.estado})>"
