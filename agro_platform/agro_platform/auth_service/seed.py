"""
Reference data the service needs before anyone can register: the three user
types and the subscription plans, with ``basico`` as the default plan.
"""
from decimal import Decimal
import logging

from sqlalchemy.orm import Session

from .models import SubscriptionPlan, UserType

logger = logging.getLogger(__name__)

USER_TYPES = [
    {"nombre": "productor", "descripcion": "Productor agrícola que ofrece sus cosechas"},
    {"nombre": "empresa", "descripcion": "Empresa compradora de productos agrícolas"},
    {"nombre": "transportista", "descripcion": "Transportista de carga entre productores y empresas"},
]

SUBSCRIPTION_PLANS = [
    {
        "nombre": "basico",
        "alcance": "local",
        "mensualidad": None,
        "incluye_publicidad": False,
        "incluye_filtros": False,
        "incluye_oferta_demanda": False,
    },
    {
        "nombre": "premium",
        "alcance": "nacional",
        "mensualidad": Decimal("49.90"),
        "incluye_publicidad": True,
        "incluye_filtros": True,
        "incluye_oferta_demanda": True,
    },
]


def seed_reference_data(db: Session) -> int:
    """Insert missing user types and plans. Returns the number of rows added."""
    added = 0
    for row in USER_TYPES:
        if db.query(UserType).filter(UserType.nombre == row["nombre"]).first() is None:
            db.add(UserType(**row))
            added += 1
    for row in SUBSCRIPTION_PLANS:
        if db.query(SubscriptionPlan).filter(SubscriptionPlan.nombre == row["nombre"]).first() is None:
            db.add(SubscriptionPlan(**row))
            added += 1
    db.commit()
    if added:
        logger.info("Seeded %d reference rows", added)
    return added
