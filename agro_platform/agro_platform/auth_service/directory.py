"""
Directory of users, user types and subscription plans.

Lookups return the ORM record or None. Creation commits and returns the
persisted record with its generated id and registration timestamp.
"""
from typing import Any, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .errors import DuplicateEmail
from .models import SubscriptionPlan, User, UserType

logger = logging.getLogger(__name__)


class UserDirectory:
    def __init__(self, db: Session):
        self.db = db

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def find_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id_usuario == user_id).first()

    def find_user_type_by_name(self, name: str) -> Optional[UserType]:
        return self.db.query(UserType).filter(UserType.nombre == name).first()

    def find_subscription_plan_by_name(self, name: str) -> Optional[SubscriptionPlan]:
        return self.db.query(SubscriptionPlan).filter(SubscriptionPlan.nombre == name).first()

    def create_user(self, **fields: Any) -> User:
        """
        Persist a new user.

        Raises:
            DuplicateEmail: if the storage unique constraint on email rejects
                the insert (concurrent registration with the same email).
        """
        user = User(**fields)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            taken = self.db.query(User.id_usuario).filter(User.email == fields.get("email")).first()
            if taken is not None:
                logger.info("Duplicate email rejected by storage constraint: %s", fields.get("email"))
                raise DuplicateEmail() from exc
            raise
        self.db.refresh(user)
        return user
