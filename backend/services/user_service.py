"""
user_service.py — Accounts
Lookup and lifecycle of user rows: creation with a pending confirmation
code, confirmation, password reset codes and profile updates.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.user import User

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def get_by_email(db: Session, email: str) -> User | None:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_by_token(db: Session, token: str) -> User | None:
        return db.query(User).filter(User.token == token).first()

    @staticmethod
    def create(db: Session, name: str, email: str, hashed_password: str, token: str) -> User | None:
        """Insert an unconfirmed account holding *token* as its confirmation code."""
        try:
            user = User(
                name=name,
                email=email,
                password=hashed_password,
                token=token,
                confirmed=False,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"Account created for {email}")
            return user
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Could not create account for {email}")
            return None

    @staticmethod
    def _save(db: Session, user: User, **changes) -> bool:
        try:
            for key, value in changes.items():
                setattr(user, key, value)
            db.commit()
            return True
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Could not update user {user.id}")
            return False

    @staticmethod
    def confirm(db: Session, user: User) -> bool:
        return UserService._save(db, user, confirmed=True, token=None)

    @staticmethod
    def set_token(db: Session, user: User, token: str) -> bool:
        return UserService._save(db, user, token=token)

    @staticmethod
    def reset_password(db: Session, user: User, hashed_password: str) -> bool:
        """Store the new hash and consume the reset code."""
        return UserService._save(db, user, password=hashed_password, token=None)

    @staticmethod
    def set_password(db: Session, user: User, hashed_password: str) -> bool:
        return UserService._save(db, user, password=hashed_password)

    @staticmethod
    def update_profile(db: Session, user: User, name: str, email: str) -> bool:
        return UserService._save(db, user, name=name, email=email)
