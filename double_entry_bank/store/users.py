"""User data access."""

import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from double_entry_bank.exceptions import UserAlreadyExists, UserNotFound
from double_entry_bank.models.user import User


class UserStore:

    def __init__(self, session: Session):
        self.session = session

    def create_user(self, email: str) -> User:
        """
        Insert a user with a unique email.

        The lookup catches the common duplicate; the unique
        index catches one registered concurrently between the
        lookup and the insert.
        """
        existing = self.session.execute(
            select(User).where(User.email == email)
        ).scalar_one_or_none()
        if existing:
            raise UserAlreadyExists(email)

        user = User(email=email)
        self.session.add(user)
        try:
            self.session.flush()
        except IntegrityError as exc:
            raise UserAlreadyExists(email) from exc
        return user

    def get_user(self, user_id: uuid.UUID) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user
