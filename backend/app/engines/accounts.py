"""Account Store — lookups and writes for admin and agent users."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone

from sqlmodel import Session, select

from app.models.user import Role, User
from app.security.passwords import hash_password, verify_password


class AccountStore:
    """CRUD over the user table, scoped by role where it matters."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        statement = select(User).where(User.email == email.strip().lower())
        return self.session.exec(statement).first()

    def email_taken(self, email: str, *, exclude_id: str | None = None) -> bool:
        user = self.get_by_email(email)
        return user is not None and user.id != exclude_id

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when the credentials match, else None."""
        user = self.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    def create(self, *, name: str, email: str, password: str, role: Role, mobile: str = "") -> User:
        user = User(
            name=name.strip(),
            email=email.strip().lower(),
            mobile=mobile.strip(),
            password_hash=hash_password(password),
            role=role,
        )
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def get_agent(self, user_id: str) -> User | None:
        user = self.get(user_id)
        if user is None or user.role is not Role.AGENT:
            return None
        return user

    def list_agents(self) -> Sequence[User]:
        """Agents in a stable order (creation time, then id), the order used for distribution."""
        statement = (
            select(User)
            .where(User.role == Role.AGENT)
            .order_by(User.created_at, User.id)  # type: ignore[arg-type]
        )
        return self.session.exec(statement).all()

    def update(self, user: User, **fields) -> User:
        """Apply non-empty profile fields; a password is re-hashed."""
        for key, value in fields.items():
            if value is None or value == "":
                continue
            if key == "password":
                user.password_hash = hash_password(value)
            elif key == "email":
                user.email = value.strip().lower()
            else:
                setattr(user, key, value.strip() if isinstance(value, str) else value)
        user.updated_at = datetime.now(timezone.utc)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def delete(self, user: User) -> None:
        self.session.delete(user)
        self.session.commit()
