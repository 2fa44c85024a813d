"""Account model - identity that owns job applications.

Accounts are created through Account.create() and soft deleted through
deactivate(); there is no hard delete path.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from career_ledger.core.clock import Clock, utc_now
from career_ledger.core.errors import InvalidArgumentError
from career_ledger.models.base import Base

if TYPE_CHECKING:
    from career_ledger.models.application import Application

_EMAIL_MIN_LENGTH = 5
_EMAIL_MAX_LENGTH = 255


class Account(Base):
    """User account owning zero or more applications.

    Attributes:
        id: UUID primary key.
        email: Login email, trimmed and lowercased.
        password_hash: Opaque hashed credential (never plaintext).
        is_active: False once the account is soft deleted.
        created_at: Account creation timestamp (UTC).
    """

    __tablename__ = "accounts"
    __table_args__ = (UniqueConstraint("email", name="uq_accounts_email"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(_EMAIL_MAX_LENGTH), nullable=False)
    password_hash: Mapped[str] = mapped_column(Text(), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False)

    # Relationships
    applications: Mapped[list["Application"]] = relationship(
        "Application",
        back_populates="account",
    )

    @classmethod
    def create(
        cls,
        email: str,
        password_hash: str,
        *,
        clock: Clock = utc_now,
    ) -> "Account":
        """Create a new active account with validation.

        Args:
            email: Email address (5-255 characters, must contain '@').
            password_hash: Hashed password (never plaintext).
            clock: Source of the creation timestamp.

        Returns:
            New Account with a fresh id. Email is trimmed and lowercased.

        Raises:
            InvalidArgumentError: If email is invalid or password hash is blank.
        """
        if email is None or not email.strip():
            raise InvalidArgumentError("email", "Email is required", email)

        if not _EMAIL_MIN_LENGTH <= len(email) <= _EMAIL_MAX_LENGTH:
            raise InvalidArgumentError(
                "email",
                f"Email must be between {_EMAIL_MIN_LENGTH} and "
                f"{_EMAIL_MAX_LENGTH} characters",
                email,
            )

        if "@" not in email:
            raise InvalidArgumentError(
                "email", "Email must be a valid email address", email
            )

        if password_hash is None or not password_hash.strip():
            # Security: the rejected hash is never echoed back in the error.
            raise InvalidArgumentError("password_hash", "Password hash is required")

        return cls(
            id=uuid.uuid4(),
            email=email.strip().lower(),
            password_hash=password_hash,
            is_active=True,
            created_at=clock(),
        )

    def deactivate(self) -> None:
        """Deactivate account (soft delete)."""
        self.is_active = False

    def reactivate(self) -> None:
        """Reactivate account."""
        self.is_active = True
