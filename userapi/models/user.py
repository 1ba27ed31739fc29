"""
userapi/models/user.py

Represents a stored User document. The id is an opaque string assigned by
the store on first insert; clients never supply it.
"""

from __future__ import annotations
import secrets
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from userapi.database import Base


def new_document_id() -> str:
    """
    Generate a 24-char lowercase hex id, the same shape as a document-store
    object id.
    """
    return secrets.token_hex(12)


class User(Base):
    """
    The users table. Each document has:
      - An ID (PK, store-assigned string)
      - A name
      - An e-mail
      - A password (stored as submitted)
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_document_id)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(20), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name}, email={self.email})>"
