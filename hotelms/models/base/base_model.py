"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and the abstract model every table
derives from.
"""

import enum
from typing import Type
from uuid import uuid4

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

# Create declarative base
Base = declarative_base()


def enum_column(enum_cls: Type[enum.Enum], name: str) -> Enum:
    """SQL enum type that stores member values ("Single") rather than names."""
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )


class BaseModel(Base):
    """
    Abstract base model with a string UUID primary key.
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        nullable=False,
        comment="Primary key (UUID)",
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id}>"
