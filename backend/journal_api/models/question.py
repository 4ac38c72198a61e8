"""Journal prompts delivered to users."""

from __future__ import annotations

from sqlalchemy import Boolean, Index, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from journal_api.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Question(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A prompt in the question pool.

    Fields
    ------
    text : str
        Prompt shown to the user.
    category : str
        Pool the prompt belongs to (``SCHEDULED_MESSAGE``, ``DAILY_MOOD``...).
    is_active : bool
        Inactive prompts are never selected.
    """

    __tablename__ = "questions"
    __repr_fields__ = ("id", "category")

    text: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    __table_args__ = (Index("ix_questions_category_active", "category", "is_active"),)
