"""Question pool repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import func, select

from journal_api.models.question import Question
from journal_api.repositories.base import BaseRepository


class QuestionRepository(BaseRepository[Question]):
    """Persistence-only repository for :class:`Question`."""

    model = Question

    def random_active(self, category: str) -> Question | None:
        """Return one random active question of ``category`` or ``None``."""
        stmt = (
            select(Question)
            .where(Question.category == category, Question.is_active.is_(True))
            .order_by(func.random())
            .limit(1)
        )
        return cast(Question | None, self.session.execute(stmt).scalars().first())
