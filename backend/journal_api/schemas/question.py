"""Scheduled question delivery schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, fields, pre_dump


class QuestionSchema(Schema):
    """A delivered question prompt."""

    question_id = fields.Raw(required=True)
    question_text = fields.String(required=True)
    question_type = fields.String(required=True)

    @pre_dump
    def from_content(self, content: Any, **_: Any) -> dict[str, Any]:
        if isinstance(content, dict):
            return content
        return {
            "question_id": content.id,
            "question_text": content.text,
            "question_type": content.category,
        }


class DeliveryCheckSchema(Schema):
    """Outcome of ``GET /questions/for-me``."""

    has_new_message = fields.Boolean(required=True)
    new_message = fields.Nested(QuestionSchema, allow_none=True, attribute="content")
