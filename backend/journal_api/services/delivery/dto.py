# journal_api/services/delivery/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ContentOut:
    """
    Delivered prompt.

    :param id: Content identifier.
    :param text: Prompt text.
    :param category: Content category.
    """

    id: int | str
    text: str
    category: str


@dataclass(frozen=True, slots=True)
class DeliveryOut:
    """
    Result of a delivery check.

    :param has_new_message: Whether a message is delivered with this response.
    :param content: The delivered prompt when ``has_new_message`` is true.
    """

    has_new_message: bool
    content: ContentOut | None = None

    @classmethod
    def nothing(cls) -> DeliveryOut:
        return cls(has_new_message=False, content=None)
