"""Caller-supplied context for a donation: book identity and promotions."""

from pydantic import BaseModel, ConfigDict


class ContextualFactors(BaseModel):
    model_config = ConfigDict(frozen=True)

    book_title: str | None = None
    book_author: str | None = None
    is_first_time_donor: bool = False
    is_theme_event: bool = False
    is_new_book: bool = False  # new / unopened
    has_craft_match: bool = False  # title matches an available craft kit
