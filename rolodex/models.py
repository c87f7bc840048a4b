from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional
from urllib.parse import urlparse

PLACEHOLDER_IMAGE = "custom_plate.svg"
UNTITLED = "Untitled Recipe"


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


@dataclass
class Recipe:
    """Domain object representing a stored recipe."""

    id: str
    name: str
    ingredients: str
    instructions: str
    source: Optional[str] = None
    image: Optional[str] = None
    url: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> "Recipe":
        """Combine a store-assigned id with a document payload.

        Documents written by hand or by older clients may lack fields or
        carry the wrong types, so every field falls back to an empty value.
        """

        tags = data.get("tags")
        if isinstance(tags, list):
            parsed_tags = [tag for tag in tags if isinstance(tag, str)]
        else:
            parsed_tags = []

        return cls(
            id=doc_id,
            name=_text(data.get("name")),
            ingredients=_text(data.get("ingredients")),
            instructions=_text(data.get("instructions")),
            source=_optional_text(data.get("source")),
            image=_optional_text(data.get("image")),
            url=_optional_text(data.get("url")),
            tags=parsed_tags,
        )

    @property
    def display_name(self) -> str:
        return self.name or UNTITLED


@dataclass
class RecipeDraft:
    """Unsaved recipe data held by the add-recipe form.

    ``tags`` holds the committed tags, ``current_tag`` the text typed into
    the tag field that has not been committed yet.
    """

    name: str = ""
    ingredients: str = ""
    instructions: str = ""
    source: str = ""
    tags: List[str] = field(default_factory=list)
    current_tag: str = ""

    @classmethod
    def from_form(cls, form) -> "RecipeDraft":
        return cls(
            name=form.get("name", ""),
            ingredients=form.get("ingredients", ""),
            instructions=form.get("instructions", ""),
            source=form.get("source", "").strip(),
            tags=[tag for tag in form.getlist("tags") if tag],
            current_tag=form.get("current_tag", ""),
        )

    def commit_tag(self) -> bool:
        """Move the staged tag into ``tags``.

        Whitespace-only input is ignored. Returns ``True`` when a tag was
        added.
        """

        value = self.current_tag.strip()
        if not value:
            return False
        self.tags.append(value)
        self.current_tag = ""
        return True

    def remove_tag(self, value: str) -> None:
        # Equal tags are removed together.
        self.tags = [tag for tag in self.tags if tag != value]

    def validate(self) -> List[str]:
        errors: List[str] = []
        if self.source:
            parsed = urlparse(self.source)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                errors.append("The source link must be a full http:// or https:// URL.")
        return errors

    def to_document(self) -> dict:
        return {
            "name": self.name,
            "ingredients": self.ingredients,
            "instructions": self.instructions,
            "tags": list(self.tags),
            "source": self.source,
        }


__all__ = ["PLACEHOLDER_IMAGE", "Recipe", "RecipeDraft", "UNTITLED"]
