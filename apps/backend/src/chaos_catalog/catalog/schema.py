"""Pydantic models for catalog products."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Product(BaseModel):
    """A single catalog item. Immutable once built."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    category: str
    price_cents: int = Field(ge=0)

    def matches(self, needle: str) -> bool:
        """True when ``needle`` (already lower-cased) occurs in the id, name or category."""
        return (
            needle in self.name.lower()
            or needle in self.category.lower()
            or needle in self.id.lower()
        )
