"""Template identifiers and the template catalog shown to operators."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class TemplateId(str, Enum):
    """Enumeration of the menu templates a branch can publish with."""

    DEFAULT = "default"
    RUSTIC_WOOD = "rustic-wood"
    ELEGANT_MINIMAL = "elegant-minimal"
    FAST_FOOD_DARK = "fast-food-dark"
    PLAYFUL_CREAM = "playful-cream"
    HELLO_CHICKEN = "hello-chicken"

    @classmethod
    def parse(cls, value: Any) -> "TemplateId":
        """Parse a stored or requested template identifier.

        Unknown, empty and missing identifiers fall back to DEFAULT.

        Args:
            value: Raw template identifier

        Returns:
            TemplateId: The matching template, or DEFAULT
        """
        if value is None:
            return cls.DEFAULT

        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.DEFAULT

    @classmethod
    def is_known(cls, value: Any) -> bool:
        """Check whether a value names one of the templates exactly."""
        return isinstance(value, str) and value in {template.value for template in cls}


class TemplateInfo(BaseModel):
    """Display metadata for a template in the admin picker."""

    id: TemplateId = Field(..., description="Template identifier")
    name: str = Field(..., description="Human-readable template name")
    description: str = Field(..., description="Short description of the look")


TEMPLATE_CATALOG: list[TemplateInfo] = [
    TemplateInfo(id=TemplateId.DEFAULT, name="Default", description="Clean modern layout"),
    TemplateInfo(
        id=TemplateId.RUSTIC_WOOD,
        name="Rustic Wood",
        description="Wood texture with gold accents",
    ),
    TemplateInfo(
        id=TemplateId.ELEGANT_MINIMAL,
        name="Elegant Minimal",
        description="Clean cream with serif fonts",
    ),
    TemplateInfo(
        id=TemplateId.FAST_FOOD_DARK,
        name="Fast Food Dark",
        description="Dark theme with orange accents",
    ),
    TemplateInfo(
        id=TemplateId.PLAYFUL_CREAM,
        name="Playful Cream",
        description="Colorful and fun design",
    ),
    TemplateInfo(
        id=TemplateId.HELLO_CHICKEN,
        name="Hello Chicken",
        description="Red bold style, Arabic friendly",
    ),
]
