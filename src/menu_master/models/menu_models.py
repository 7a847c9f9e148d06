"""Restaurant, branch and menu item models.

These models are the boundary between untyped rows in the menu tables and the
typed domain used by the resolver, grouper and templates. Identifier and
category fields are coerced to strings on construction, so nothing downstream
has to care what type the store handed back.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, Field, field_validator

from menu_master.models.template_models import TemplateId
from menu_master.utils.normalize import normalize_to_string


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


class Restaurant(BaseModel):
    """Restaurant model, root of the menu hierarchy."""

    id: str = Field(..., description="Unique identifier for the restaurant")
    name: str = Field(..., description="Display name, any script", min_length=1)
    logo: str | None = Field(None, description="Logo image URL or storage key")
    created_at: datetime | None = Field(None, description="Creation timestamp")

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> str:
        """Coerce identifiers of any stored type to strings."""
        return normalize_to_string(v)

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "Restaurant":
        """Create Restaurant from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            Restaurant: Parsed model instance
        """
        return cls(
            id=item.get("id"),
            name=item.get("name"),
            logo=item.get("logo") or None,
            created_at=_parse_timestamp(item.get("created_at")),
        )


class Branch(BaseModel):
    """A single physical location of a restaurant.

    The branch is the unit a menu and its template are configured on.
    """

    id: str = Field(..., description="Unique identifier for the branch")
    restaurant_id: str = Field(..., description="Owning restaurant", min_length=1)
    name: str = Field(..., description="Display name", min_length=1)
    state: str = Field(..., description="State or region")
    location: str = Field(..., description="Street address or area")
    delivery_price: Decimal = Field(default=Decimal(0), description="Delivery fee", ge=0)
    whatsapp: str | None = Field(None, description="Contact number")
    image: str | None = Field(None, description="Branch image URL or storage key")
    active_template: str | None = Field(None, description="Selected template identifier")
    template_settings: dict[str, Any] = Field(
        default_factory=dict, description="Presentation parameters such as colors"
    )
    created_at: datetime | None = Field(None, description="Creation timestamp")

    @field_validator("id", "restaurant_id", mode="before")
    @classmethod
    def normalize_ids(cls, v: Any) -> str:
        """Coerce identifiers of any stored type to strings."""
        return normalize_to_string(v)

    @field_validator("delivery_price", mode="before")
    @classmethod
    def parse_delivery_price(cls, v: Any) -> Decimal:
        """Default missing or unparsable delivery prices to zero."""
        if v is None or isinstance(v, bool):
            return Decimal(0)
        try:
            price = Decimal(str(v).strip())
        except (InvalidOperation, ValueError):
            return Decimal(0)
        return price if price.is_finite() else Decimal(0)

    @field_validator("template_settings", mode="before")
    @classmethod
    def parse_template_settings(cls, v: Any) -> dict[str, Any]:
        """Treat missing or non-mapping settings as empty."""
        return dict(v) if isinstance(v, dict) else {}

    @property
    def template_id(self) -> TemplateId:
        """Template this branch renders with."""
        return TemplateId.parse(self.active_template)

    @property
    def has_custom_template(self) -> bool:
        """Whether a non-default template was explicitly chosen."""
        return self.template_id is not TemplateId.DEFAULT

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "Branch":
        """Create Branch from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            Branch: Parsed model instance
        """
        return cls(
            id=item.get("id"),
            restaurant_id=item.get("restaurant_id"),
            name=item.get("name"),
            state=item.get("state", ""),
            location=item.get("location", ""),
            delivery_price=item.get("delivery_price"),
            whatsapp=item.get("whatsapp") or None,
            image=item.get("image") or None,
            active_template=item.get("active_template") or None,
            template_settings=item.get("template_settings"),
            created_at=_parse_timestamp(item.get("created_at")),
        )


class MenuItem(BaseModel):
    """Menu item offered at a single branch."""

    id: str = Field(..., description="Unique identifier for the menu item")
    branch_id: str = Field(..., description="Branch this item belongs to", min_length=1)
    restaurant_id: str = Field(..., description="Restaurant of the owning branch", min_length=1)
    name: str = Field(..., description="Item name", min_length=1)
    price: Decimal = Field(..., description="Item price", ge=0)
    category: str = Field(..., description="Category label, e.g. 'Main Course'")
    image: str | None = Field(None, description="Item image URL or storage key")
    description: str | None = Field(None, description="Item description")
    created_at: datetime | None = Field(None, description="Creation timestamp")

    @field_validator("id", "branch_id", "restaurant_id", "category", mode="before")
    @classmethod
    def normalize_keys(cls, v: Any) -> str:
        """Coerce identifiers and category labels of any stored type to strings."""
        return normalize_to_string(v)

    def to_dynamodb_item(self) -> dict[str, Any]:
        """Convert to DynamoDB item format.

        Returns:
            dict: DynamoDB-compatible representation
        """
        item: dict[str, Any] = {
            "id": self.id,
            "branch_id": self.branch_id,
            "restaurant_id": self.restaurant_id,
            "name": self.name,
            "price": self.price,
            "category": self.category,
        }

        if self.image is not None:
            item["image"] = self.image

        if self.description is not None:
            item["description"] = self.description

        if self.created_at is not None:
            item["created_at"] = self.created_at.isoformat()

        return item

    @classmethod
    def from_dynamodb_item(cls, item: dict[str, Any]) -> "MenuItem":
        """Create MenuItem from DynamoDB item.

        Args:
            item: DynamoDB item dictionary

        Returns:
            MenuItem: Parsed model instance
        """
        return cls(
            id=item.get("id"),
            branch_id=item.get("branch_id"),
            restaurant_id=item.get("restaurant_id"),
            name=item.get("name"),
            price=item.get("price"),
            category=item.get("category"),
            image=item.get("image") or None,
            description=item.get("description") or None,
            created_at=_parse_timestamp(item.get("created_at")),
        )
