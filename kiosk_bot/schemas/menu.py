"""
Menu and Category Schemas for Kiosk Bot
=======================================

Pydantic models for browsing the menu and for the admin menu/category CRUD
endpoints.

Endpoint Coverage:
------------------
- GET /menu/categories, GET /menu/items
- POST/PUT/DELETE /admin/menu/items[/{id}]
- POST/PUT/DELETE /admin/menu/categories[/{id}]

Validation:
-----------
- Names must not be blank
- Prices are whole 원 amounts greater than zero
- Category display order is a positive integer
- The referenced category must exist (checked by the route, 400 otherwise)

Ids are generated by the server on create and never change afterwards.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    order: int


class CategoryCreate(BaseModel):
    name: str
    order: int = Field(gt=0)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _not_blank(value)


class CategoryUpdate(BaseModel):
    """Partial update; omitted fields keep their value."""
    name: Optional[str] = None
    order: Optional[int] = Field(default=None, gt=0)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: Optional[str]) -> Optional[str]:
        return _not_blank(value) if value is not None else None


class MenuItemOut(BaseModel):
    """
    Response model for menu item data.

    Attributes:
        id: Stable item id
        name: Primary (Korean) display name
        name_en: Secondary (English) name, also used for voice matching
        price: Price in 원
        category: Category id
        available: False while sold out
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    name_en: Optional[str] = None
    description: str = ""
    price: int
    category: str
    available: bool
    image: Optional[str] = None


class MenuItemCreate(BaseModel):
    """
    Request model for creating a menu item.

    Example:
        {
            "name": "새우버거",
            "name_en": "Shrimp Burger",
            "description": "통새우 패티 버거",
            "price": 9000,
            "category": "1"
        }
    """
    name: str
    name_en: Optional[str] = None
    description: str = ""
    price: int = Field(gt=0)
    category: str
    available: bool = True
    image: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _not_blank(value)


class MenuItemUpdate(BaseModel):
    """Partial update; omitted fields keep their value. The id never changes."""
    name: Optional[str] = None
    name_en: Optional[str] = None
    description: Optional[str] = None
    price: Optional[int] = Field(default=None, gt=0)
    category: Optional[str] = None
    available: Optional[bool] = None
    image: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value: Optional[str]) -> Optional[str]:
        return _not_blank(value) if value is not None else None


class CategoryDeleteResponse(BaseModel):
    """Result of a cascading category delete."""
    deleted_category_id: str
    deleted_menu_item_ids: list[str]
