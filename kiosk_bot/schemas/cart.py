"""
Cart Schemas for Kiosk Bot
==========================

Request and response models for the customer cart endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .menu import MenuItemOut


class CartLineOut(BaseModel):
    menu_item: MenuItemOut
    quantity: int
    special_instructions: Optional[str] = None
    subtotal: int


class CartOut(BaseModel):
    items: list[CartLineOut]
    item_count: int
    total: int


class CartItemAdd(BaseModel):
    menu_item_id: str
    quantity: int = Field(default=1, gt=0)
    special_instructions: Optional[str] = None


class CartItemUpdate(BaseModel):
    """Zero or a negative quantity removes the line."""
    quantity: int
