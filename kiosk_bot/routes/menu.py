"""
Menu Routes for Kiosk Bot
=========================

Read-only endpoints the customer screen uses to render the menu.

Endpoints:
----------
- GET /menu/categories: Categories in display order
- GET /menu/items: Menu items, optionally filtered by category/availability
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..context import KioskContext, get_context
from ..schemas.menu import CategoryOut, MenuItemOut
from ..store.models import Category, MenuItem


logger = logging.getLogger(__name__)

# Router definition
menu_router = APIRouter(prefix="/menu", tags=["Menu"])


# =============================================================================
# Helper Functions
# =============================================================================

def serialize_category(category: Category) -> CategoryOut:
    return CategoryOut.model_validate(category)


def serialize_menu_item(item: MenuItem) -> MenuItemOut:
    """Convert a domain MenuItem to the response schema."""
    return MenuItemOut.model_validate(item)


# =============================================================================
# Menu Endpoints
# =============================================================================

@menu_router.get("/categories", response_model=List[CategoryOut])
async def list_categories(ctx: KioskContext = Depends(get_context)) -> List[CategoryOut]:
    return [serialize_category(c) for c in ctx.kiosk.catalog.list_categories()]


@menu_router.get("/items", response_model=List[MenuItemOut])
async def list_menu_items(
    category_id: Optional[str] = Query(None, description="Only items in this category"),
    available_only: bool = Query(False, description="Hide sold-out items"),
    ctx: KioskContext = Depends(get_context),
) -> List[MenuItemOut]:
    items = ctx.kiosk.catalog.list_menu_items(category_id=category_id, available_only=available_only)
    return [serialize_menu_item(i) for i in items]
