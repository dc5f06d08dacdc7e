"""
Admin Menu Routes for Kiosk Bot
===============================

Endpoints for maintaining the catalog: menu items and the categories they
belong to. Every change is saved to the database by the catalog listener the
repository registers on the kiosk store, so nothing here touches the
database directly.

Endpoints:
----------
- POST /admin/menu/items: Create a menu item
- PUT /admin/menu/items/{id}: Update a menu item (partial; id never changes)
- DELETE /admin/menu/items/{id}: Delete a menu item
- POST /admin/menu/categories: Create a category
- PUT /admin/menu/categories/{id}: Update a category
- DELETE /admin/menu/categories/{id}: Delete a category and all its items

Authentication:
---------------
All endpoints require admin authentication via HTTP Basic Auth.
See auth.py for credential verification.

Usage:
------
    # Mark an item sold out
    PUT /admin/menu/items/4
    {"available": false}

    # Add a category shown after the existing four
    POST /admin/menu/categories
    {"name": "세트 메뉴", "order": 5}
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..auth import verify_admin_credentials
from ..context import KioskContext, get_context
from ..schemas.menu import (
    CategoryCreate,
    CategoryDeleteResponse,
    CategoryOut,
    CategoryUpdate,
    MenuItemCreate,
    MenuItemOut,
    MenuItemUpdate,
)
from ..store.catalog import CatalogError
from ..store.models import Category, MenuItem, generate_id
from .menu import serialize_category, serialize_menu_item


logger = logging.getLogger(__name__)

# Router definition
admin_menu_router = APIRouter(prefix="/admin/menu", tags=["Admin - Menu"])


# =============================================================================
# Menu Item Endpoints
# =============================================================================

@admin_menu_router.post("/items", response_model=MenuItemOut, status_code=201)
async def create_menu_item(
    payload: MenuItemCreate,
    ctx: KioskContext = Depends(get_context),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItemOut:
    """Create a new menu item. The id is assigned by the server."""
    item = MenuItem(id=generate_id(), **payload.model_dump())
    try:
        ctx.kiosk.catalog.add_item(item)
    except CatalogError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return serialize_menu_item(item)


@admin_menu_router.put("/items/{item_id}", response_model=MenuItemOut)
async def update_menu_item(
    item_id: str,
    payload: MenuItemUpdate,
    ctx: KioskContext = Depends(get_context),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItemOut:
    catalog = ctx.kiosk.catalog
    item = catalog.get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")

    updated = item.model_copy(update=payload.model_dump(exclude_unset=True))
    if catalog.get_category(updated.category) is None:
        raise HTTPException(status_code=400, detail=f"Category {updated.category} not found")

    catalog.update_item(updated)
    return serialize_menu_item(updated)


@admin_menu_router.delete("/items/{item_id}", status_code=204)
async def delete_menu_item(
    item_id: str,
    ctx: KioskContext = Depends(get_context),
    _admin: str = Depends(verify_admin_credentials),
) -> None:
    try:
        ctx.kiosk.catalog.delete_item(item_id)
    except CatalogError:
        raise HTTPException(status_code=404, detail="Menu item not found")


# =============================================================================
# Category Endpoints
# =============================================================================

@admin_menu_router.post("/categories", response_model=CategoryOut, status_code=201)
async def create_category(
    payload: CategoryCreate,
    ctx: KioskContext = Depends(get_context),
    _admin: str = Depends(verify_admin_credentials),
) -> CategoryOut:
    category = Category(id=generate_id(), name=payload.name, order=payload.order)
    ctx.kiosk.catalog.add_category(category)
    return serialize_category(category)


@admin_menu_router.put("/categories/{category_id}", response_model=CategoryOut)
async def update_category(
    category_id: str,
    payload: CategoryUpdate,
    ctx: KioskContext = Depends(get_context),
    _admin: str = Depends(verify_admin_credentials),
) -> CategoryOut:
    category = ctx.kiosk.catalog.get_category(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")

    updated = category.model_copy(update=payload.model_dump(exclude_unset=True))
    ctx.kiosk.catalog.update_category(updated)
    return serialize_category(updated)


@admin_menu_router.delete("/categories/{category_id}", response_model=CategoryDeleteResponse)
async def delete_category(
    category_id: str,
    ctx: KioskContext = Depends(get_context),
    _admin: str = Depends(verify_admin_credentials),
) -> CategoryDeleteResponse:
    """Delete a category. Every menu item in it is deleted too."""
    try:
        removed = ctx.kiosk.catalog.delete_category(category_id)
    except CatalogError:
        raise HTTPException(status_code=404, detail="Category not found")
    return CategoryDeleteResponse(deleted_category_id=category_id, deleted_menu_item_ids=removed)
