"""
Command Executor.

Applies a fully resolved VoiceCommand to the kiosk store and builds the
response sentence. Lookup misses are reported per item in the response and
never stop sibling items from being processed.
"""

import logging

from ..store.kiosk import KioskStore
from ..store.models import MenuItem
from . import messages
from .schemas import ExecutionResult, OrderLine, VoiceCommand, VoiceIntent

logger = logging.getLogger(__name__)


class CommandExecutor:
    """Executes resolved voice commands against a KioskStore."""

    def __init__(self, kiosk: KioskStore):
        self._kiosk = kiosk

    def execute(self, command: VoiceCommand) -> ExecutionResult:
        intent = command.intent
        logger.info("Executing %s (entity=%s, items=%d)", intent.value, command.entity, len(command.items))

        if intent == VoiceIntent.ADD_ITEM:
            if command.items:
                return self._add_items(command.items)
            if command.entity:
                return self._add_items([OrderLine(name=command.entity, quantity=command.quantity)])
            return ExecutionResult(message=messages.UNKNOWN_COMMAND)

        if intent == VoiceIntent.REMOVE_ITEM:
            return self._remove_item(command.entity)

        if intent == VoiceIntent.SHOW_MENU:
            return self._show_menu()

        if intent == VoiceIntent.CHECKOUT:
            return self._checkout()

        if intent == VoiceIntent.HELP:
            return ExecutionResult(message=messages.HELP, show_help=True)

        return ExecutionResult(message=messages.UNKNOWN_COMMAND)

    def _add_items(self, lines: list[OrderLine]) -> ExecutionResult:
        catalog = self._kiosk.catalog
        cart = self._kiosk.cart

        added: list[str] = []
        sold_out: list[str] = []
        not_found: list[str] = []

        for line in lines:
            item: MenuItem | None = catalog.find_by_id_or_name(line.name)
            if item is None:
                not_found.append(line.name)
            elif not item.available:
                sold_out.append(item.name)
            else:
                cart.add_item(item, line.quantity)
                added.append(f"{item.name} {line.quantity}개")

        if not_found:
            logger.info("Voice add: not found %s", not_found)
        if sold_out:
            logger.info("Voice add: sold out %s", sold_out)

        parts = []
        if added:
            parts.append(messages.added(added))
        if sold_out:
            parts.append(messages.sold_out(sold_out))
        if not_found:
            parts.append(messages.not_found(not_found))

        return ExecutionResult(message="\n".join(parts), cart_total=cart.subtotal())

    def _remove_item(self, entity: str | None) -> ExecutionResult:
        if not entity:
            return ExecutionResult(message=messages.UNKNOWN_COMMAND)

        cart = self._kiosk.cart
        line = cart.find_line(entity)
        if line is None:
            return ExecutionResult(message=messages.not_in_cart(entity), cart_total=cart.subtotal())

        cart.remove_item(line.menu_item.id)
        return ExecutionResult(message=messages.removed(line.menu_item.name), cart_total=cart.subtotal())

    def _show_menu(self) -> ExecutionResult:
        names = [item.name for item in self._kiosk.catalog.available_items()]
        return ExecutionResult(message=messages.menu_listing(names))

    def _checkout(self) -> ExecutionResult:
        cart = self._kiosk.cart
        lines = cart.lines
        if not lines:
            return ExecutionResult(message=messages.EMPTY_CART, cart_total=0)
        total = cart.subtotal()
        return ExecutionResult(message=messages.checkout_summary(len(lines), total), cart_total=total)
