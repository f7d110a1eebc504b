"""Service (kit) costing from its bill of materials and labor."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from hvacdesk.models import InventoryItem, Service, ServiceItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceCost:
    materials_cost: Decimal
    labor_cost: Decimal
    total_price: Decimal


def _price_index(inventory: Iterable[InventoryItem]) -> dict[str, Decimal]:
    return {item.id: item.unit_price for item in inventory}


def compute_materials_cost(
    bom: Iterable[ServiceItem], inventory: Iterable[InventoryItem]
) -> Decimal:
    """Sum of unit price x quantity over the bill of materials.

    Lines pointing at inventory items that no longer exist contribute 0.
    """
    prices = _price_index(inventory)
    total = Decimal("0")
    for line in bom:
        unit_price = prices.get(line.inventory_item_id)
        if unit_price is None:
            logger.debug(f"Ignoring unknown inventory item {line.inventory_item_id}")
            continue
        total += unit_price * line.quantity
    return total


def compute_service_price(
    bom: Iterable[ServiceItem],
    labor_cost: Decimal,
    inventory: Iterable[InventoryItem],
) -> ServiceCost:
    materials = compute_materials_cost(bom, inventory)
    return ServiceCost(
        materials_cost=materials,
        labor_cost=labor_cost,
        total_price=materials + labor_cost,
    )


def set_bom_quantity(
    bom: Sequence[ServiceItem], inventory_item_id: str, quantity: Decimal
) -> list[ServiceItem]:
    """Return a new bill of materials with one line's quantity set.

    - quantity <= 0 removes the line (zero lines are never stored)
    - an existing line keeps its position and takes the new quantity
    - a missing line is appended only when quantity > 0
    """
    quantity = Decimal(quantity)
    present = any(line.inventory_item_id == inventory_item_id for line in bom)

    if quantity <= 0:
        return [line for line in bom if line.inventory_item_id != inventory_item_id]

    if present:
        return [
            ServiceItem(inventory_item_id=inventory_item_id, quantity=quantity)
            if line.inventory_item_id == inventory_item_id
            else line
            for line in bom
        ]

    return [*bom, ServiceItem(inventory_item_id=inventory_item_id, quantity=quantity)]


def normalize_bom(bom: Iterable[ServiceItem]) -> list[ServiceItem]:
    """Collapse duplicate lines (first position, last quantity) and drop empty ones."""
    result: list[ServiceItem] = []
    for line in bom:
        result = set_bom_quantity(result, line.inventory_item_id, line.quantity)
    return result


def price_service(service: Service, inventory: Iterable[InventoryItem]) -> Service:
    """Return ``service`` with a clean bill of materials and fresh total price."""
    bom = normalize_bom(service.items)
    cost = compute_service_price(bom, service.labor_cost, inventory)
    return service.model_copy(update={"items": bom, "total_price": cost.total_price})
