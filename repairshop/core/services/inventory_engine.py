"""
Inventory transaction engine.

Owns every change to a product's ``quantity`` and ``average_cost``. Each flow
runs against an ``IStockLedger`` that the caller opened as one write
transaction; all validation happens before the first write, so a raised
exception leaves nothing behind once the transaction rolls back.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from repairshop.config import get_logger
from repairshop.core.clock import as_local_naive
from repairshop.core.entities.catalog import Product
from repairshop.core.entities.purchase import PurchaseRecord
from repairshop.core.entities.repair import Repair, RepairUsedPart
from repairshop.core.entities.sale import Sale, SaleItem
from repairshop.core.exceptions import (
    CustomerNotFoundError,
    InsufficientStockError,
    InvalidArgumentError,
    ProductNotFoundError,
)
from repairshop.core.interfaces.stock_ledger import IStockLedger
from repairshop.core.money import ZERO, to_decimal
from repairshop.core.services.costing import next_average_cost

logger = get_logger(__name__)

# Per-line cap for purchases, sales and used parts
MAX_LINE_QUANTITY = 1_000_000_000
# SQLite INTEGER is a signed 64-bit value
MAX_STOCK_QUANTITY = 2**63 - 1


@dataclass(frozen=True)
class StockLine:
    """A requested withdrawal: product and positive quantity."""

    product_id: int
    quantity: int


@dataclass
class ReceiptOutcome:
    """Purchase record plus the product's stock state after the purchase."""

    record: PurchaseRecord
    product: Product


class InventoryEngine:
    """Purchase, sale and repair flows over a transactional stock ledger."""

    async def receive(
        self,
        ledger: IStockLedger,
        product_id: int,
        quantity: int,
        cost_per_unit: Decimal,
        purchase_date: datetime | None = None,
    ) -> ReceiptOutcome:
        """Record a purchase and re-cost the product."""
        cost_per_unit = to_decimal(cost_per_unit)
        _require_positive("quantity", quantity)
        if cost_per_unit < 0:
            raise InvalidArgumentError("cost_per_unit", "must be >= 0", cost_per_unit)

        product = await ledger.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        new_average = next_average_cost(
            product.quantity, product.average_cost, quantity, cost_per_unit
        )
        new_quantity = product.quantity + quantity
        if new_quantity > MAX_STOCK_QUANTITY:
            raise InvalidArgumentError(
                "quantity", "stock on hand would exceed the storable maximum", new_quantity
            )

        record = await ledger.add_purchase(
            PurchaseRecord(
                product_id=product_id,
                quantity=quantity,
                cost_per_unit=cost_per_unit,
                purchase_date=as_local_naive(purchase_date) if purchase_date else datetime.now(),
                product_name=product.name,
            )
        )
        await ledger.set_stock(product_id, new_quantity, new_average)

        logger.info(
            "purchase_recorded",
            product_id=product_id,
            quantity=quantity,
            old_qty=product.quantity,
            new_qty=new_quantity,
            new_avg=str(new_average),
        )

        product.quantity = new_quantity
        product.average_cost = new_average
        return ReceiptOutcome(record=record, product=product)

    async def sell(
        self,
        ledger: IStockLedger,
        customer_id: int,
        lines: list[StockLine],
        sale_date: datetime | None = None,
    ) -> Sale:
        """Create a sale, snapshot price and cost per line, and deduct stock."""
        products = await self._reserve(ledger, lines, "items")
        await self._require_customer(ledger, customer_id)

        items = [
            SaleItem(
                product_id=line.product_id,
                quantity=line.quantity,
                price_at_time=products[line.product_id].sale_price,
                cost_at_time=products[line.product_id].average_cost,
                product_name=products[line.product_id].name,
            )
            for line in lines
        ]
        total_amount = sum((i.line_revenue for i in items), ZERO)
        total_cost = sum((i.line_cost for i in items), ZERO)

        sale = await ledger.add_sale(
            Sale(
                customer_id=customer_id,
                total_amount=total_amount,
                total_cost=total_cost,
                items=items,
                created_at=as_local_naive(sale_date) if sale_date else datetime.now(),
            )
        )
        await self._withdraw(ledger, products, lines)

        logger.info(
            "sale_created",
            sale_id=sale.id,
            lines=len(lines),
            total_amount=str(total_amount),
            total_cost=str(total_cost),
        )
        return sale

    async def consume_for_repair(
        self,
        ledger: IStockLedger,
        customer_id: int,
        description: str,
        total_cost: Decimal,
        lines: list[StockLine],
    ) -> Repair:
        """Create a repair, cost its parts at average cost, and deduct stock."""
        total_cost = to_decimal(total_cost)
        if not description or not description.strip():
            raise InvalidArgumentError("description", "job description is required")
        if total_cost <= 0:
            raise InvalidArgumentError("total_cost", "must be positive", total_cost)

        products = await self._reserve(ledger, lines, "used_parts")
        await self._require_customer(ledger, customer_id)

        parts = [
            RepairUsedPart(
                product_id=line.product_id,
                quantity=line.quantity,
                cost_at_time=products[line.product_id].average_cost,
                product_name=products[line.product_id].name,
            )
            for line in lines
        ]
        parts_cost = sum((p.line_cost for p in parts), ZERO)
        # Not clamped: a job priced below its parts yields negative labor
        labor_cost = total_cost - parts_cost

        repair = await ledger.add_repair(
            Repair(
                customer_id=customer_id,
                description=description,
                total_cost=total_cost,
                parts_cost=parts_cost,
                labor_cost=labor_cost,
                used_parts=parts,
            )
        )
        await self._withdraw(ledger, products, lines)

        if labor_cost < 0:
            logger.warning(
                "repair_priced_below_parts",
                repair_id=repair.id,
                total_cost=str(total_cost),
                parts_cost=str(parts_cost),
            )
        logger.info(
            "repair_created",
            repair_id=repair.id,
            parts=len(lines),
            parts_cost=str(parts_cost),
            labor_cost=str(labor_cost),
        )
        return repair

    async def _reserve(
        self, ledger: IStockLedger, lines: list[StockLine], field: str
    ) -> dict[int, Product]:
        """Batch-load the products for ``lines`` and check every line has stock."""
        if not lines:
            raise InvalidArgumentError(field, "at least one line is required")
        for line in lines:
            _require_positive("quantity", line.quantity)

        requested: dict[int, int] = defaultdict(int)
        for line in lines:
            requested[line.product_id] += line.quantity

        products = await ledger.get_products(list(requested))
        for product_id in requested:
            if product_id not in products:
                raise ProductNotFoundError(product_id)

        for product_id, quantity in requested.items():
            product = products[product_id]
            if product.quantity < quantity:
                logger.info(
                    "insufficient_stock",
                    product_id=product_id,
                    available=product.quantity,
                    requested=quantity,
                )
                raise InsufficientStockError(
                    product_id=product_id,
                    available=product.quantity,
                    requested=quantity,
                    product_name=product.name,
                )
        return products

    @staticmethod
    async def _require_customer(ledger: IStockLedger, customer_id: int) -> None:
        if not await ledger.customer_exists(customer_id):
            raise CustomerNotFoundError(customer_id)

    @staticmethod
    async def _withdraw(
        ledger: IStockLedger, products: dict[int, Product], lines: list[StockLine]
    ) -> None:
        """Decrement stock per line; the guarded update is the last line of defence."""
        for line in lines:
            if not await ledger.withdraw_stock(line.product_id, line.quantity):
                product = products[line.product_id]
                raise InsufficientStockError(
                    product_id=line.product_id,
                    available=product.quantity,
                    requested=line.quantity,
                    product_name=product.name,
                )
            products[line.product_id].quantity -= line.quantity


def _require_positive(field: str, value: int) -> None:
    if value <= 0:
        raise InvalidArgumentError(field, "must be a positive integer", value)
    if value > MAX_LINE_QUANTITY:
        raise InvalidArgumentError(field, f"must not exceed {MAX_LINE_QUANTITY}", value)
