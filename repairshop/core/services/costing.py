"""Weighted-average (moving average) cost recurrence."""

from decimal import Decimal

from repairshop.core.exceptions import InvalidArgumentError
from repairshop.core.money import to_decimal


def next_average_cost(
    current_quantity: int,
    current_average_cost: Decimal | int | float | str,
    incoming_quantity: int,
    incoming_cost_per_unit: Decimal | int | float | str,
) -> Decimal:
    """Blend an incoming batch into the current unit cost.

    With nothing on hand the batch cost is taken as-is, which also resets the
    cost basis once stock has been fully depleted. Otherwise the result is
    the quantity-weighted mean of the two costs and always lies between them.

    Args:
        current_quantity: Units on hand before the purchase (>= 0)
        current_average_cost: Current weighted average unit cost (>= 0)
        incoming_quantity: Units purchased (> 0)
        incoming_cost_per_unit: Price paid per purchased unit (>= 0)

    Returns:
        New average unit cost at full Decimal precision

    Raises:
        InvalidArgumentError: On negative quantities/costs or a non-positive
            incoming quantity
    """
    current_cost = to_decimal(current_average_cost)
    incoming_cost = to_decimal(incoming_cost_per_unit)

    if current_quantity < 0:
        raise InvalidArgumentError("current_quantity", "must be >= 0", current_quantity)
    if current_cost < 0:
        raise InvalidArgumentError("current_average_cost", "must be >= 0", current_cost)
    if incoming_quantity <= 0:
        raise InvalidArgumentError("quantity", "must be a positive integer", incoming_quantity)
    if incoming_cost < 0:
        raise InvalidArgumentError("cost_per_unit", "must be >= 0", incoming_cost)

    if current_quantity == 0:
        return incoming_cost

    total_value = current_quantity * current_cost + incoming_quantity * incoming_cost
    return total_value / (current_quantity + incoming_quantity)
