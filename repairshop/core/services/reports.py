"""
Monthly report assembly.

Turns a month of sales or repairs into report data with totals, and defines
the renderer interface the PDF infrastructure implements.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from repairshop.core.entities.business_profile import BusinessProfile
from repairshop.core.entities.repair import Repair
from repairshop.core.entities.sale import Sale
from repairshop.core.exceptions import InvalidArgumentError
from repairshop.core.money import ZERO

MIN_REPORT_YEAR = 2000
MAX_REPORT_YEAR = 2100


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """First instant of the month and first instant of the next one."""
    if not 1 <= month <= 12:
        raise InvalidArgumentError("month", "must be between 1 and 12", month)
    if not MIN_REPORT_YEAR <= year <= MAX_REPORT_YEAR:
        raise InvalidArgumentError(
            "year", f"must be between {MIN_REPORT_YEAR} and {MAX_REPORT_YEAR}", year
        )
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return start, end


@dataclass
class SalesReportData:
    year: int
    month: int
    sales: list[Sale] = field(default_factory=list)

    @property
    def total_revenue(self) -> Decimal:
        return sum((s.total_amount for s in self.sales), ZERO)

    @property
    def total_transactions(self) -> int:
        return len(self.sales)

    @property
    def filename(self) -> str:
        return f"sales-report-{self.year}-{self.month:02d}.pdf"


@dataclass
class RepairsReportData:
    year: int
    month: int
    repairs: list[Repair] = field(default_factory=list)

    @property
    def total_revenue(self) -> Decimal:
        return sum((r.total_cost for r in self.repairs), ZERO)

    @property
    def total_parts_cost(self) -> Decimal:
        return sum((r.parts_cost for r in self.repairs), ZERO)

    @property
    def gross_profit(self) -> Decimal:
        """Revenue less parts; labor is the shop's margin."""
        return self.total_revenue - self.total_parts_cost

    @property
    def total_repairs(self) -> int:
        return len(self.repairs)

    @property
    def filename(self) -> str:
        return f"repairs-report-{self.year}-{self.month:02d}.pdf"


class IReportRenderer(ABC):
    """Interface for monthly report PDF rendering."""

    @abstractmethod
    def render_sales(
        self, report: SalesReportData, profile: BusinessProfile | None
    ) -> bytes:
        """Render a monthly sales report into PDF bytes."""
        ...

    @abstractmethod
    def render_repairs(
        self, report: RepairsReportData, profile: BusinessProfile | None
    ) -> bytes:
        """Render a monthly repairs report into PDF bytes."""
        ...
