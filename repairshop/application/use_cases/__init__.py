"""Application use cases."""

from repairshop.application.use_cases.create_repair import CreateRepairUseCase
from repairshop.application.use_cases.create_sale import CreateSaleUseCase
from repairshop.application.use_cases.customer_history import (
    CustomerHistory,
    GetCustomerHistoryUseCase,
)
from repairshop.application.use_cases.generate_monthly_report import (
    GenerateMonthlyReportUseCase,
    ReportResult,
)
from repairshop.application.use_cases.manage_products import ManageProductsUseCase
from repairshop.application.use_cases.record_purchase import (
    RecordPurchaseResult,
    RecordPurchaseUseCase,
)
from repairshop.application.use_cases.save_business_profile import SaveBusinessProfileUseCase

__all__ = [
    "CreateRepairUseCase",
    "CreateSaleUseCase",
    "CustomerHistory",
    "GetCustomerHistoryUseCase",
    "GenerateMonthlyReportUseCase",
    "ManageProductsUseCase",
    "RecordPurchaseResult",
    "RecordPurchaseUseCase",
    "ReportResult",
    "SaveBusinessProfileUseCase",
]
