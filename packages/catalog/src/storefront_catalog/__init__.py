"""storefront-catalog — Product and enquiry query services.

Records, resource declarations, query execution, dashboard reports and the
resource services built on them. The FastAPI integration lives in
``storefront_catalog.contrib.fastapi``.
"""

from __future__ import annotations

from .bootstrap import Catalog, build_catalog, ensure_indexes, in_memory_catalog, mongo_catalog
from .enums import EnquirySource, EnquiryStatus, Priority, StockStatus, values_of
from .exceptions import InvalidRequestError
from .executor import PageResult, QueryExecutor
from .export import enquiries_to_csv
from .models import Enquiry, Product, Ratings
from .records import (
    STOCK_STATUS_RANGES,
    add_rating,
    apply_changes,
    full_address,
    mark_completed,
    stock_status,
)
from .reporting import (
    AggregationReporter,
    EnquiryReports,
    EnquiryStats,
    ProductReports,
    ProductStats,
)
from .resources import ENQUIRIES, PRODUCTS, Resource
from .services import EnquiryService, ProductService, RecordService
from .settings import Settings, get_settings

__all__ = [
    # Enumerations
    "EnquirySource",
    "EnquiryStatus",
    "Priority",
    "StockStatus",
    "values_of",
    # Records
    "Enquiry",
    "Product",
    "Ratings",
    "STOCK_STATUS_RANGES",
    "add_rating",
    "apply_changes",
    "full_address",
    "mark_completed",
    "stock_status",
    # Resources
    "ENQUIRIES",
    "PRODUCTS",
    "Resource",
    # Engine
    "AggregationReporter",
    "EnquiryReports",
    "EnquiryStats",
    "PageResult",
    "ProductReports",
    "ProductStats",
    "QueryExecutor",
    # Services
    "EnquiryService",
    "ProductService",
    "RecordService",
    "enquiries_to_csv",
    # Wiring
    "Catalog",
    "Settings",
    "build_catalog",
    "ensure_indexes",
    "get_settings",
    "in_memory_catalog",
    "mongo_catalog",
    # Errors
    "InvalidRequestError",
]
