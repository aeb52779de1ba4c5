"""FastAPI integration for storefront-catalog."""

from .app import create_app
from .dependencies import get_catalog, get_enquiries, get_products
from .errors import install_error_handlers
from .routers import build_enquiries_router, build_products_router

__all__: list[str] = [
    # App
    "create_app",
    "install_error_handlers",
    # Routers
    "build_products_router",
    "build_enquiries_router",
    # Dependencies
    "get_catalog",
    "get_products",
    "get_enquiries",
]
