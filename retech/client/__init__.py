# retech/client/__init__.py
from retech.client.cart import StorefrontCart
from retech.client.catalog import Catalog
from retech.client.checkout import Checkout, CheckoutValidationError
from retech.client.context import Identity, StorefrontContext
from retech.client.http import StorefrontClient, StorefrontError
from retech.client.local_store import LocalCartStore, RecentlyViewedStore
from retech.client.orders import AdminBackOffice, OrderHistory
from retech.client.query_cache import OptimisticUpdate, QueryCache
from retech.client.reconciliation import CartReconciler
from retech.client.server_cart import ServerCartAccessor
from retech.client.storage import JsonStorage

__all__ = [
    "AdminBackOffice",
    "CartReconciler",
    "Catalog",
    "Checkout",
    "CheckoutValidationError",
    "Identity",
    "JsonStorage",
    "LocalCartStore",
    "OptimisticUpdate",
    "OrderHistory",
    "QueryCache",
    "RecentlyViewedStore",
    "ServerCartAccessor",
    "StorefrontCart",
    "StorefrontClient",
    "StorefrontContext",
    "StorefrontError",
]
