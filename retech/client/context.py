# retech/client/context.py
from dataclasses import dataclass

from retech.client.http import StorefrontClient
from retech.client.local_store import LocalCartStore, RecentlyViewedStore
from retech.client.query_cache import QueryCache
from retech.client.reconciliation import CartReconciler
from retech.client.storage import JsonStorage
from retech.utils.settings import LOCAL_STORAGE_DIR
from retech.utils.logging import get_logger

logger = get_logger(__name__)

# cached per identity, dropped whenever the identity changes
IDENTITY_SCOPED_KEYS = (("cart",), ("orders",), ("order",), ("admin-orders",), ("admin-products",))


@dataclass(frozen=True)
class Identity:
    user_id: int | None = None
    # display hint only, the API enforces the role on its own
    is_admin: bool = False

    @property
    def authenticated(self) -> bool:
        return self.user_id is not None


class StorefrontContext:
    """Everything one storefront session needs: API, cache, device storage and identity."""

    def __init__(
        self,
        api: StorefrontClient | None = None,
        cache: QueryCache | None = None,
        storage: JsonStorage | None = None,
    ):
        self.api = api or StorefrontClient()
        self.cache = cache or QueryCache()
        self.storage = storage or JsonStorage(LOCAL_STORAGE_DIR)
        self.local_cart = LocalCartStore(self.storage)
        self.recently_viewed = RecentlyViewedStore(self.storage)
        self.identity = Identity()
        self.reconciler = CartReconciler(self)

    def sign_in(self, user_id: int) -> Identity:
        if self.identity.user_id == user_id:
            return self.identity

        if self.identity.authenticated:
            self.sign_out()

        user = self.api.get_user(user_id)
        self.identity = Identity(user_id=user_id, is_admin=bool(user.get("is_admin")))
        logger.info(f"Signed in as user {user_id}")

        self.reconciler.reconcile()
        return self.identity

    def sign_out(self) -> None:
        logger.info(f"Signed out user {self.identity.user_id}")
        self.identity = Identity()
        self.reconciler.reset()
        for prefix in IDENTITY_SCOPED_KEYS:
            self.cache.invalidate(prefix)
