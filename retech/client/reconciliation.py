# retech/client/reconciliation.py
from retech.client.http import StorefrontError
from retech.client.server_cart import ServerCartAccessor
from retech.utils.logging import get_logger

logger = get_logger(__name__)


class CartReconciler:
    """
    Moves the guest cart into the server cart after sign-in.

    Conflicts keep the local quantity (2 on the server + 3 locally -> 3).
    Lines are migrated one by one; a rejected line is skipped and the
    already migrated ones stay. The local cart is emptied once the attempt
    is over, whatever happened to individual lines.
    """

    def __init__(self, context):
        self.context = context
        self.server = ServerCartAccessor(context)
        self._done_for = None

    def should_run(self) -> bool:
        identity = self.context.identity
        return identity.authenticated and self._done_for != identity.user_id

    def reset(self) -> None:
        """Next sign-in is a new login transition."""
        self._done_for = None

    def reconcile(self) -> int:
        if not self.should_run():
            return 0

        user_id = self.context.identity.user_id
        # merging needs a loaded cart, a failure here keeps the local cart intact
        cart = self.server.ensure()

        if not self.context.local_cart.items:
            self._done_for = user_id
            return 0

        migrated = 0
        try:
            for line in list(self.context.local_cart.items):
                try:
                    self.context.api.upsert_cart_item(
                        user_id,
                        cart["id"],
                        line["productId"],
                        line["quantity"],
                        line["priceAtAdd"],
                    )
                    migrated += 1
                except StorefrontError as e:
                    logger.warning(
                        "Guest cart line rejected",
                        product_id=line["productId"],
                        user_id=user_id,
                        error=str(e),
                    )
        finally:
            self.context.local_cart.clear_cart()
            self.context.cache.invalidate(("cart",))
            self._done_for = user_id

        logger.info("Guest cart migrated", cart_id=cart["id"], lines=migrated)
        return migrated
