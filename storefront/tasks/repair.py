from storefront.celery_worker import celery_app
from storefront.data.backends import create_service_store
from storefront.domain.errors import DataUnavailable, WriteError
from storefront.domain.schemas import OrderStatus
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(
    name="storefront.tasks.repair.cancel_orphan_order_task",
    autoretry_for=(WriteError, DataUnavailable),
    retry_backoff=True,
    max_retries=5,
)
def cancel_orphan_order_task(order_id: str, user_id: str):
    """Remove an order whose line items were never written; cancel it if removal fails."""
    repo = OrderRepo(create_service_store())

    if repo.get_order(order_id, user_id) is None:
        logger.info(f"[REPAIR] Order {order_id} of user {user_id} already gone")
        return {"order_id": order_id, "action": "absent"}

    try:
        removed = repo.delete_order(order_id, user_id)
    except WriteError as e:
        logger.warning(f"[REPAIR] Could not delete order {order_id}, cancelling instead: {e}")
        removed = 0

    if removed:
        logger.info(f"[REPAIR] Order {order_id} of user {user_id} removed ({removed} rows)")
        return {"order_id": order_id, "action": "deleted"}

    if repo.update_order_status(order_id, user_id, OrderStatus.CANCELLED.value) is None:
        # picked up by autoretry_for
        raise WriteError("orders", "update", f"order {order_id} could not be removed or cancelled")

    logger.info(f"[REPAIR] Order {order_id} of user {user_id} marked cancelled")
    return {"order_id": order_id, "action": "cancelled"}


@celery_app.task(
    name="storefront.tasks.repair.purge_cart_lines_task",
    autoretry_for=(WriteError,),
    retry_backoff=True,
    max_retries=5,
)
def purge_cart_lines_task(user_id: str, cart_item_ids: list[str]):
    """Delete cart lines that were already ordered but survived the checkout."""
    removed = CartRepo(create_service_store()).delete_cart_items(user_id, cart_item_ids)
    logger.info(f"[REPAIR] Purged {removed} ordered cart lines of user {user_id}")
    return {"user_id": user_id, "removed": removed}
