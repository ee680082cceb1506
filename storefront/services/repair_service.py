from storefront.tasks.repair import cancel_orphan_order_task, purge_cart_lines_task
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class RepairService:
    """
    Schedules background repairs for writes that could not be finished or
    undone inside a request. Uses Celery so the retries outlive the request.
    """

    @staticmethod
    def schedule_order_cancellation(order_id: str, user_id: str) -> bool:
        try:
            cancel_orphan_order_task.delay(order_id, user_id)
        except Exception:
            logger.exception(
                f"Could not schedule cleanup of order {order_id} (user {user_id}), manual reconciliation required"
            )
            return False
        logger.info(f"Scheduled cleanup of order {order_id} for user {user_id}")
        return True

    @staticmethod
    def schedule_cart_purge(user_id: str, cart_item_ids: list[str]) -> bool:
        try:
            purge_cart_lines_task.delay(user_id, list(cart_item_ids))
        except Exception:
            logger.exception(f"Could not schedule purge of ordered cart lines of user {user_id}")
            return False
        logger.info(f"Scheduled purge of {len(cart_item_ids)} ordered cart lines of user {user_id}")
        return True
