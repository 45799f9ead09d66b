# storefront/services/notify.py

import asyncio

# Шаблоны уведомлений по коду события
TEMPLATES = {
    "ORDPRCS": "Order {order_id} is being processed (qty: {qty})",
    "ORDPYMT": "Payment received for order {order_id} (qty: {qty})",
    "PRDDISP": "Order {order_id} has been dispatched",
    "PRDAD": "New product {product_id} '{product_name}' added: qty {qty}, price {price}",
    "CMTPST": "User {user_id} posted a comment on {product_id}",
}
DEFAULT_TEMPLATE = "Event {event}"


class _Missing(dict):
    def __missing__(self, key):
        return "-"


class Notifier:
    """
    Отправка уведомлений «выстрелил и забыл».

    send() не ждёт доставки: сообщение уходит фоновой задачей, ошибки доставки
    только логируются. Доставка не более одного раза, без повторов.
    """

    def __init__(self, log=None, enabled: bool = True):
        self.log = log
        self.enabled = enabled
        self._tasks: set[asyncio.Task] = set()

    def render(self, event: str, payload: dict) -> str:
        template = TEMPLATES.get(event, DEFAULT_TEMPLATE)
        return template.format_map(_Missing(payload, event=event))

    def send(self, event: str, payload: dict) -> asyncio.Task | None:
        if not self.enabled:
            return None
        task = asyncio.create_task(self._dispatch(event, dict(payload)))
        # держим ссылку, пока задача не завершится
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _dispatch(self, event: str, payload: dict):
        try:
            message = self.render(event, payload)
            await self.deliver(event, message, payload)
        except Exception as e:
            if self.log:
                await self.log.log_error("notify", f"Уведомление не отправлено: {e}", {"event": event})

    async def deliver(self, event: str, message: str, payload: dict):
        """Канал доставки. По умолчанию пишет в лог приложения."""
        if self.log:
            await self.log.log_info("notify", message, {"event": event, **payload})

    async def drain(self):
        """Дожидается всех ещё не отправленных уведомлений."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
