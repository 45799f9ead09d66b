# tests/test_notify.py

from storefront.services.notify import Notifier


class FakeLog:
    def __init__(self):
        self.info = []
        self.errors = []

    async def log_info(self, target, message, data=None, is_console=None):
        self.info.append((target, message, data))

    async def log_error(self, target, message, data=None, is_console=True):
        self.errors.append((target, message, data))


def test_render_known_events():
    notifier = Notifier()

    assert notifier.render("ORDPRCS", {"order_id": "RAYA/2025/ORD/0001", "qty": 2}) == \
        "Order RAYA/2025/ORD/0001 is being processed (qty: 2)"
    assert notifier.render("PRDDISP", {"order_id": "RAYA/2025/ORD/0003"}) == \
        "Order RAYA/2025/ORD/0003 has been dispatched"


def test_render_missing_values_and_unknown_event():
    notifier = Notifier()

    assert notifier.render("ORDPYMT", {"order_id": "X"}) == "Payment received for order X (qty: -)"
    assert notifier.render("NEWCODE", {}) == "Event NEWCODE"


async def test_send_delivers_in_background():
    log = FakeLog()
    notifier = Notifier(log=log)

    task = notifier.send("PRDAD", {"product_id": "P1", "product_name": "Ring", "qty": 3, "price": 250})
    assert task is not None
    await notifier.drain()

    assert log.info == [(
        "notify",
        "New product P1 'Ring' added: qty 3, price 250",
        {"event": "PRDAD", "product_id": "P1", "product_name": "Ring", "qty": 3, "price": 250},
    )]


async def test_delivery_failure_is_logged_not_raised():
    log = FakeLog()

    class BrokenNotifier(Notifier):
        async def deliver(self, event, message, payload):
            raise ConnectionError("gateway down")

    notifier = BrokenNotifier(log=log)
    notifier.send("CMTPST", {"user_id": "u", "product_id": "P1"})
    await notifier.drain()

    assert len(log.errors) == 1
    assert "gateway down" in log.errors[0][1]
    assert log.errors[0][2] == {"event": "CMTPST"}


async def test_disabled_notifier_sends_nothing():
    log = FakeLog()
    notifier = Notifier(log=log, enabled=False)

    assert notifier.send("ORDPRCS", {"order_id": "X", "qty": 1}) is None
    await notifier.drain()
    assert log.info == []
