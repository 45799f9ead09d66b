# tests/conftest.py

import os
import tempfile

# окружение до импорта приложения: settings и engine читаются при импорте
_TMP = tempfile.mkdtemp(prefix="storefront-test-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP, 'test.db')}"
os.environ["LOG_DIR"] = os.path.join(_TMP, "log")
os.environ["LOG_PRINT"] = "0"
os.environ["ID_PREFIX"] = "RAYA"

import pytest
from types import SimpleNamespace
from httpx import AsyncClient, ASGITransport

from storefront.main import app
from storefront.services.notify import Notifier
from storefront.utils.database import init_db, drop_db, engine, AsyncSessionLocal
from storefront.utils.log import Log


class RecordingNotifier(Notifier):
    """Запоминает уведомления вместо фоновой отправки."""

    def __init__(self):
        super().__init__(log=None)
        self.sent = []

    def send(self, event, payload):
        self.sent.append((event, dict(payload)))
        return None

    @property
    def events(self):
        return [event for event, _ in self.sent]


@pytest.fixture
async def database():
    await drop_db()
    await init_db()
    yield
    await engine.dispose()


@pytest.fixture
async def log(tmp_path):
    log = Log(log_dir=str(tmp_path / "log"))
    yield log
    await log.shutdown()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def session(database):
    async with AsyncSessionLocal() as s:
        yield s


@pytest.fixture
def fake_request(session, log, notifier):
    """Объект с тем же интерфейсом, что сервисы берут из Request."""
    return SimpleNamespace(
        state=SimpleNamespace(db=session),
        app=SimpleNamespace(state=SimpleNamespace(log=log, notifier=notifier)),
    )


@pytest.fixture
async def client(database, log, notifier):
    app.state.log = log
    app.state.notifier = notifier
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_product(client):
    async def _make(**overrides):
        body = {
            "productName": "Silver Hoop Earrings",
            "description": "Anti-tarnish hoops",
            "collection": "Earrings",
            "normalPrice": 1200,
            "offerPrice": 999,
            "actualPrice": 800,
            "quantity": 10,
            "material": "Silver",
            "size": "M",
            "images": ["data:image/png;base64,AAAA", "https://cdn.example.com/hoop-2.png"],
        }
        body.update(overrides)
        response = await client.post("/product/create", json=body)
        assert response.status_code == 201, response.text
        code = response.json()["productId"]
        listing = (await client.get("/product/get/all")).json()["products"]
        return next(p for p in listing if p["productId"] == code)
    return _make


@pytest.fixture
def make_user(client):
    async def _make(name="Asha", email=None, phone="9876543210"):
        response = await client.post("/user/add", json={"name": name, "email": email, "phone": phone})
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def place_order(client):
    async def _place(product_id, customer_id, qty=2, **overrides):
        body = {
            "productId": product_id,
            "customerId": customer_id,
            "paymentType": "UPI",
            "qty": qty,
            "size": "M",
            "name": "Asha",
            "phone": "9876543210",
            "address": "12 MG Road",
            "city": "Kochi",
            "state": "Kerala",
            "zipCode": "682001",
        }
        body.update(overrides)
        response = await client.post("/order/add", json=body)
        assert response.status_code == 201, response.text
        return response.json()["orderID"]
    return _place


@pytest.fixture
def find_order(database):
    async def _find(order_code):
        from storefront.repositories.order import OrderRepository
        async with AsyncSessionLocal() as s:
            return await OrderRepository(s).get_by_order_code(order_code)
    return _find


@pytest.fixture
def stock(client):
    async def _stock(product_id):
        response = await client.get(f"/product/get/{product_id}")
        assert response.status_code == 200, response.text
        return response.json()["product"]["quantity"]
    return _stock
