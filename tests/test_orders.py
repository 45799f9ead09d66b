# tests/test_orders.py

from datetime import datetime

import pytest


async def test_place_order_does_not_touch_stock(client, make_product, make_user, place_order, find_order, stock):
    product = await make_product(quantity=10)
    user = await make_user()

    code = await place_order(product["id"], user["id"], qty=3)

    assert code == f"RAYA/{datetime.now().year}/ORD/0001"
    order = await find_order(code)
    assert order.order_status == "Processing"
    assert order.payment_status == "pending"
    assert order.is_complete is False
    assert order.qty == 3
    assert order.address_id is not None
    assert await stock(product["id"]) == 10


async def test_order_ids_increase(client, make_product, make_user, place_order):
    product = await make_product()
    user = await make_user()

    codes = [await place_order(product["id"], user["id"]) for _ in range(3)]

    assert [int(c.rsplit("/", 1)[-1]) for c in codes] == [1, 2, 3]


async def test_place_order_requires_product_and_customer(client):
    response = await client.post("/order/add", json={"qty": 1})

    assert response.status_code == 400
    assert response.json() == {"message": "Please fill all required fields"}


async def test_saved_address_is_listed(client, make_product, make_user, place_order):
    product = await make_product()
    user = await make_user()

    await place_order(product["id"], user["id"], saveAddress=True, city="Mysuru")
    await place_order(product["id"], user["id"], city="Not saved")

    response = await client.get(f"/user/address/{user['id']}")
    assert response.status_code == 200
    assert [a["city"] for a in response.json()] == ["Mysuru"]


async def test_existing_address_is_reused(client, make_product, make_user, place_order, find_order):
    product = await make_product()
    user = await make_user()
    first = await find_order(await place_order(product["id"], user["id"]))

    code = await place_order(product["id"], user["id"], addressId=first.address_id)

    assert (await find_order(code)).address_id == first.address_id


async def test_upi_payment_completes_order_and_deducts_once(
    client, notifier, make_product, make_user, place_order, find_order, stock
):
    product = await make_product(quantity=10)
    user = await make_user()
    code = await place_order(product["id"], user["id"], qty=4)

    response = await client.post("/order/gpay/payment/details", json={
        "orderId": code,
        "paymentType": "UPI",
        "screenshotBase64": "data:image/png;base64,QUJD",
        "screenshotName": "gpay.png",
    })

    assert response.status_code == 200
    assert response.json() == {"message": "Payment Request Completed Successfully..."}

    order = await find_order(code)
    assert order.is_complete is True
    assert order.payment_type == "UPI"
    assert order.payment_status == "paid"
    assert await stock(product["id"]) == 6
    assert notifier.events == ["PRDAD", "ORDPRCS", "ORDPYMT"]
    assert notifier.sent[-1][1] == {"order_id": code, "qty": 4}

    detail = (await client.get(f"/order/get/order/{order.id}")).json()
    assert [p["screenshotName"] for p in detail["payments"]] == ["gpay.png"]
    assert detail["payments"][0]["screenshotBase64"] == "data:image/png;base64,QUJD"


async def test_cod_payment(client, notifier, make_product, make_user, place_order, find_order, stock):
    product = await make_product(quantity=1)
    user = await make_user()
    code = await place_order(product["id"], user["id"], qty=2)

    response = await client.post("/order/gpay/payment/details", json={"orderId": code, "paymentType": "cod"})

    assert response.status_code == 200
    assert response.json() == {"message": "Order requested...."}
    order = await find_order(code)
    assert order.is_complete is True
    assert order.payment_type == "cod"
    assert order.payment_status == "pending"
    assert await stock(product["id"]) == 0
    assert notifier.events[-1] == "ORDPRCS"
    assert "ORDPYMT" not in notifier.events


async def test_unsupported_payment_type_is_rejected(
    client, notifier, make_product, make_user, place_order, find_order, stock
):
    product = await make_product(quantity=5)
    user = await make_user()
    code = await place_order(product["id"], user["id"], qty=2)

    response = await client.post("/order/gpay/payment/details", json={"orderId": code, "paymentType": "card"})

    assert response.status_code == 400
    assert response.json() == {"message": "Unsupported payment type"}
    assert (await find_order(code)).is_complete is False
    assert await stock(product["id"]) == 5
    assert notifier.events == ["PRDAD"]


async def test_payment_for_unknown_order(client):
    response = await client.post("/order/gpay/payment/details", json={"orderId": "RAYA/2025/ORD/9999", "paymentType": "UPI"})

    assert response.status_code == 404
    assert response.json() == {"message": "Order not found"}


async def test_list_orders_only_complete(client, make_product, make_user, place_order):
    product = await make_product()
    user = await make_user(name="Meera")
    paid = await place_order(product["id"], user["id"], qty=2)
    await place_order(product["id"], user["id"])
    await client.post("/order/gpay/payment/details", json={"orderId": paid, "paymentType": "cod"})

    response = await client.get("/order/get/all/orders")

    assert response.status_code == 200
    orders = response.json()
    assert len(orders) == 1
    assert orders[0]["orderId"] == paid
    assert orders[0]["customerName"] == "Meera"
    assert orders[0]["productId"] == product["productId"]
    assert orders[0]["quantity"] == 2
    assert orders[0]["orderStatus"] == "Processing"


async def test_list_orders_with_unknown_references(client, place_order):
    code = await place_order(404, 404)
    await client.post("/order/gpay/payment/details", json={"orderId": code, "paymentType": "cod"})

    orders = (await client.get("/order/get/all/orders")).json()

    assert orders[0]["customerName"] == "Unknown"
    assert orders[0]["productId"] == "Unknown"


async def test_get_order(client, make_product, make_user, place_order, find_order):
    product = await make_product()
    user = await make_user()
    code = await place_order(product["id"], user["id"], qty=2)
    order = await find_order(code)

    response = await client.get(f"/order/get/order/{order.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["orderId"] == code
    assert body["orderStatus"] == "Processing"
    assert body["isComplete"] is False
    assert body["payments"] == []

    missing = await client.get("/order/get/order/999")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Order not found"}


@pytest.mark.parametrize("path", [
    "/order/get/order/99999999999999999999",
    "/order/user/get/99999999999999999999",
    "/product/get/99999999999999999999",
    "/product/get/product/comments/99999999999999999999",
    "/user/get/99999999999999999999",
])
async def test_id_beyond_integer_range_is_not_found(client, path):
    response = await client.get(path)

    assert response.status_code == 404


async def test_order_with_oversized_product_id_is_rejected(client, make_user):
    user = await make_user()

    response = await client.post("/order/add", json={
        "productId": 10**20, "customerId": user["id"], "paymentType": "cod", "qty": 1,
    })

    assert response.status_code == 400
    assert response.json()["message"].startswith("productId")


async def test_admin_cancel_restocks_on_every_call(client, make_product, make_user, place_order, find_order, stock):
    product = await make_product(quantity=10)
    user = await make_user()
    code = await place_order(product["id"], user["id"], qty=3)
    await client.post("/order/gpay/payment/details", json={"orderId": code, "paymentType": "cod"})
    order = await find_order(code)
    assert await stock(product["id"]) == 7

    response = await client.put(f"/order/edit/{order.id}", json={"orderStatus": "Cancelled"})
    assert response.status_code == 200
    assert response.json() == {"message": "Status Changed Successfully"}
    assert await stock(product["id"]) == 10
    assert (await find_order(code)).order_status == "Cancelled"

    # повторная отмена снова возвращает товар на склад
    await client.put(f"/order/edit/{order.id}", json={"orderStatus": "Cancelled"})
    assert await stock(product["id"]) == 13


async def test_admin_processing_deducts(client, make_product, make_user, place_order, find_order, stock):
    product = await make_product(quantity=10)
    user = await make_user()
    order = await find_order(await place_order(product["id"], user["id"], qty=4))

    await client.put(f"/order/edit/{order.id}", json={"orderStatus": "Processing"})
    assert await stock(product["id"]) == 6

    await client.put(f"/order/edit/{order.id}", json={"orderStatus": "Processing"})
    assert await stock(product["id"]) == 2


async def test_admin_uses_quantity_before_patch(client, make_product, make_user, place_order, find_order, stock):
    product = await make_product(quantity=10)
    user = await make_user()
    order = await find_order(await place_order(product["id"], user["id"], qty=4))

    await client.put(f"/order/edit/{order.id}", json={"orderStatus": "Cancelled", "qty": 1})

    assert await stock(product["id"]) == 14
    assert (await find_order(order.order_id)).qty == 1


async def test_admin_confirm_notifies_dispatch(client, notifier, make_product, make_user, place_order, find_order, stock):
    product = await make_product(quantity=10)
    user = await make_user()
    order = await find_order(await place_order(product["id"], user["id"], qty=4))

    response = await client.put(f"/order/edit/{order.id}", json={"orderStatus": "Confirmed", "trackId": "TRK123"})

    assert response.status_code == 200
    assert notifier.sent[-1] == ("PRDDISP", {"order_id": order.order_id})
    assert await stock(product["id"]) == 10
    assert (await find_order(order.order_id)).track_id == "TRK123"


async def test_admin_patch_rejects_unknown_fields(client, make_product, make_user, place_order, find_order):
    product = await make_product()
    user = await make_user()
    order = await find_order(await place_order(product["id"], user["id"]))

    response = await client.put(f"/order/edit/{order.id}", json={"isComplete": True})
    assert response.status_code == 400
    assert "isComplete" in response.json()["message"]

    response = await client.put(f"/order/edit/{order.id}", json={"orderStatus": "Lost"})
    assert response.status_code == 400

    assert (await find_order(order.order_id)).is_complete is False


async def test_admin_edit_missing_order(client):
    response = await client.put("/order/edit/999", json={"orderStatus": "Confirmed"})

    assert response.status_code == 404


async def test_customer_cancel_does_not_restock(client, make_product, make_user, place_order, find_order, stock):
    product = await make_product(quantity=10)
    user = await make_user()
    code = await place_order(product["id"], user["id"], qty=3)
    await client.post("/order/gpay/payment/details", json={"orderId": code, "paymentType": "UPI"})
    order = await find_order(code)

    response = await client.put(f"/order/user/cancel/{order.id}", json={"reason": "Ordered by mistake"})

    assert response.status_code == 200
    assert response.json() == {"message": "Order Cancelled..."}
    cancelled = await find_order(code)
    assert cancelled.order_status == "Cancelled"
    assert cancelled.cancellation_reason == "Ordered by mistake"
    assert await stock(product["id"]) == 7

    assert (await client.put("/order/user/cancel/999", json={})).status_code == 404


async def test_customer_orders(client, make_product, make_user, place_order):
    product = await make_product(offerPrice=799, collection="Necklaces")
    user = await make_user()
    code = await place_order(product["id"], user["id"], qty=2, size="L")
    await place_order(product["id"], user["id"])
    await client.post("/order/gpay/payment/details", json={"orderId": code, "paymentType": "cod"})

    response = await client.get(f"/order/user/get/{user['id']}")

    assert response.status_code == 200
    orders = response.json()["orders"]
    assert list(orders) == [code]
    assert orders[code]["status"] == "Processing"
    assert orders[code]["product"] == {
        "name": "Silver Hoop Earrings",
        "brand": "Necklaces",
        "image": "data:image/png;base64,AAAA",
        "price": 799,
        "quantity": 2,
        "size": "L",
    }


async def test_customer_orders_unknown_user(client):
    response = await client.get("/order/user/get/999")

    assert response.status_code == 404
    assert response.json() == {"message": "Invalid ID"}
