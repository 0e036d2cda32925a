import pytest
from app.version import API_PREFIX
from models import db, Order

ORDERS = f"{API_PREFIX}/orders"


@pytest.fixture
def order_for(client, headers_for, restaurants, menu_of):
    """Create an order through the API and return its JSON."""
    def _create(user, key="in1", quantities=(("main", 2), ("drink", 1))):
        menu = menu_of(restaurants[key])
        body = {
            "restaurant_id": restaurants[key],
            "items": [{"menu_item_id": menu[name], "quantity": qty} for name, qty in quantities],
            "delivery_address": "221B Baker Street",
        }
        r = client.post(ORDERS, json=body, headers=headers_for(user))
        assert r.status_code == 201, r.get_json()
        return r.get_json()["data"]["order"]

    return _create


def test_member_creates_order_with_server_side_totals(order_for, users):
    order = order_for(users["member_in"])
    assert order["status"] == "pending"
    assert order["country"] == "india"
    assert order["total_amount"] == 22.5
    assert {(i["name"], i["quantity"], i["subtotal"]) for i in order["items"]} == {
        ("in1 main", 2, 20.0),
        ("in1 drink", 1, 2.5),
    }


def test_order_country_follows_restaurant(order_for, users):
    order = order_for(users["admin"], key="us1")
    assert order["country"] == "america"


def test_create_order_in_foreign_partition_is_not_found(client, users, restaurants, menu_of, headers_for):
    menu = menu_of(restaurants["us1"])
    r = client.post(ORDERS, json={
        "restaurant_id": restaurants["us1"],
        "items": [{"menu_item_id": menu["main"], "quantity": 1}],
        "delivery_address": "Mumbai",
    }, headers=headers_for(users["manager_in"]))
    assert r.status_code == 404
    assert r.get_json()["message"] == "Restaurant not found"
    assert Order.query.count() == 0


@pytest.mark.parametrize("item", ["gone", "foreign"])
def test_create_order_rejects_unavailable_or_foreign_items(client, users, restaurants, menu_of, headers_for, item):
    menu = menu_of(restaurants["in1"])
    item_id = menu["gone"] if item == "gone" else menu_of(restaurants["in2"])["main"]
    r = client.post(ORDERS, json={
        "restaurant_id": restaurants["in1"],
        "items": [{"menu_item_id": item_id, "quantity": 1}],
        "delivery_address": "Mumbai",
    }, headers=headers_for(users["member_in"]))
    assert r.status_code == 400
    assert r.get_json()["message"] == "Some menu items are not available or invalid"


def test_create_order_requires_items(client, users, restaurants, headers_for):
    r = client.post(ORDERS, json={
        "restaurant_id": restaurants["in1"],
        "items": [],
        "delivery_address": "Mumbai",
    }, headers=headers_for(users["member_in"]))
    assert r.status_code == 400


def test_orders_require_login(client):
    assert client.get(ORDERS).status_code == 401


def test_member_cannot_cancel(client, order_for, users, headers_for):
    order = order_for(users["member_in"])
    r = client.delete(f"{ORDERS}/{order['id']}", headers=headers_for(users["member_in"]))
    assert r.status_code == 403
    assert r.get_json()["message"] == "Insufficient permissions for this action"
    assert db.session.get(Order, order["id"]).status == "pending"


def test_member_cannot_place(client, order_for, users, headers_for):
    order = order_for(users["member_in"])
    r = client.post(f"{ORDERS}/{order['id']}/place", json={}, headers=headers_for(users["member_in"]))
    assert r.status_code == 403


def test_manager_places_then_cancels(client, order_for, users, headers_for, card_for):
    manager = users["manager_in"]
    card = card_for(manager)
    order = order_for(manager)
    r = client.post(f"{ORDERS}/{order['id']}/place",
                    json={"payment_method_id": card}, headers=headers_for(manager))
    assert r.status_code == 200
    data = r.get_json()["data"]
    assert data["order"]["status"] == "confirmed"
    assert data["payment"]["success"] is True
    assert data["payment"]["transaction_id"].startswith("txn_")
    assert data["payment"]["amount"] == 22.5
    assert data["payment"]["payment_method_id"] == card

    # placing twice is refused
    r = client.post(f"{ORDERS}/{order['id']}/place", json={}, headers=headers_for(manager))
    assert r.status_code == 404

    r = client.delete(f"{ORDERS}/{order['id']}", headers=headers_for(manager))
    assert r.status_code == 200
    assert r.get_json()["data"]["order"]["status"] == "cancelled"

    r = client.delete(f"{ORDERS}/{order['id']}", headers=headers_for(manager))
    assert r.status_code == 404
    assert r.get_json()["message"] == "Order not found or cannot be cancelled"


def test_place_with_someone_elses_card(client, order_for, users, headers_for, card_for):
    other_card = card_for(users["manager_us"])
    order = order_for(users["manager_in"])
    r = client.post(f"{ORDERS}/{order['id']}/place",
                    json={"payment_method_id": other_card}, headers=headers_for(users["manager_in"]))
    assert r.status_code == 404
    assert r.get_json()["message"] == "Payment method not found"
    assert db.session.get(Order, order["id"]).status == "pending"


def test_list_returns_only_own_orders(client, order_for, users, headers_for):
    mine = order_for(users["member_in"])
    order_for(users["manager_in"])
    r = client.get(ORDERS, headers=headers_for(users["member_in"]))
    assert r.status_code == 200
    assert [o["id"] for o in r.get_json()["data"]["orders"]] == [mine["id"]]


def test_list_filters(client, order_for, users, headers_for, restaurants):
    user = users["admin"]
    order_for(user, key="in1")
    us_order = order_for(user, key="us1")
    hdr = headers_for(user)
    r = client.get(f"{ORDERS}?restaurant_id={restaurants['us1']}", headers=hdr)
    assert [o["id"] for o in r.get_json()["data"]["orders"]] == [us_order["id"]]
    r = client.get(f"{ORDERS}?status=cancelled", headers=hdr)
    assert r.get_json()["data"]["orders"] == []
    r = client.get(f"{ORDERS}?start_date=2000-01-01T00:00:00", headers=hdr)
    assert r.get_json()["data"]["pagination"]["total_count"] == 2
    r = client.get(f"{ORDERS}?start_date=yesterday", headers=hdr)
    assert r.status_code == 400


def test_get_order_of_another_user_is_not_found(client, order_for, users, headers_for):
    order = order_for(users["member_in"])
    r = client.get(f"{ORDERS}/{order['id']}", headers=headers_for(users["manager_in"]))
    assert r.status_code == 404
    r = client.get(f"{ORDERS}/{order['id']}", headers=headers_for(users["member_in"]))
    assert r.status_code == 200


def test_status_update_is_partition_scoped(client, order_for, users, headers_for):
    order = order_for(users["member_us"], key="us1")
    r = client.put(f"{ORDERS}/{order['id']}/status", json={"status": "preparing"},
                   headers=headers_for(users["manager_in"]))
    assert r.status_code == 404
    assert r.get_json()["message"] == "Order not found"
    r = client.put(f"{ORDERS}/{order['id']}/status", json={"status": "preparing"},
                   headers=headers_for(users["manager_us"]))
    assert r.status_code == 200
    assert r.get_json()["data"]["order"]["status"] == "preparing"


def test_status_cancel_needs_cancel_permission(client, order_for, users, headers_for):
    order = order_for(users["member_in"])
    r = client.put(f"{ORDERS}/{order['id']}/status", json={"status": "cancelled"},
                   headers=headers_for(users["member_in"]))
    assert r.status_code == 403
    r = client.put(f"{ORDERS}/{order['id']}/status", json={"status": "cancelled"},
                   headers=headers_for(users["admin"]))
    assert r.status_code == 200
    assert r.get_json()["data"]["order"]["cancelled_at"]


def test_status_update_rejects_unknown_status(client, order_for, users, headers_for):
    order = order_for(users["member_in"])
    r = client.put(f"{ORDERS}/{order['id']}/status", json={"status": "teleported"},
                   headers=headers_for(users["manager_in"]))
    assert r.status_code == 400


def test_order_country_is_immutable(order_for, users):
    order = db.session.get(Order, order_for(users["member_in"])["id"])
    with pytest.raises(ValueError):
        order.country = "america"
    order.country = "india"


def test_member_cannot_confirm_through_status(client, order_for, users, headers_for):
    member = users["member_in"]
    order = order_for(member)
    assert client.post(f"{ORDERS}/{order['id']}/place", json={},
                       headers=headers_for(member)).status_code == 403
    r = client.put(f"{ORDERS}/{order['id']}/status", json={"status": "confirmed"},
                   headers=headers_for(member))
    assert r.status_code == 403
    assert r.get_json()["message"] == "Insufficient permissions for this action"
    assert db.session.get(Order, order["id"]).status == "pending"


@pytest.mark.parametrize("status", ["preparing", "ready", "delivered", "pending"])
def test_member_cannot_move_other_orders(client, order_for, users, headers_for, status):
    order = order_for(users["manager_in"])
    r = client.put(f"{ORDERS}/{order['id']}/status", json={"status": status},
                   headers=headers_for(users["member_in"]))
    assert r.status_code == 403
    assert db.session.get(Order, order["id"]).status == "pending"


def test_status_permission_checked_before_lookup(client, users, headers_for):
    # a missing order still answers 403 without the verb
    r = client.put(f"{ORDERS}/99999/status", json={"status": "delivered"},
                   headers=headers_for(users["member_in"]))
    assert r.status_code == 403


def test_manager_confirms_through_status(client, order_for, users, headers_for):
    order = order_for(users["member_in"])
    r = client.put(f"{ORDERS}/{order['id']}/status", json={"status": "confirmed"},
                   headers=headers_for(users["manager_in"]))
    assert r.status_code == 200
    assert r.get_json()["data"]["order"]["status"] == "confirmed"


def test_get_own_order_shared_by_order_and_payment_services(app, order_for, users):
    from app.auth.policy import Actor
    from app.services import NotFound, get_own_order
    from app.services import orders as order_service, payments as payment_service

    assert order_service.get_own_order is payment_service.get_own_order is get_own_order
    order = order_for(users["member_in"])
    owner = Actor.from_user(users["member_in"])
    assert get_own_order(app.access_policy, owner, order["id"]).id == order["id"]
    with pytest.raises(NotFound):
        get_own_order(app.access_policy, Actor.from_user(users["manager_in"]), order["id"])
    with pytest.raises(NotFound):
        get_own_order(app.access_policy, owner, order["id"], statuses=("confirmed",))
