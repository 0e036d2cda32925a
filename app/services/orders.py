from datetime import datetime
from models import db
from models.order import Order, OrderItem, OrderStatus, CANCELLABLE_STATUSES
from models.restaurant import MenuItem
from models.payment import PaymentMethod
from app.auth.permissions import Action
from . import NotFound, ValidationError, get_own_order, scoped
from .restaurants import get_restaurant
from .payments import simulate_payment


def _owner_id(actor) -> int:
    return int(actor.id)


def list_orders_query(policy, actor, status=None, restaurant_id=None,
                      start_date=None, end_date=None):
    query = Order.query.filter(Order.user_id == _owner_id(actor))
    query = scoped(query, policy, actor)
    if status:
        query = query.filter(Order.status == status)
    if restaurant_id:
        query = query.filter(Order.restaurant_id == restaurant_id)
    if start_date:
        query = query.filter(Order.created_at >= start_date)
    if end_date:
        query = query.filter(Order.created_at <= end_date)
    return query.order_by(Order.created_at.desc(), Order.id.desc())


def create_order(policy, actor, data) -> Order:
    restaurant = get_restaurant(policy, actor, data.restaurant_id)
    if not restaurant.is_active:
        raise NotFound("Restaurant not found")

    wanted = {item.menu_item_id for item in data.items}
    menu_items = {
        mi.id: mi
        for mi in MenuItem.query.filter(
            MenuItem.id.in_(wanted),
            MenuItem.restaurant_id == restaurant.id,
            MenuItem.is_available.is_(True),
        ).all()
    }
    if set(menu_items) != wanted:
        raise ValidationError("Some menu items are not available or invalid")

    order = Order(
        user_id=_owner_id(actor),
        restaurant_id=restaurant.id,
        status=OrderStatus.PENDING.value,
        delivery_address=data.delivery_address,
        notes=data.notes or "",
        # orders live in the partition of the restaurant they were placed with
        country=restaurant.country,
        total_amount=0,
    )
    total = 0.0
    for item in data.items:
        mi = menu_items[item.menu_item_id]
        subtotal = round(mi.price * item.quantity, 2)
        total += subtotal
        order.items.append(OrderItem(
            menu_item_id=mi.id,
            name=mi.name,
            price=mi.price,
            quantity=item.quantity,
            subtotal=subtotal,
        ))
    order.total_amount = round(total, 2)
    db.session.add(order)
    return order


def place_order(policy, actor, order_id: int, payment_method_id=None, currency="USD"):
    order = get_own_order(
        policy, actor, order_id,
        statuses=(OrderStatus.PENDING.value,),
        message="Order not found or cannot be placed",
    )
    if payment_method_id is not None:
        method = PaymentMethod.query.filter_by(
            id=payment_method_id, user_id=_owner_id(actor)
        ).first()
        if method is None:
            raise NotFound("Payment method not found")

    payment = simulate_payment(order.total_amount, payment_method_id, currency)
    now = datetime.utcnow()
    order.status = OrderStatus.CONFIRMED.value
    order.payment_details = payment
    order.placed_at = now
    order.updated_at = now
    return order, payment


def cancel_order(policy, actor, order_id: int) -> Order:
    order = get_own_order(
        policy, actor, order_id,
        statuses=CANCELLABLE_STATUSES,
        message="Order not found or cannot be cancelled",
    )
    now = datetime.utcnow()
    order.status = OrderStatus.CANCELLED.value
    order.cancelled_at = now
    order.updated_at = now
    return order


def status_action(status: OrderStatus) -> Action:
    """Catalog action a status change needs; the same verbs as /place and DELETE."""
    if status == OrderStatus.CANCELLED:
        return Action.CANCEL_ORDER
    return Action.PLACE_ORDER


def update_order_status(policy, actor, order_id: int, status: OrderStatus) -> Order:
    policy.require(actor, status_action(status))
    order = db.session.get(Order, order_id)
    if order is None:
        raise NotFound("Order not found")
    policy.ensure_partition(actor, order.country, "Order not found")
    order.status = status.value
    if status == OrderStatus.CANCELLED:
        order.cancelled_at = datetime.utcnow()
    return order
