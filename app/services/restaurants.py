from models import db
from models.restaurant import Restaurant, MenuItem
from app.auth.policy import InsufficientPermission
from . import NotFound, scoped


def _like(value):
    return f"%{value}%"


def list_restaurants_query(policy, actor, country=None, cuisine_type=None,
                           search=None, is_active=True):
    query = Restaurant.query
    if is_active is not None:
        query = query.filter(Restaurant.is_active == is_active)
    # An explicit country narrows the listing; the scope filter is still applied.
    if country:
        query = query.filter(Restaurant.country == country)
    if cuisine_type:
        query = query.filter(Restaurant.cuisine_type.ilike(_like(cuisine_type)))
    if search:
        query = query.filter(db.or_(
            Restaurant.name.ilike(_like(search)),
            Restaurant.description.ilike(_like(search)),
            Restaurant.cuisine_type.ilike(_like(search)),
        ))
    query = scoped(query, policy, actor)
    return query.order_by(Restaurant.created_at.desc(), Restaurant.id.desc())


def get_restaurant(policy, actor, restaurant_id: int) -> Restaurant:
    restaurant = db.session.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise NotFound("Restaurant not found")
    if actor is not None:
        policy.ensure_partition(actor, restaurant.country, "Restaurant not found")
    return restaurant


def menu_items_query(restaurant, category=None, search=None, is_available=True):
    query = MenuItem.query.filter(MenuItem.restaurant_id == restaurant.id)
    if is_available is not None:
        query = query.filter(MenuItem.is_available == is_available)
    if category:
        query = query.filter(MenuItem.category.ilike(_like(category)))
    if search:
        query = query.filter(db.or_(
            MenuItem.name.ilike(_like(search)),
            MenuItem.description.ilike(_like(search)),
        ))
    return query.order_by(MenuItem.category.asc(), MenuItem.name.asc())


def menu_categories(restaurant):
    rows = (
        db.session.query(MenuItem.category)
        .filter(MenuItem.restaurant_id == restaurant.id, MenuItem.is_available.is_(True))
        .distinct()
        .order_by(MenuItem.category.asc())
        .all()
    )
    return [r[0] for r in rows]


def create_restaurant(policy, actor, data) -> Restaurant:
    if not policy.can_access_partition(actor, data.country):
        raise InsufficientPermission("Cannot create restaurants outside your country")
    restaurant = Restaurant(
        name=data.name,
        description=data.description,
        address=data.address,
        country=data.country.value,
        cuisine_type=data.cuisine_type,
        image_url=data.image_url,
        is_active=data.is_active,
    )
    db.session.add(restaurant)
    return restaurant
