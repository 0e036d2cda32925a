from flask import Blueprint, request
from app.version import API_PREFIX
from app.auth.permissions import Action
from app.schemas.restaurant import RestaurantCreate
from app.services import restaurants as svc
from app.utils import (
    ok,
    auth_required,
    optional_auth,
    permission_required,
    validate_schema,
    transactional,
    current_actor,
    get_policy,
    page_args,
    paginate,
)

restaurants_bp = Blueprint("restaurants", __name__, url_prefix=f"{API_PREFIX}/restaurants")


def _bool_arg(name):
    value = request.args.get(name)
    if value is None:
        return None
    return value.lower() in ("1", "true", "yes")


def _active_flag():
    flag = _bool_arg("is_active")
    return True if flag is None else flag


@restaurants_bp.route("", methods=["GET"])
@optional_auth
@permission_required(Action.VIEW_RESTAURANTS, allow_anonymous=True)
def list_restaurants():
    page, limit = page_args()
    query = svc.list_restaurants_query(
        get_policy(),
        current_actor(),
        country=request.args.get("country"),
        cuisine_type=request.args.get("cuisine_type"),
        search=request.args.get("search"),
        is_active=_active_flag(),
    )
    items, pagination = paginate(query, page, limit)
    return ok({
        "restaurants": [r.to_dict() for r in items],
        "pagination": pagination,
    })


@restaurants_bp.route("/<int:restaurant_id>", methods=["GET"])
@optional_auth
@permission_required(Action.VIEW_RESTAURANTS, allow_anonymous=True)
def get_restaurant(restaurant_id):
    restaurant = svc.get_restaurant(get_policy(), current_actor(), restaurant_id)
    return ok({"restaurant": restaurant.to_dict()})


@restaurants_bp.route("/<int:restaurant_id>/menu", methods=["GET"])
@optional_auth
@permission_required(Action.VIEW_RESTAURANTS, allow_anonymous=True)
def get_menu(restaurant_id):
    restaurant = svc.get_restaurant(get_policy(), current_actor(), restaurant_id)
    page, limit = page_args()
    flag = _bool_arg("is_available")
    query = svc.menu_items_query(
        restaurant,
        category=request.args.get("category"),
        search=request.args.get("search"),
        is_available=True if flag is None else flag,
    )
    items, pagination = paginate(query, page, limit)
    return ok({
        "restaurant": {
            "id": restaurant.id,
            "name": restaurant.name,
            "cuisine_type": restaurant.cuisine_type,
        },
        "menu_items": [mi.to_dict() for mi in items],
        "pagination": pagination,
    })


@restaurants_bp.route("/<int:restaurant_id>/categories", methods=["GET"])
@optional_auth
@permission_required(Action.VIEW_RESTAURANTS, allow_anonymous=True)
def get_categories(restaurant_id):
    restaurant = svc.get_restaurant(get_policy(), current_actor(), restaurant_id)
    return ok({"categories": svc.menu_categories(restaurant)})


@restaurants_bp.route("", methods=["POST"])
@auth_required
@validate_schema(RestaurantCreate)
def create_restaurant():
    with transactional("Failed to create restaurant"):
        restaurant = svc.create_restaurant(get_policy(), current_actor(), request.validated_data)
    return ok({"restaurant": restaurant.to_dict()},
              message="Restaurant created successfully", status=201)
