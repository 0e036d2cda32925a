from models import db
from models.user import User
from . import Conflict, ValidationError


class InvalidCredentials(Exception):
    pass


def _email_taken(email: str, exclude_id=None) -> bool:
    query = User.query.filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return db.session.query(query.exists()).scalar()


def register_user(data) -> User:
    if _email_taken(data.email):
        raise Conflict("User already exists")
    user = User(
        name=data.name,
        email=data.email,
        role=data.role.value,
        country=data.country.value,
    )
    user.set_password(data.password)
    db.session.add(user)
    return user


def authenticate(email: str, password: str) -> User:
    user = User.query.filter_by(email=email.lower()).first()
    # Same error for unknown email and wrong password
    if user is None or not user.check_password(password):
        raise InvalidCredentials("Invalid email or password")
    return user


def update_profile(user: User, data) -> User:
    if data.email is not None and data.email != user.email:
        if _email_taken(data.email, exclude_id=user.id):
            raise Conflict("Email already exists")
        user.email = data.email
    if data.name is not None:
        user.name = data.name
    return user


def change_password(user: User, current_password: str, new_password: str) -> None:
    if not user.check_password(current_password):
        raise ValidationError("Current password is incorrect")
    user.set_password(new_password)
