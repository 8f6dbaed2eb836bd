"""
Name: Test Data Factories

Responsibilities:
  - Build users, products and principals with sensible defaults
  - Keep test bodies focused on the behavior under test
"""

from uuid import uuid4

from storefront.domain.entities import Product
from storefront.identity.users import Address, AuthenticatedPrincipal, User, UserRole

PERSONAL_DATA = {
    "identification_number": "30111222",
    "birth_date": "1990-05-17",
    "activity_type": "retail",
    "activity_number": "A-991",
    "phone": "+54 11 5555-0000",
}


def full_address() -> Address:
    return Address(
        street="Av. Siempre Viva 742",
        city="Springfield",
        state="Oregon",
        zip_code="97403",
        country="US",
    )


def address_payload() -> dict:
    return {
        "street": "Av. Siempre Viva 742",
        "city": "Springfield",
        "state": "Oregon",
        "zip_code": "97403",
        "country": "US",
    }


def make_user(
    *,
    role: UserRole = UserRole.GUEST,
    email: str | None = None,
    complete_personal: bool = True,
    address: Address | None = None,
    cart_id=None,
    password_hash: str = "hashed",
) -> User:
    personal = dict(PERSONAL_DATA) if complete_personal else {}
    return User(
        id=uuid4(),
        email=email or f"user-{uuid4().hex[:8]}@example.com",
        password_hash=password_hash,
        role=role,
        first_name="Ana",
        last_name="Pérez",
        address=address,
        cart_id=cart_id,
        **personal,
    )


def make_product(*, price: float = 100.0, stock: int = 10, **overrides) -> Product:
    values = {
        "id": uuid4(),
        "title": "Taladro percutor",
        "description": "Taladro 750W",
        "brand": "Bosch",
        "price": price,
        "stock": stock,
        "category": "tools",
    }
    values.update(overrides)
    return Product(**values)


def principal_for(user: User) -> AuthenticatedPrincipal:
    return AuthenticatedPrincipal.from_user(user)
