"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that match the field names expected by the
storefront API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")


def valid_email() -> str:
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:4]}@{domain}"


def customer_claims() -> dict:
    """Claims for a simulated shopper's bearer token."""
    return {
        "customer_id": f"cust-lt-{uuid.uuid4().hex[:8]}",
        "email": valid_email(),
        "username": fake.name()[:100],
        "phone": fake.phone_number()[:30],
    }


def unique_slug(prefix: str) -> str:
    return f"{prefix}-lt-{uuid.uuid4().hex[:8]}"


def product_data() -> dict:
    return {
        "name": fake.catch_phrase()[:255],
        "slug": unique_slug("product"),
        "price": round(random.uniform(99.0, 2499.0), 2),
        "description": fake.paragraph(nb_sentences=2),
    }


def giftcard_data() -> dict:
    price = random.choice([500, 1000, 2000, 5000])
    return {
        "name": f"Gift card {price}",
        "slug": unique_slug(f"gift-{price}"),
        "price": float(price),
    }


def address_data() -> dict:
    return {
        "line1": fake.street_address()[:255],
        "line2": random.choice([None, f"Flat {random.randint(1, 40)}"]),
        "city": fake.city()[:100],
        "postal_code": fake.postcode()[:20],
        "state": fake.state()[:100],
        "country": "India",
    }


def order_data(slugs: list[str], include_unknown: bool = False) -> dict:
    cart_items = [{"slug": slug, "quantity": random.randint(1, 3)} for slug in slugs]
    if include_unknown:
        cart_items.append({"slug": unique_slug("missing"), "quantity": 1})
    return {
        "cart_items": cart_items,
        "address": address_data(),
        "name": fake.name()[:100],
        "email": valid_email(),
        "phone": fake.phone_number()[:30],
    }
