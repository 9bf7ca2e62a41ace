"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the storefront's validation rules
(10-digit phone, 6-digit pincode, well-formed email, catalog categories) and
match the field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")

CATEGORIES = ["Clothes", "Jewellery", "Flower Tea", "Home Decor"]
PASSWORD = "loadtest-pass"

# ---------- Accounts ----------


def valid_email() -> str:
    """Generate unique emails that pass the storefront's structural checks."""
    local = "".join(ch for ch in fake.user_name() if ch.isalnum())[:20] or "shopper"
    return f"{local}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def registration_data() -> dict:
    return {"full_name": fake.name()[:100], "email": valid_email(), "password": PASSWORD}


# ---------- Addresses ----------


def valid_phone() -> str:
    """Ten digits, formatted the way shoppers type them."""
    digits = f"{random.randint(6, 9)}{random.randint(0, 999_999_999):09d}"
    return f"{digits[:5]} {digits[5:]}"


def address_data(email: str | None = None) -> dict:
    return {
        "full_name": fake.name()[:100],
        "phone": valid_phone(),
        "email": email or valid_email(),
        "address": fake.street_address()[:500],
        "landmark": random.choice([None, f"Near {fake.last_name()} Chowk"]),
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "pincode": f"{random.randint(110_000, 855_999)}",
    }


# ---------- Catalog ----------


def product_data() -> dict:
    category = random.choice(CATEGORIES)
    return {
        "name": f"{fake.color_name()} {fake.word().title()} {category}"[:200],
        "price": round(random.uniform(99.0, 4999.0), 2),
        "category": category,
        "description": fake.sentence(nb_words=12),
        "image": f"https://picsum.photos/seed/{uuid.uuid4().hex[:8]}/600/600",
    }


def cart_lines(products: list[dict], max_lines: int = 3) -> list[dict]:
    """Pick 1..max_lines catalog products with quantities of 1-3."""
    chosen = random.sample(products, k=min(len(products), random.randint(1, max_lines)))
    return [
        {
            "product_id": p["id"],
            "name": p["name"],
            "price": p["price"],
            "quantity": random.randint(1, 3),
            "image": p.get("image"),
        }
        for p in chosen
    ]


def lines_total(lines: list[dict]) -> float:
    return round(sum(line["price"] * line["quantity"] for line in lines), 2)


# ---------- Payments ----------


def upi_handle() -> str:
    return f"{fake.user_name()[:12].replace('-', '')}@ok{random.choice(['axis', 'hdfc', 'icici', 'sbi'])}"


def offline_method() -> str:
    return random.choice(["cod", "direct-transfer", "cash-on-delivery"])
