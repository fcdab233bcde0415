"""Custom Faker providers and the per-request Faker factory.

Faker's stock locales have no commerce catalogue, crypto addresses or
clinical codes, so those vocabularies live here as providers registered on
every instance built by ``make_faker``.
"""

import re
import string

from faker import Faker
from faker.providers import BaseProvider

UPPER_ALPHANUMERIC = string.ascii_uppercase + string.digits
LOWER_ALPHANUMERIC = string.ascii_lowercase + string.digits

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def slugify_name(name: str) -> str:
    """Reduce a personal name to the lowercase ASCII form used in handles."""
    return _NON_ALPHANUMERIC.sub("", name).lower()


class CommerceProvider(BaseProvider):
    """Product catalogue vocabulary."""

    departments = (
        "Automotive", "Baby", "Beauty", "Books", "Clothing", "Computers",
        "Electronics", "Games", "Garden", "Grocery", "Health", "Home",
        "Industrial", "Jewelry", "Kids", "Movies", "Music", "Outdoors",
        "Shoes", "Sports", "Tools", "Toys",
    )
    product_adjectives = (
        "Awesome", "Elegant", "Ergonomic", "Fantastic", "Generic", "Gorgeous",
        "Handcrafted", "Handmade", "Incredible", "Intelligent", "Licensed",
        "Practical", "Refined", "Rustic", "Sleek", "Small", "Tasty", "Unbranded",
    )
    product_materials = (
        "Bamboo", "Bronze", "Ceramic", "Concrete", "Cotton", "Fresh", "Frozen",
        "Granite", "Metal", "Plastic", "Rubber", "Soft", "Steel", "Wooden",
    )
    products = (
        "Bacon", "Ball", "Bike", "Car", "Chair", "Cheese", "Chicken",
        "Chips", "Computer", "Fish", "Gloves", "Hat", "Keyboard", "Mouse",
        "Pants", "Pizza", "Salad", "Sausages", "Shirt", "Shoes", "Soap",
        "Table", "Towels", "Tuna",
    )
    product_description_formats = (
        "The {adjective} {product} is built from {material} for everyday use.",
        "Meet the {adjective} {product}, crafted with {material} and designed to last.",
        "Our {adjective} {product} combines {material} construction with a modern finish.",
        "A {adjective} {product} made of {material}, ideal for home and office.",
    )

    def department(self) -> str:
        return self.random_element(self.departments)

    def product_name(self) -> str:
        return " ".join((
            self.random_element(self.product_adjectives),
            self.random_element(self.product_materials),
            self.random_element(self.products),
        ))

    def product_description(self) -> str:
        pattern = self.random_element(self.product_description_formats)
        return pattern.format(
            adjective=self.random_element(self.product_adjectives).lower(),
            product=self.random_element(self.products).lower(),
            material=self.random_element(self.product_materials).lower(),
        )

    def sku(self, length: int = 10) -> str:
        return self.lexify("?" * length, letters=UPPER_ALPHANUMERIC)

    def price(self, min_value: float = 1, max_value: float = 1500) -> float:
        return round(self.generator.random.uniform(min_value, max_value), 2)


class FinanceProvider(BaseProvider):
    """Account numbers and crypto wallet addresses."""

    def bank_account_number(self, length: int = 12) -> str:
        return self.numerify("#" * length)

    def ethereum_address(self) -> str:
        return "0x" + self.hexify("^" * 40)

    def bitcoin_address(self) -> str:
        return "bc1" + self.lexify("?" * 30, letters=LOWER_ALPHANUMERIC)


class BusinessProvider(BaseProvider):
    """Business registration identifiers."""

    def tax_id(self) -> str:
        return self.numerify("##-#######")

    def business_id(self) -> str:
        return self.bothify("??-########", letters=string.ascii_uppercase)


class HealthProvider(BaseProvider):
    """Fake patient record identifiers."""

    icd10_codes = ("A00.0", "B20", "E11.9", "I10", "J45.909", "M54.5", "R51.9", "Z00.00")

    def medical_record_number(self) -> str:
        return self.numerify("MRN-########")

    def icd10_code(self) -> str:
        return self.random_element(self.icd10_codes)


class IdentityProvider(BaseProvider):
    """Handles derived from a given first/last name pair."""

    separators = (".", "_")

    def user_name_for(self, first_name: str, last_name: str) -> str:
        first = slugify_name(first_name)
        last = slugify_name(last_name)
        pattern = self.random_int(min=0, max=2)

        if pattern == 0:
            return f"{first}{self.random_int(min=10, max=99)}"
        separator = self.random_element(self.separators)
        if pattern == 1:
            return f"{first}{separator}{last}"
        return f"{first}{separator}{last}{self.random_int(min=1, max=999)}"

    def email_for(self, first_name: str, last_name: str, domain: str | None = None) -> str:
        first = slugify_name(first_name)
        last = slugify_name(last_name)
        separator = self.random_element(self.separators)
        suffix = self.random_element(("", str(self.random_int(min=1, max=99))))
        domain = domain or self.generator.free_email_domain()
        return f"{first}{separator}{last}{suffix}@{domain}"


PROVIDERS = (
    CommerceProvider,
    FinanceProvider,
    BusinessProvider,
    HealthProvider,
    IdentityProvider,
)


def make_faker(seed: int | None = None, locale: str | None = None) -> Faker:
    """Build an isolated Faker instance for one request.

    Every instance owns its random state: a seeded instance reproduces the
    same values on every run, and an unseeded one is seeded from OS entropy.

    Args:
        seed: Optional seed for deterministic output
        locale: Optional Faker locale (defaults to en_US)

    Returns:
        A Faker instance with the custom providers registered
    """
    faker = Faker(locale)
    for provider in PROVIDERS:
        faker.add_provider(provider)
    faker.seed_instance(seed)
    return faker
