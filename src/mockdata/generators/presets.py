"""Composite Generators - fixed-shape preset records.

Each preset builds one record from a request's Faker instance. Related
fields are drawn once and reused, so a user's email, username and full name
all come from the same first/last name pair.
"""

from enum import Enum
from typing import Any, Callable

from faker import Faker

PresetGenerator = Callable[[Faker], dict[str, Any]]


class PresetType(str, Enum):
    """Preset record types, in listing order."""

    USER = "user"
    COMPANY = "company"
    PRODUCT = "product"
    ADDRESS = "address"
    PERSONAL = "personal"
    BUSINESS = "business"
    LOCATION = "location"
    FINANCIAL = "financial"
    TECH = "tech"
    HEALTH = "health"


ROUTE_MIN_POINTS = 3
ROUTE_MAX_POINTS = 8


def _coordinates(faker: Faker) -> dict[str, float]:
    return {
        "latitude": float(faker.latitude()),
        "longitude": float(faker.longitude()),
    }


def generate_address(faker: Faker) -> dict[str, Any]:
    return {
        "street": faker.street_address(),
        "city": faker.city(),
        "state": faker.state(),
        "postalCode": faker.postcode(),
        "country": faker.country(),
    }


def generate_user(faker: Faker) -> dict[str, Any]:
    first_name = faker.first_name()
    last_name = faker.last_name()
    domain = faker.domain_name()
    username = faker.user_name_for(first_name, last_name)

    return {
        "id": faker.uuid4(),
        "firstName": first_name,
        "lastName": last_name,
        "fullName": f"{first_name} {last_name}",
        "email": faker.email_for(first_name, last_name, domain=domain),
        "phone": faker.phone_number(),
        "address": generate_address(faker),
        "avatar": faker.image_url(width=128, height=128),
        "username": username,
        "password": faker.password(length=12),
        "birthdate": faker.date_of_birth(minimum_age=18, maximum_age=90).isoformat(),
    }


def generate_company(faker: Faker) -> dict[str, Any]:
    return {
        "id": faker.uuid4(),
        "name": faker.company(),
        "industry": faker.department(),
        "employees": faker.random_int(min=1, max=20000),
        "address": generate_address(faker),
        "website": faker.url(),
    }


def generate_product(faker: Faker) -> dict[str, Any]:
    return {
        "id": faker.uuid4(),
        "name": faker.product_name(),
        "sku": faker.sku(),
        "category": faker.department(),
        "description": faker.product_description(),
        "price": faker.price(min_value=1, max_value=1500),
        "currency": "USD",
    }


def generate_personal(faker: Faker) -> dict[str, Any]:
    """Regroup one generated user into identity, contact and credentials."""
    user = generate_user(faker)
    return {
        "names": {
            "first": user["firstName"],
            "last": user["lastName"],
            "full": user["fullName"],
        },
        "address": user["address"],
        "phone": user["phone"],
        "email": user["email"],
        "birthdate": user["birthdate"],
        "credentials": {
            "username": user["username"],
            "password": user["password"],
        },
    }


def generate_business(faker: Faker) -> dict[str, Any]:
    return {
        "companyName": faker.company(),
        "jobTitle": faker.job(),
        "department": faker.department(),
        "taxId": faker.tax_id(),
        "businessId": faker.business_id(),
    }


def generate_location(faker: Faker) -> dict[str, Any]:
    """A point of interest plus a route of independently drawn waypoints."""
    coordinates = _coordinates(faker)
    route_length = faker.random_int(min=ROUTE_MIN_POINTS, max=ROUTE_MAX_POINTS)
    route = [_coordinates(faker) for _ in range(route_length)]
    return {
        "coordinates": coordinates,
        "city": faker.city(),
        "state": faker.state(),
        "country": faker.country(),
        "postalCode": faker.postcode(),
        "route": route,
    }


def generate_financial(faker: Faker) -> dict[str, Any]:
    record = {
        "creditCardNumber": faker.credit_card_number(),
        "bankAccountNumber": faker.bank_account_number(length=12),
        "iban": faker.iban(),
        "swift": faker.swift(),
    }
    if faker.random_element(("ethereum", "bitcoin")) == "ethereum":
        record["cryptoAddress"] = faker.ethereum_address()
    else:
        record["cryptoAddress"] = faker.bitcoin_address()
    return record


def generate_tech(faker: Faker) -> dict[str, Any]:
    return {
        "ipv4": faker.ipv4(),
        "ipv6": faker.ipv6(),
        "macAddress": faker.mac_address(),
        "url": faker.url(),
        "uuid": faker.uuid4(),
        "lorem": faker.paragraph(),
    }


def generate_health(faker: Faker) -> dict[str, Any]:
    return {
        "patientName": faker.name(),
        "medicalRecordNumber": faker.medical_record_number(),
        "diagnosisCode": faker.icd10_code(),
    }


PRESET_GENERATORS: dict[PresetType, PresetGenerator] = {
    PresetType.USER: generate_user,
    PresetType.COMPANY: generate_company,
    PresetType.PRODUCT: generate_product,
    PresetType.ADDRESS: generate_address,
    PresetType.PERSONAL: generate_personal,
    PresetType.BUSINESS: generate_business,
    PresetType.LOCATION: generate_location,
    PresetType.FINANCIAL: generate_financial,
    PresetType.TECH: generate_tech,
    PresetType.HEALTH: generate_health,
}


class PresetRegistry:
    """Registry of composite preset generators.

    Lookups by name are case-insensitive and return None for unknown
    presets instead of raising.
    """

    def __init__(self):
        self._generators: dict[PresetType, PresetGenerator] = dict(PRESET_GENERATORS)

    @staticmethod
    def parse(preset: PresetType | str) -> PresetType | None:
        """Convert a preset name to its enum member, or None if unknown."""
        if isinstance(preset, PresetType):
            return preset
        try:
            return PresetType(str(preset).strip().lower())
        except ValueError:
            return None

    def get(self, preset: PresetType | str) -> PresetGenerator | None:
        """Get the generator for a preset.

        Args:
            preset: The preset (can be string or enum)

        Returns:
            The generator function or None if not found
        """
        preset_type = self.parse(preset)
        if preset_type is None:
            return None
        return self._generators.get(preset_type)

    def generate(self, preset: PresetType | str, faker: Faker) -> dict[str, Any] | None:
        """Build one preset record, or None if the preset is unknown."""
        generator = self.get(preset)
        if generator is None:
            return None
        return generator(faker)

    def list_types(self) -> list[str]:
        """List all preset names in declaration order."""
        return [preset.value for preset in self._generators]

    def __contains__(self, preset: PresetType | str) -> bool:
        return self.parse(preset) in self._generators


_global_registry: PresetRegistry | None = None


def get_preset_registry() -> PresetRegistry:
    """Get the global preset registry singleton."""
    global _global_registry
    if _global_registry is None:
        _global_registry = PresetRegistry()
    return _global_registry
