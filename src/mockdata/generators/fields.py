"""Atomic Generator Registry.

Maps a field name such as ``email`` or ``latitude`` to a function that draws
one value from a request's Faker instance. The registry is fixed at import
time and read-only afterwards; every field always produces the same value
type (``latitude`` is always a float, ``price`` always a float, etc.).
"""

from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from faker import Faker

FieldGenerator = Callable[[Faker], Any]


def _birthdate(faker: Faker) -> str:
    return faker.date_of_birth(minimum_age=18, maximum_age=90).isoformat()


FIELD_GENERATORS: Mapping[str, FieldGenerator] = MappingProxyType({
    # Personal
    "firstName": lambda f: f.first_name(),
    "lastName": lambda f: f.last_name(),
    "fullName": lambda f: f.name(),
    "username": lambda f: f.user_name(),
    "password": lambda f: f.password(length=12),
    "email": lambda f: f.email(),
    "phone": lambda f: f.phone_number(),
    "birthdate": _birthdate,

    # Address
    "street": lambda f: f.street_address(),
    "city": lambda f: f.city(),
    "state": lambda f: f.state(),
    "postalCode": lambda f: f.postcode(),
    "country": lambda f: f.country(),

    # Business & work
    "companyName": lambda f: f.company(),
    "jobTitle": lambda f: f.job(),
    "department": lambda f: f.department(),
    "taxId": lambda f: f.tax_id(),
    "businessId": lambda f: f.business_id(),

    # Location
    "latitude": lambda f: float(f.latitude()),
    "longitude": lambda f: float(f.longitude()),

    # Financial
    "creditCardNumber": lambda f: f.credit_card_number(),
    "bankAccountNumber": lambda f: f.bank_account_number(length=12),
    "iban": lambda f: f.iban(),
    "swift": lambda f: f.swift(),
    "ethereumAddress": lambda f: f.ethereum_address(),
    "bitcoinAddress": lambda f: f.bitcoin_address(),

    # Product & e-commerce
    "productName": lambda f: f.product_name(),
    "sku": lambda f: f.sku(),
    "category": lambda f: f.department(),
    "description": lambda f: f.product_description(),
    "price": lambda f: f.price(min_value=1, max_value=1500),

    # Internet & tech
    "ipv4": lambda f: f.ipv4(),
    "ipv6": lambda f: f.ipv6(),
    "macAddress": lambda f: f.mac_address(),
    "url": lambda f: f.url(),
    "uuid": lambda f: f.uuid4(),
    "lorem": lambda f: f.paragraph(),

    # Health (fake)
    "patientName": lambda f: f.name(),
    "medicalRecordNumber": lambda f: f.medical_record_number(),
    "icd10Code": lambda f: f.icd10_code(),
})


class FieldRegistry:
    """Read-only lookup over the atomic field generators."""

    def __init__(self, generators: Mapping[str, FieldGenerator] | None = None):
        self._generators = MappingProxyType(dict(generators or FIELD_GENERATORS))

    def get(self, name: str) -> FieldGenerator | None:
        """Get the generator for a field name (case-sensitive)."""
        return self._generators.get(name)

    def generate(self, name: str, faker: Faker) -> Any | None:
        """Draw one value for a field.

        Args:
            name: Field name
            faker: The request's Faker instance

        Returns:
            The generated value, or None if the field is unknown
        """
        generator = self.get(name)
        if generator is None:
            return None
        return generator(faker)

    def list_fields(self) -> list[str]:
        """List all field names, sorted."""
        return sorted(self._generators)

    def __contains__(self, name: object) -> bool:
        return name in self._generators

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_fields())

    def __len__(self) -> int:
        return len(self._generators)


_global_registry: FieldRegistry | None = None


def get_field_registry() -> FieldRegistry:
    """Get the global field registry singleton."""
    global _global_registry
    if _global_registry is None:
        _global_registry = FieldRegistry()
    return _global_registry
