"""
Portfolio aggregate root.

Holds the entities, the currency registry and the base currency reference.
The base currency is always one of the registered currency objects.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from loguru import logger

from portfolio_tracker.core.exceptions.portfolio import ValidationError
from portfolio_tracker.core.utils.validation import remove_at, validate_currency_code

from .asset import Asset
from .currency import Currency
from .entity import Entity


@dataclass(eq=False)
class Portfolio:
    """Root of the document graph.

    docroot is the directory of the document file and is never persisted.
    """

    base_currency: Currency
    name: str = ""
    entities: list[Entity] = field(default_factory=list)
    currencies: list[Currency] = field(default_factory=list)
    docroot: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        if not any(c is self.base_currency for c in self.currencies):
            existing = self.find_currency(self.base_currency.iso)
            if existing is not None:
                self.base_currency = existing
            else:
                self.currencies.append(self.base_currency)

    def find_currency(self, iso: str) -> Currency | None:
        """Registered currency with the given code (case-sensitive)."""
        for currency in self.currencies:
            if currency.iso == iso:
                return currency
        return None

    def get_or_create_currency(self, iso: str) -> Currency:
        """Registered currency for iso, registering an empty one if missing."""
        currency = self.find_currency(iso)
        if currency is None:
            logger.warning(f"Currency {iso} not registered, adding it without rates")
            currency = Currency(iso=validate_currency_code(iso))
            self.currencies.append(currency)
        return currency

    def add_currency(self, currency: Currency) -> Currency:
        """Register a currency.

        Raises:
            ValidationError: If a currency with the same code already exists
        """
        if self.find_currency(currency.iso) is not None:
            raise ValidationError(f"Currency already registered: {currency.iso}")
        self.currencies.append(currency)
        return currency

    def delete_currency(self, iso: str) -> bool:
        """Remove a currency by code.

        Returns False if the code is unknown, is the base currency, or is
        still used by an entity.
        """
        for index, currency in enumerate(self.currencies):
            if currency.iso != iso:
                continue
            if currency is self.base_currency:
                return False
            if any(entity.currency is currency for entity in self.entities):
                return False
            return remove_at(self.currencies, index)
        return False

    def add_entity(self, entity: Entity) -> Entity:
        """Append an entity, sharing the registered currency object."""
        entity.currency = self._registered(entity.currency)
        self.entities.append(entity)
        return entity

    def delete_entity(self, index: int) -> bool:
        return remove_at(self.entities, index)

    def all_assets(self) -> Iterator[Asset]:
        for entity in self.entities:
            yield from entity.assets

    def entity_assets(self) -> Iterator[tuple[Entity, Asset]]:
        for entity in self.entities:
            for asset in entity.assets:
                yield entity, asset

    def _registered(self, currency: Currency) -> Currency:
        if any(c is currency for c in self.currencies):
            return currency
        existing = self.find_currency(currency.iso)
        if existing is not None:
            return existing
        self.currencies.append(currency)
        return currency
