from dataclasses import dataclass

from event_seating.application.catalog_service import CatalogService
from event_seating.application.inventory_service import InventoryService
from event_seating.application.ledger_service import LedgerService
from event_seating.application.query_service import QueryService
from event_seating.infrastructure.db.session import Database


@dataclass(frozen=True)
class Services:
    catalog: CatalogService
    inventory: InventoryService
    ledger: LedgerService
    queries: QueryService


def build_services(database: Database) -> Services:
    return Services(
        catalog=CatalogService(database),
        inventory=InventoryService(database),
        ledger=LedgerService(database),
        queries=QueryService(database),
    )
