"""Thin wrappers around the azure-cosmos client used by the demo."""

import logging
import time
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

import urllib3
from azure.cosmos import ContainerProxy, CosmosClient, DatabaseProxy, PartitionKey

from cosmos_getting_started.families import Family
from cosmos_getting_started.settings import Settings

logger = logging.getLogger(__name__)

REQUEST_CHARGE_HEADER = "x-ms-request-charge"

FAMILY_QUERY = "SELECT * FROM Family f WHERE ARRAY_CONTAINS(@last_names, f.lastName)"


@dataclass(frozen=True)
class OperationResult:
    request_charge: float
    latency_ms: float


@dataclass(frozen=True)
class QueryPage:
    families: List[Family]
    request_charge: float


def _request_charge(container: ContainerProxy) -> float:
    headers = container.client_connection.last_response_headers or {}
    return float(headers.get(REQUEST_CHARGE_HEADER, 0))


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def connect(settings: Settings) -> CosmosClient:
    if not settings.connection_verify:
        # Disable SSL warnings for the emulator (since it uses self-signed cert)
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    logger.info("Connecting to %s (regions=%s, consistency=%s)",
                settings.endpoint, settings.preferred_regions, settings.consistency_level)
    return CosmosClient(
        settings.endpoint,
        credential=settings.key,
        consistency_level=settings.consistency_level,
        preferred_locations=list(settings.preferred_regions),
        connection_verify=settings.connection_verify,
    )


def ensure_database(client: CosmosClient, name: str) -> DatabaseProxy:
    # Create database if not exists
    database = client.create_database_if_not_exists(id=name)
    logger.info("Database ready: %s", database.id)
    return database


def ensure_container(database: DatabaseProxy, name: str, partition_key_path: str,
                     throughput: int) -> ContainerProxy:
    # Create container if not exists, with manual throughput
    container = database.create_container_if_not_exists(
        id=name,
        partition_key=PartitionKey(path=partition_key_path),
        offer_throughput=throughput,
    )
    logger.info("Container ready: %s (partition key %s, %d RU/s)",
                container.id, partition_key_path, throughput)
    return container


def insert(container: ContainerProxy, family: Family) -> OperationResult:
    """Write one family; upsert so a re-run against the same container succeeds."""
    started = time.perf_counter()
    container.upsert_item(body=family.to_document())
    return OperationResult(request_charge=_request_charge(container), latency_ms=_elapsed_ms(started))


def point_read(container: ContainerProxy, item_id: str, partition_key: str) -> Tuple[Family, OperationResult]:
    """Look up one family by id and partition key.

    Raises ``CosmosResourceNotFoundError`` when the item does not exist.
    """
    started = time.perf_counter()
    document = container.read_item(item=item_id, partition_key=partition_key)
    result = OperationResult(request_charge=_request_charge(container), latency_ms=_elapsed_ms(started))
    return Family.from_document(document), result


def query(container: ContainerProxy, last_names: Sequence[str], page_size: int) -> Iterator[QueryPage]:
    """Lazily page through the families whose last name is in ``last_names``.

    The page charge comes from the last response header, so on a cross-partition
    fan-out it only covers the final backend request of that page.
    """
    pages = container.query_items(
        query=FAMILY_QUERY,
        parameters=[{"name": "@last_names", "value": list(last_names)}],
        enable_cross_partition_query=True,
        max_item_count=page_size,
    ).by_page()
    for page in pages:
        families = [Family.from_document(document) for document in page]
        yield QueryPage(families=families, request_charge=_request_charge(container))
