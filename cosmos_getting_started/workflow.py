# The demo flow as a graph:
# ensure_database -> ensure_container -> create_families -> read_items
# read_items loops on itself for each read round, then goes to query_items (optional) and summary

import logging
from typing import Any, List, Optional, TypedDict

from azure.core.exceptions import AzureError
from azure.cosmos import ContainerProxy, CosmosClient, DatabaseProxy
from langgraph.graph import StateGraph
from pydantic import ValidationError

from cosmos_getting_started import store
from cosmos_getting_started.families import Family, sample_families
from cosmos_getting_started.settings import Settings

logger = logging.getLogger(__name__)

QUERY_LAST_NAMES = ["Andersen", "Wakefield", "Johnson"]

# Nodes executed outside the read loop, plus headroom
FIXED_STEPS = 10


class DemoState(TypedDict):
    settings: Settings
    client: CosmosClient
    database: Optional[DatabaseProxy]
    container: Optional[ContainerProxy]
    families: List[Family]
    total_request_charge: float
    rounds_done: int
    read_failures: int
    query_item_ids: List[str]


def ensure_database_node(state: DemoState) -> Any:
    """Node that creates the database if it does not exist."""
    database = store.ensure_database(state["client"], state["settings"].database_name)
    return {"database": database}


def ensure_container_node(state: DemoState) -> Any:
    """Node that creates the container if it does not exist."""
    settings = state["settings"]
    container = store.ensure_container(
        state["database"],
        settings.container_name,
        settings.partition_key_path,
        settings.throughput,
    )
    return {"container": container}


def create_families_node(state: DemoState) -> Any:
    """Node that writes every sample family. Errors propagate out of the graph."""
    total_request_charge = state["total_request_charge"]
    for family in state["families"]:
        result = store.insert(state["container"], family)
        total_request_charge += result.request_charge
    logger.info("Created %d items with total request charge of %.2f",
                len(state["families"]), total_request_charge)
    return {"total_request_charge": total_request_charge}


def read_items_node(state: DemoState) -> Any:
    """Node that point-reads every family once and prints each latency."""
    read_failures = state["read_failures"]
    for family in state["families"]:
        try:
            _, result = store.point_read(state["container"], family.id, family.partition_key)
        except (AzureError, ValidationError):
            # Service, transport and unreadable-document failures only cost this item
            logger.exception("Failed to read item %s (partition key %s)", family.id, family.partition_key)
            read_failures += 1
            continue
        print(f"{result.latency_ms:.0f} ms")
    return {"rounds_done": state["rounds_done"] + 1, "read_failures": read_failures}


def should_read_again(state: DemoState) -> str:
    """Decides whether to run another read round."""
    if state["rounds_done"] < state["settings"].read_rounds:
        return "loop"
    if state["settings"].run_query:
        return "query"
    return "exit"


def query_items_node(state: DemoState) -> Any:
    """Node that runs the filtered query and prints each page."""
    item_ids = []
    pages = store.query(state["container"], QUERY_LAST_NAMES, state["settings"].query_page_size)
    for page in pages:
        print(f"Got a page of query result with {len(page.families)} items(s) "
              f"and request charge of {page.request_charge}")
        page_ids = [family.id for family in page.families]
        print(f"Item Ids {page_ids}")
        item_ids.extend(page_ids)
    return {"query_item_ids": item_ids}


def summary_node(state: DemoState) -> Any:
    """Node that prints the run totals."""
    print(f"Done: {state['rounds_done']} read round(s), {state['read_failures']} failed read(s), "
          f"{state['total_request_charge']:.2f} RU spent on writes")
    return {}


def build_workflow():
    graph = StateGraph(DemoState)
    graph.add_node("ensure_database", ensure_database_node)
    graph.add_node("ensure_container", ensure_container_node)
    graph.add_node("create_families", create_families_node)
    graph.add_node("read_items", read_items_node)
    graph.add_node("query_items", query_items_node)
    graph.add_node("summary", summary_node)

    graph.set_entry_point("ensure_database")
    graph.add_edge("ensure_database", "ensure_container")
    graph.add_edge("ensure_container", "create_families")
    graph.add_edge("create_families", "read_items")
    graph.add_conditional_edges("read_items", should_read_again, {
        "loop": "read_items",
        "query": "query_items",
        "exit": "summary",
    })
    graph.add_edge("query_items", "summary")
    graph.set_finish_point("summary")
    return graph.compile()


def run_demo(client: CosmosClient, settings: Settings) -> DemoState:
    app = build_workflow()
    state = DemoState(
        settings=settings,
        client=client,
        database=None,
        container=None,
        families=sample_families(),
        total_request_charge=0.0,
        rounds_done=0,
        read_failures=0,
        query_item_ids=[],
    )
    return app.invoke(state, config={"recursion_limit": settings.read_rounds + FIXED_STEPS})
