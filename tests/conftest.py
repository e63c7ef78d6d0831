import copy
import itertools
import os

import pytest
from azure.core.exceptions import ServiceRequestError
from azure.cosmos import exceptions

from cosmos_getting_started import store
from cosmos_getting_started.settings import Settings

WRITE_CHARGE = 10.0
READ_CHARGE = 1.0
QUERY_PAGE_CHARGE = 2.5

_etags = itertools.count(1)


class FakeConnection:
    def __init__(self):
        self.last_response_headers = {}

    def charge(self, request_charge):
        self.last_response_headers = {"x-ms-request-charge": str(request_charge)}


class FakeItemPaged:
    def __init__(self, documents, page_size, connection):
        self.documents = documents
        self.page_size = page_size or len(documents) or 1
        self.connection = connection

    def __iter__(self):
        return iter(self.documents)

    def by_page(self, continuation_token=None):
        for start in range(0, len(self.documents), self.page_size):
            self.connection.charge(QUERY_PAGE_CHARGE)
            yield iter(self.documents[start:start + self.page_size])


class FakeContainer:
    """In-memory stand-in for ContainerProxy."""

    def __init__(self, id, partition_key, offer_throughput, connection):
        self.id = id
        self.partition_key = partition_key
        self.offer_throughput = offer_throughput
        self.client_connection = connection
        self.items = {}
        self.failing_ids = set()
        self.unreachable_ids = set()
        self.corrupt_ids = set()
        self.fail_writes = False

    @property
    def partition_key_property(self):
        return self.partition_key.path.lstrip("/")

    def upsert_item(self, body, **kwargs):
        if self.fail_writes:
            raise exceptions.CosmosHttpResponseError(status_code=429, message="Request rate is large")
        stored = copy.deepcopy(body)
        stored.update({"_rid": f"rid-{body['id']}", "_etag": f"etag-{next(_etags)}", "_ts": 1700000000})
        self.items[(body[self.partition_key_property], body["id"])] = stored
        self.client_connection.charge(WRITE_CHARGE)
        return copy.deepcopy(stored)

    def read_item(self, item, partition_key, **kwargs):
        if item in self.failing_ids:
            raise exceptions.CosmosHttpResponseError(status_code=503, message="Service unavailable")
        if item in self.unreachable_ids:
            raise ServiceRequestError("Connection aborted")
        try:
            document = self.items[(partition_key, item)]
        except KeyError:
            raise exceptions.CosmosResourceNotFoundError(
                status_code=404, message=f"Entity with the specified id does not exist: {item}")
        self.client_connection.charge(READ_CHARGE)
        document = copy.deepcopy(document)
        if item in self.corrupt_ids:
            document["parents"] = "not a list"
        return document

    def query_items(self, query, parameters=None, enable_cross_partition_query=None, max_item_count=None, **kwargs):
        values = {parameter["name"]: parameter["value"] for parameter in parameters or []}
        last_names = values.get("@last_names", [])
        documents = [copy.deepcopy(document) for (key, _), document in sorted(self.items.items())
                     if key in last_names]
        return FakeItemPaged(documents, max_item_count, self.client_connection)


class FakeDatabase:
    def __init__(self, id, connection):
        self.id = id
        self.client_connection = connection
        self.containers = {}
        self.create_calls = 0

    def create_container_if_not_exists(self, id, partition_key, offer_throughput=None, **kwargs):
        self.create_calls += 1
        if id not in self.containers:
            self.containers[id] = FakeContainer(id, partition_key, offer_throughput, self.client_connection)
        return self.containers[id]


class FakeCosmosClient:
    def __init__(self):
        self.client_connection = FakeConnection()
        self.databases = {}
        self.closed = False

    def create_database_if_not_exists(self, id, **kwargs):
        if id not in self.databases:
            self.databases[id] = FakeDatabase(id, self.client_connection)
        return self.databases[id]

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    # Keep the developer's COSMOS_* variables and .env out of the tests
    for name in list(os.environ):
        if name.startswith("COSMOS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_client():
    return FakeCosmosClient()


@pytest.fixture
def settings():
    return Settings(_env_file=None, read_rounds=2)


@pytest.fixture
def container(fake_client, settings):
    database = store.ensure_database(fake_client, settings.database_name)
    return store.ensure_container(database, settings.container_name, settings.partition_key_path,
                                  settings.throughput)
