"""Sample "Family" documents written to and read back from the container.

Documents are stored with camelCase property names (``lastName``,
``isRegistered``, ...); ``lastName`` is the partition key.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CosmosModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Parent(CosmosModel):
    family_name: Optional[str] = None
    first_name: str


class Pet(CosmosModel):
    given_name: str


class Child(CosmosModel):
    family_name: Optional[str] = None
    first_name: str
    gender: Optional[str] = None
    grade: Optional[int] = None
    pets: List[Pet] = Field(default_factory=list)


class Address(CosmosModel):
    state: str
    county: str
    city: str


class Family(CosmosModel):
    id: str
    last_name: str
    district: Optional[str] = None
    parents: List[Parent] = Field(default_factory=list)
    children: List[Child] = Field(default_factory=list)
    address: Optional[Address] = None
    is_registered: bool = False

    @property
    def partition_key(self) -> str:
        return self.last_name

    def to_document(self) -> Dict[str, Any]:
        """JSON-ready body as stored in the container."""
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Family":
        # System properties (_rid, _etag, _ts, ...) are dropped
        return cls.model_validate(document)


def andersen_family() -> Family:
    return Family(
        id="Andersen.1",
        last_name="Andersen",
        district="WA5",
        parents=[
            Parent(family_name="Andersen", first_name="Thomas"),
            Parent(family_name="Andersen", first_name="Mary Kay"),
        ],
        children=[
            Child(
                family_name="Andersen",
                first_name="Henriette Thaulow",
                gender="female",
                grade=5,
                pets=[Pet(given_name="Fluffy")],
            ),
        ],
        address=Address(state="WA", county="King", city="Seattle"),
        is_registered=True,
    )


def wakefield_family() -> Family:
    return Family(
        id="Wakefield.7",
        last_name="Wakefield",
        district="NY23",
        parents=[
            Parent(family_name="Wakefield", first_name="Robin"),
            Parent(family_name="Miller", first_name="Ben"),
        ],
        children=[
            Child(
                family_name="Merriam",
                first_name="Jesse",
                gender="female",
                grade=8,
                pets=[Pet(given_name="Goofy"), Pet(given_name="Shadow")],
            ),
            Child(family_name="Miller", first_name="Lisa", gender="female", grade=1),
        ],
        address=Address(state="NY", county="Manhattan", city="NY"),
        is_registered=False,
    )


def johnson_family() -> Family:
    return Family(
        id="Johnson.1",
        last_name="Johnson",
        district="NY23",
        parents=[
            Parent(first_name="John"),
            Parent(first_name="Lili"),
        ],
        address=Address(state="NY", county="Manhattan", city="NY"),
        is_registered=False,
    )


def smith_family() -> Family:
    return Family(
        id="Smith.1",
        last_name="Smith",
        district="WA5",
        parents=[
            Parent(first_name="John"),
            Parent(first_name="Lili"),
        ],
        children=[
            Child(first_name="Michael", gender="male", grade=3),
        ],
        address=Address(state="WA", county="King", city="Seattle"),
        is_registered=True,
    )


def sample_families() -> List[Family]:
    """Fresh copies of the four sample families."""
    return [andersen_family(), wakefield_family(), johnson_family(), smith_family()]
