from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Emulator endpoint and key (default values)
EMULATOR_ENDPOINT = "https://localhost:8081/"
EMULATOR_KEY = "C2y6yDjf5/R+ob0N8A7Cgv30VRDJIWEHLM+4QDU5DE2nQ9nDuVTqobD4b8mGGyPMbIZnqyMsEcaGQy67XIw/Jw=="

ConsistencyLevel = Literal["Strong", "BoundedStaleness", "Session", "ConsistentPrefix", "Eventual"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Account settings and demo knobs, read from COSMOS_* environment variables or `.env`."""

    endpoint: str = EMULATOR_ENDPOINT
    key: str = EMULATOR_KEY
    # Set this to the Cosmos DB region closest to the application
    preferred_regions: List[str] = ["West US"]
    consistency_level: ConsistencyLevel = "Eventual"
    # The emulator uses a self-signed certificate
    connection_verify: bool = False

    database_name: str = "AzureSampleFamilyDB"
    container_name: str = "FamilyContainer"
    partition_key_path: str = "/lastName"
    throughput: int = Field(default=400, ge=400)

    read_rounds: int = Field(default=3, ge=1)
    run_query: bool = False
    query_page_size: int = Field(default=10, ge=1)

    log_level: LogLevel = "INFO"

    model_config = SettingsConfigDict(env_prefix="COSMOS_", env_file=".env", extra="ignore")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @field_validator("partition_key_path")
    @classmethod
    def _absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("partition key path must start with '/'")
        return value


def get_settings() -> Settings:
    return Settings()
