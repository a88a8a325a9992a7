"""Key/value backends for the selected-tenant store."""

from tenancy.infrastructure.storage.json_file import JsonFileKeyValueBackend
from tenancy.infrastructure.storage.memory import InMemoryKeyValueBackend

__all__ = [
    "InMemoryKeyValueBackend",
    "JsonFileKeyValueBackend",
]
