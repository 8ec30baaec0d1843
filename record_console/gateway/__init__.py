"""Remote gateway clients and the metadata bootstrap."""

from record_console.gateway.base import MetadataProvider, RemoteGateway, decode_body, read_error, read_records
from record_console.gateway.http import HttpMetadataProvider, HttpRemoteGateway
from record_console.gateway.memory import InMemoryGateway, StaticMetadataProvider, build_demo_session

__all__ = [
    "HttpMetadataProvider",
    "HttpRemoteGateway",
    "InMemoryGateway",
    "MetadataProvider",
    "RemoteGateway",
    "StaticMetadataProvider",
    "build_demo_session",
    "decode_body",
    "read_error",
    "read_records",
]
