"""Async client for the Avatica JSON-over-HTTP SQL protocol."""

from avatica_client.__about__ import __version__
from avatica_client.core.channel import HttpChannel, RpcChannel
from avatica_client.core.config import ClientConfig, resolve_config
from avatica_client.core.connection import Connection
from avatica_client.core.exceptions import (
    AvaticaError,
    ConfigError,
    InterfaceError,
    NetworkError,
    ProtocolError,
    ServerError,
    TimeoutError,
)
from avatica_client.core.factory import ConnectionFactory
from avatica_client.core.filters import MetadataFilter
from avatica_client.core.models import ColumnMeta, ResultSet
from avatica_client.core.parameters import ParameterType, StatementParameter

__all__ = [
    "AvaticaError",
    "ClientConfig",
    "ColumnMeta",
    "ConfigError",
    "Connection",
    "ConnectionFactory",
    "HttpChannel",
    "InterfaceError",
    "MetadataFilter",
    "NetworkError",
    "ParameterType",
    "ProtocolError",
    "ResultSet",
    "RpcChannel",
    "ServerError",
    "StatementParameter",
    "TimeoutError",
    "__version__",
    "resolve_config",
]
