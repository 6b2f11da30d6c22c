"""Parsers for Linux /proc networking tables, partitions and pressure stall information."""

__version__ = "0.17.0"

__all__ = [
    "errors",
    "net_sockets",
    "net_tables",
    "partitions",
    "pressure",
    "snmp",
    "snmp6",
]