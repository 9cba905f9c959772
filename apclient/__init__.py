"""Client core for a music streaming access point: ids, credentials, keys and packet dispatch."""

__version__ = "0.1.0"