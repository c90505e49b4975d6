"""Tool definitions, permission policies, JSON validation, a key-value store and HTTP tools."""

__version__ = "0.4.0"