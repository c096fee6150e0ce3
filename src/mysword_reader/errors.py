"""Exceptions raised across the public API."""


class MySwordError(Exception):
    """Base class for MySword Reader errors."""


class LoadError(MySwordError):
    """Raw bytes could not be opened as a module database."""


class UnknownModuleError(MySwordError, KeyError):
    """No module is registered under the requested id."""


class QueryError(MySwordError):
    """The engine rejected a read query (missing table or column, bad data)."""
