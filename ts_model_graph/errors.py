"""
Exceptions raised by ts_model_graph.

Unresolvable type references are never errors: they are kept as raw names.
These exceptions only signal misuse of the registry or malformed dumps.
"""

from __future__ import annotations


class ModelGraphError(Exception):
    """Base class for all ts_model_graph errors."""

    pass


class RegistryError(ModelGraphError):
    """Raised when the model registry is used out of order."""

    pass


class DuplicateDeclarationError(RegistryError):
    """Raised when two declarations share a name."""

    def __init__(self, name: str):
        super().__init__(f"Declaration '{name}' is already registered")
        self.name = name


class RegistrySealedError(RegistryError):
    """Raised when registering into a sealed registry."""

    def __init__(self, name: str):
        super().__init__(f"Cannot register '{name}': the registry is sealed")
        self.name = name


class RegistryNotSealedError(RegistryError):
    """Raised when schema classification starts before registration is complete."""

    pass


class DeclarationParseError(ModelGraphError):
    """Raised when a declaration dump cannot be parsed.

    Attributes:
        path: JSON path of the offending value (e.g. ``#/classes/2/members/0``)
    """

    def __init__(self, message: str, path: str = ""):
        super().__init__(f"{message} at {path}" if path else message)
        self.path = path
