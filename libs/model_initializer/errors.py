"""Exceptions raised while injecting the model initializer."""

from typing import Optional


class ModelInitializerError(Exception):
    """Base exception for model initializer injection."""
    pass


class InvalidURIError(ModelInitializerError, ValueError):
    """Malformed claim locator."""

    def __init__(self, uri: str, message: Optional[str] = None):
        self.uri = uri
        super().__init__(message or f"Invalid URI must be pvc://<pvcname>/[path]: {uri}")


class CredentialConfigurationError(ModelInitializerError):
    """The config map holding credential settings cannot be found or read."""

    def __init__(self, name: str, namespace: str, reason: str):
        self.name = name
        self.namespace = namespace
        self.reason = reason
        super().__init__(f"Credential config map {namespace}/{name}: {reason}")


class CredentialInjectionError(ModelInitializerError):
    """Credentials could not be attached to the init container."""
    pass


class UserContainerNotFoundError(ModelInitializerError):
    """The pod spec has no container to receive the model."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"User container {name!r} not found in pod spec")
