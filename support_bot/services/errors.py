from __future__ import annotations


class ServiceError(RuntimeError):
    """A REST collaborator call failed (transport, status or payload)."""


class LinkServiceError(ServiceError):
    pass


class StoreServiceError(ServiceError):
    pass
