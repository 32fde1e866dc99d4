from .errors import LinkServiceError, ServiceError, StoreServiceError
from .gmodstore import GmodStoreClient
from .link import LinkClient

__all__ = [
    "GmodStoreClient",
    "LinkClient",
    "LinkServiceError",
    "ServiceError",
    "StoreServiceError",
]
