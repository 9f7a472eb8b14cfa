"""Application ports (Protocols) implemented by infrastructure."""

from esgsearch.application.interfaces.repositories import (
    ICollectionSearchRepository,
    IRecentSearchStore,
    IRecordStore,
)

__all__ = [
    "ICollectionSearchRepository",
    "IRecentSearchStore",
    "IRecordStore",
]
