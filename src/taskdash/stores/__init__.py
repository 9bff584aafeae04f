"""Client-side state containers built on top of the API services."""

from taskdash.stores.auth import AuthStore
from taskdash.stores.banner import Banner
from taskdash.stores.collection import CollectionService, PagedCollectionStore

__all__ = ["AuthStore", "Banner", "CollectionService", "PagedCollectionStore"]
