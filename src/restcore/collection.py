r"""Resolve the field holding the collection of a paginated payload.

Paginated responses carry their items in one list field, either at the
top level of the payload or inside an ``_embedded`` object. Resources
should declare the name of that field; when they do not, it is detected
from a closed list of known collection names.
"""

from __future__ import annotations

__all__ = [
    "COLLECTION_KEYS",
    "CollectionResolver",
    "collection_container",
    "known_collection_key",
    "resolve_collection_key",
]

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from restcore.exceptions import CollectionResolutionError

if TYPE_CHECKING:
    from restcore.entity import Entity

logger: logging.Logger = logging.getLogger(__name__)

EMBEDDED_KEY = "_embedded"

# Known collection names, in priority order. The generic ``data`` field
# comes last so that a named collection always wins over it.
COLLECTION_KEYS = (
    "calls",
    "users",
    "legs",
    "conversations",
    "applications",
    "records",
    "reports",
    "networks",
    "countries",
    "media",
    "numbers",
    "events",
    "data",
)


def collection_container(entity: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the object holding the collection: the ``_embedded``
    object if present, the entity itself otherwise.

    Example:
        ```pycon
        >>> from restcore.collection import collection_container
        >>> from restcore.entity import Entity
        >>> collection_container(Entity({"_embedded": {"legs": []}, "page": 1}))
        Entity({'legs': []})

        ```
    """
    embedded = entity.get(EMBEDDED_KEY)
    if isinstance(embedded, Mapping):
        return embedded
    return entity


def known_collection_key(container: Mapping[str, Any]) -> str | None:
    """Return the first known collection name present in ``container``,
    or ``None`` if it holds none of them."""
    return next((key for key in COLLECTION_KEYS if key in container), None)


def resolve_collection_key(entity: Mapping[str, Any]) -> str:
    """Find the name of the collection field of a paginated payload.

    The ``_embedded`` object is inspected first if present, then the
    known collection names are checked in priority order. If none of
    them is present, the first declared field is used and a warning is
    logged because the payload shape is not modelled.

    Args:
        entity: The decoded payload.

    Returns:
        The name of the collection field.

    Raises:
        CollectionResolutionError: If the payload has no field at all.

    Example:
        ```pycon
        >>> from restcore.collection import resolve_collection_key
        >>> from restcore.entity import Entity
        >>> resolve_collection_key(Entity({"_embedded": {"legs": []}}))
        'legs'
        >>> resolve_collection_key(Entity({"count": 2, "data": [1, 2]}))
        'data'

        ```
    """
    container = collection_container(entity)
    key = known_collection_key(container)
    if key is not None:
        return key
    fallback = next(iter(container), None)
    if fallback is None:
        msg = "cannot resolve the collection of an empty payload"
        raise CollectionResolutionError(msg)
    logger.warning(
        f"No known collection field in payload with fields {list(container)}, "
        f"falling back to the first field {fallback!r}"
    )
    return fallback


class CollectionResolver:
    """Resolve and cache the collection field for one call chain.

    A resolver is created for every paginated operation, so the cached
    key never leaks between endpoints.

    Args:
        declared: The collection field declared by the resource. If set,
            no detection is performed.

    Example:
        ```pycon
        >>> from restcore.collection import CollectionResolver
        >>> from restcore.entity import Entity
        >>> resolver = CollectionResolver()
        >>> resolver.resolve(Entity({"users": []}))
        'users'
        >>> CollectionResolver(declared="items").resolve(Entity({"users": []}))
        'items'

        ```
    """

    def __init__(self, declared: str | None = None) -> None:
        self._key = declared

    @property
    def key(self) -> str | None:
        return self._key

    def resolve(self, entity: Mapping[str, Any]) -> str:
        if self._key is None:
            self._key = resolve_collection_key(entity)
        return self._key

    def merge(self, target: Entity, source: Entity) -> None:
        """Append the collection items of ``source`` to the collection
        of ``target``, preserving their order.

        The collection is looked up in the ``_embedded`` object of each
        entity independently.

        Args:
            target: The accumulated entity, updated in place.
            source: The entity of the page just fetched.

        Raises:
            CollectionResolutionError: If ``target`` has no list under
                the collection field, or if ``source`` holds a non-list
                value under it.
        """
        key = self.resolve(target)
        target_items = collection_container(target).get(key)
        if not isinstance(target_items, list):
            msg = f"collection field {key!r} of the accumulated payload is not a list"
            raise CollectionResolutionError(msg)
        source_items = collection_container(source).get(key)
        if source_items is None:
            logger.debug(f"Page has no {key!r} field, nothing to merge")
            return
        if not isinstance(source_items, list):
            msg = f"collection field {key!r} of the fetched page is not a list"
            raise CollectionResolutionError(msg)
        target_items.extend(source_items)
