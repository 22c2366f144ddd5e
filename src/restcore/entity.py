r"""Dynamically shaped representation of decoded JSON payloads.

API responses do not follow a fixed schema, so decoded objects are
exposed as ``Entity`` instances: mutable mappings that also support
attribute access to their fields. Nested JSON objects are decoded as
``Entity`` instances and JSON arrays as Python lists.
"""

from __future__ import annotations

__all__ = ["Entity"]

import json
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any


class Entity(MutableMapping[str, Any]):
    """Mutable mapping with attribute access to its fields.

    Attribute access only reaches fields whose names are not already
    attributes of the mapping. Fields named like a mapping method
    (``items``, ``keys``, ``values``, ``get``, ``pop``, ``update`` and
    the other ``MutableMapping`` methods), or like ``attributes``,
    ``first_key``, ``to_dict`` and ``from_json``, must be read with item
    access: ``entity["items"]``. Item access is what the collection
    resolver and the pagination engine use.

    Args:
        attributes: The initial fields of the entity.
        **kwargs: Additional fields, applied after ``attributes``.

    Example:
        ```pycon
        >>> from restcore.entity import Entity
        >>> entity = Entity.from_json('{"page": 1, "_embedded": {"legs": [{"uuid": "a"}]}}')
        >>> entity.page
        1
        >>> entity["_embedded"].legs[0].uuid
        'a'
        >>> entity.first_key()
        'page'
        >>> Entity({"items": [1, 2]})["items"]
        [1, 2]

        ```
    """

    def __init__(self, attributes: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        self._attributes: dict[str, Any] = dict(attributes or {}, **kwargs)

    @classmethod
    def from_json(cls, text: str | bytes) -> Entity:
        """Decode a JSON document into an entity.

        Args:
            text: The JSON document. Its top level must be an object.

        Returns:
            The decoded entity.

        Raises:
            json.JSONDecodeError: If the document is not valid JSON.
            TypeError: If the top level of the document is not an object.
        """
        decoded = json.loads(text, object_hook=cls)
        if not isinstance(decoded, cls):
            msg = f"expected a JSON object at the top level, got {type(decoded).__name__}"
            raise TypeError(msg)
        return decoded

    @property
    def attributes(self) -> dict[str, Any]:
        return self._attributes

    def first_key(self) -> str | None:
        """Return the first declared field name, or ``None`` if the
        entity is empty."""
        return next(iter(self._attributes), None)

    def to_dict(self) -> dict[str, Any]:
        """Convert the entity, recursively, to plain dictionaries and
        lists."""
        return {key: _to_plain(value) for key, value in self._attributes.items()}

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._attributes[name]
        except KeyError:
            msg = f"{type(self).__name__!r} object has no attribute {name!r}"
            raise AttributeError(msg) from None

    def __getitem__(self, key: str) -> Any:
        return self._attributes[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def __delitem__(self, key: str) -> None:
        del self._attributes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entity):
            return self._attributes == other._attributes
        if isinstance(other, Mapping):
            return self._attributes == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"


def _to_plain(value: Any) -> Any:
    if isinstance(value, Entity):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_plain(item) for item in value]
    return value
