"""Script-style objects with own-property descriptors.

``ScriptObject`` models the part of a browser global object the emulator
needs: named properties that are either plain values or getter/setter pairs,
each carrying ``enumerable``/``configurable`` flags. Item access goes through
the descriptor, so installing an accessor redirects every later read and
write of that name.

    screen = ScriptObject(width=1920)
    screen.define_getter("width", lambda: 320)
    screen["width"]  # 320
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

__all__ = ["PropertyDescriptor", "ScriptObject"]

Getter = Callable[[], Any]
Setter = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class PropertyDescriptor:
    """A data property (``value``/``writable``) or an accessor (``get``/``set``)."""

    value: Any = None
    get: Getter | None = None
    set: Setter | None = None
    writable: bool = True
    enumerable: bool = True
    configurable: bool = True

    @property
    def is_accessor(self) -> bool:
        return self.get is not None or self.set is not None


class ScriptObject:
    """Namespace of own properties addressed by name.

    Reading a missing property raises ``KeyError`` (``AttributeError`` for
    attribute access). Writes to read-only properties are silently dropped.
    """

    def __init__(self, **values: Any) -> None:
        self._props: dict[str, PropertyDescriptor] = {
            key: PropertyDescriptor(value=value) for key, value in values.items()
        }

    def define_property(self, key: str, descriptor: PropertyDescriptor) -> None:
        """Install or replace a property.

        Raises:
            TypeError: The property exists and is not configurable.
        """
        existing = self._props.get(key)
        if existing is not None and not existing.configurable:
            raise TypeError(f"Cannot redefine property: {key}")
        self._props[key] = descriptor

    def define_getter(self, key: str, getter: Getter) -> None:
        """Install a getter, keeping the setter of an existing accessor."""
        existing = self._props.get(key)
        setter = existing.set if existing is not None and existing.is_accessor else None
        self.define_property(key, PropertyDescriptor(get=getter, set=setter))

    def get_own_property_descriptor(self, key: str) -> PropertyDescriptor | None:
        return self._props.get(key)

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._props:
            return default
        return self[key]

    def keys(self) -> Iterator[str]:
        """Enumerable own property names, in definition order."""
        return (key for key, d in self._props.items() if d.enumerable)

    def __getitem__(self, key: str) -> Any:
        descriptor = self._props[key]
        if descriptor.is_accessor:
            return descriptor.get() if descriptor.get is not None else None
        return descriptor.value

    def __setitem__(self, key: str, value: Any) -> None:
        descriptor = self._props.get(key)
        if descriptor is None:
            self._props[key] = PropertyDescriptor(value=value)
        elif descriptor.is_accessor:
            if descriptor.set is not None:
                descriptor.set(value)
        elif descriptor.writable:
            self._props[key] = PropertyDescriptor(
                value=value,
                writable=True,
                enumerable=descriptor.enumerable,
                configurable=descriptor.configurable,
            )

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __contains__(self, key: object) -> bool:
        return key in self._props

    def __iter__(self) -> Iterator[str]:
        return self.keys()

    def __repr__(self) -> str:
        return f"ScriptObject({', '.join(self._props)})"
