"""Bridge between the host window and the emulated device window.

``EmulatorBridge.init`` rewires a fixed set of globals so code running in the
emulated window sees the emulator's objects and the emulator's screen size:

- ``tinyHippos``, ``XMLHttpRequest`` and every object the current platform
  provides are shared between the host window and the target window through
  one value cell per name; a write through either window is seen by both.
- ``screen.width``/``height``/``availWidth``/``availHeight`` and
  ``innerWidth``/``innerHeight`` report the client box of the host document's
  ``viewport-container`` element, read on every access.

Replaced properties keep the ``enumerable``/``configurable`` flags they had
before, so enumerating a window lists the same names as before.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

from rpl.emulator.objects import PropertyDescriptor, ScriptObject

__all__ = [
    "EmulatedPlatform",
    "EmulatorBridge",
    "HostDocument",
    "SandboxBuilder",
    "ValueCell",
    "VIEWPORT_ELEMENT_ID",
    "marshal",
]

VIEWPORT_ELEMENT_ID = "viewport-container"

_SCREEN_PROPERTIES = {
    "availWidth": "client_width",
    "availHeight": "client_height",
    "width": "client_width",
    "height": "client_height",
}

_WINDOW_PROPERTIES = {
    "innerWidth": "client_width",
    "innerHeight": "client_height",
}


class ViewportElement(Protocol):
    client_width: int
    client_height: int


class HostDocument(Protocol):
    def get_element_by_id(self, element_id: str) -> ViewportElement | None: ...


class EmulatedPlatform(Protocol):
    """The platform being emulated.

    May also define ``initialize(win)``, called before its objects are
    installed.
    """

    @property
    def objects(self) -> Mapping[str, Any]: ...


SandboxBuilder = Callable[[Mapping[str, Any]], Mapping[str, Any]]


class ValueCell:
    """Current value of one marshaled name."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"ValueCell({self.value!r})"


def marshal(key: str, value: Any, *targets: ScriptObject) -> ValueCell:
    """Point ``key`` on every target at one shared cell holding ``value``.

    Each target keeps the enumerable/configurable flags of its own previous
    ``key`` property; a target without one gets both flags set.

    Raises:
        TypeError: A target's existing property is not configurable.
    """
    cell = ValueCell(value)

    def getter() -> Any:
        return cell.value

    def setter(new_value: Any) -> None:
        cell.value = new_value

    for target in targets:
        existing = target.get_own_property_descriptor(key)
        target.define_property(
            key,
            PropertyDescriptor(
                get=getter,
                set=setter,
                configurable=existing.configurable if existing is not None else True,
                enumerable=existing.enumerable if existing is not None else True,
            ),
        )
    return cell


class EmulatorBridge:
    """Installs the emulator's view of the world onto a target window.

    Attributes:
        cells: Value cell of every marshaled name, after ``init``.
    """

    def __init__(self, host_window: ScriptObject, host_document: HostDocument) -> None:
        self._host = host_window
        self._host_document = host_document
        self._win: ScriptObject | None = None
        self._doc: object | None = None
        self._xhr: Any = None
        self.cells: dict[str, ValueCell] = {}

    def init(
        self,
        win: ScriptObject,
        doc: object,
        platform: EmulatedPlatform,
        builder: SandboxBuilder | None = None,
    ) -> None:
        self._win = win
        self._doc = doc
        self._xhr = win.get("XMLHttpRequest")

        self._marshal("tinyHippos", self._host.get("tinyHippos"), win)
        self._marshal("XMLHttpRequest", self._host.get("XMLHttpRequest"), win)

        initialize: Callable[[ScriptObject], object] | None = getattr(
            platform, "initialize", None
        )
        if initialize is not None:
            initialize(win)

        build = builder if builder is not None else dict
        sandbox = build(platform.objects)
        for key, value in sandbox.items():
            self._marshal(key, value, win)

        self._marshal_screen(win)
        self._marshal_screen(self._host)

    def window(self) -> ScriptObject | None:
        return self._win

    def document(self) -> object | None:
        return self._doc

    def xhr(self) -> Any:
        """The target window's own ``XMLHttpRequest``, from before ``init``."""
        return self._xhr

    def viewport_size(self, attr: str) -> int:
        viewport = self._host_document.get_element_by_id(VIEWPORT_ELEMENT_ID)
        return getattr(viewport, attr)

    def _marshal(self, key: str, value: Any, win: ScriptObject) -> None:
        self.cells[key] = marshal(key, value, self._host, win)

    def _marshal_screen(self, win: ScriptObject) -> None:
        screen: ScriptObject = win["screen"]
        for prop, attr in _SCREEN_PROPERTIES.items():
            screen.define_getter(prop, self._viewport_getter(attr))
        for prop, attr in _WINDOW_PROPERTIES.items():
            win.define_getter(prop, self._viewport_getter(attr))

    def _viewport_getter(self, attr: str) -> Callable[[], int]:
        return lambda: self.viewport_size(attr)
