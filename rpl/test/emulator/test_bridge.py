"""Tests for rpl.emulator.bridge module."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from rpl.emulator.bridge import VIEWPORT_ELEMENT_ID, EmulatorBridge, marshal
from rpl.emulator.objects import PropertyDescriptor, ScriptObject


@dataclass
class Element:
    client_width: int
    client_height: int


@dataclass
class Document:
    elements: dict[str, Element] = field(default_factory=dict)

    def get_element_by_id(self, element_id: str) -> Element | None:
        return self.elements.get(element_id)


@dataclass
class Platform:
    objects: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class InitializingPlatform:
    objects: Mapping[str, Any] = field(default_factory=dict)
    initialized: list[ScriptObject] = field(default_factory=list)

    def initialize(self, win: ScriptObject) -> None:
        self.initialized.append(win)


def _window(**values: Any) -> ScriptObject:
    win = ScriptObject(**values)
    win["screen"] = ScriptObject(width=1920, height=1080, availWidth=1920, availHeight=1040)
    win["innerWidth"] = 1600
    win["innerHeight"] = 900
    return win


class TestMarshal:
    def test_shares_value_between_targets(self) -> None:
        host, target = ScriptObject(), ScriptObject()

        marshal("device", "iPhone", host, target)
        target["device"] = "Pixel"

        assert host["device"] == "Pixel"
        assert target["device"] == "Pixel"

    def test_preserves_existing_flags(self) -> None:
        host, target = ScriptObject(), ScriptObject()
        host.define_property(
            "XMLHttpRequest",
            PropertyDescriptor(value="native", enumerable=False, configurable=True),
        )

        marshal("XMLHttpRequest", "emulated", host, target)

        host_desc = host.get_own_property_descriptor("XMLHttpRequest")
        target_desc = target.get_own_property_descriptor("XMLHttpRequest")
        assert host_desc is not None and target_desc is not None
        assert host_desc.is_accessor
        assert host_desc.enumerable is False
        assert host_desc.configurable is True
        assert target_desc.enumerable is True
        assert "XMLHttpRequest" not in list(host.keys())

    def test_missing_property_gets_default_flags(self) -> None:
        target = ScriptObject()
        marshal("tinyHippos", None, target)
        descriptor = target.get_own_property_descriptor("tinyHippos")
        assert descriptor is not None
        assert descriptor.enumerable is True
        assert descriptor.configurable is True

    def test_non_configurable_target_fails(self) -> None:
        target = ScriptObject()
        target.define_property("locked", PropertyDescriptor(value=1, configurable=False))
        with pytest.raises(TypeError):
            marshal("locked", 2, target)


class TestEmulatorBridge:
    def _setup(
        self, platform: Platform | InitializingPlatform | None = None
    ) -> tuple[EmulatorBridge, ScriptObject, ScriptObject, Document]:
        document = Document({VIEWPORT_ELEMENT_ID: Element(client_width=320, client_height=480)})
        host = _window(tinyHippos="th", XMLHttpRequest="host-xhr")
        win = _window(XMLHttpRequest="frame-xhr")
        bridge = EmulatorBridge(host, document)
        bridge.init(win, "frame-document", platform or Platform())
        return bridge, host, win, document

    def test_records_window_document_and_original_xhr(self) -> None:
        bridge, _, win, _ = self._setup()
        assert bridge.window() is win
        assert bridge.document() == "frame-document"
        assert bridge.xhr() == "frame-xhr"

    def test_globals_come_from_host(self) -> None:
        _, host, win, _ = self._setup()
        assert win["tinyHippos"] == "th"
        assert win["XMLHttpRequest"] == "host-xhr"

        win["XMLHttpRequest"] = "patched"
        assert host["XMLHttpRequest"] == "patched"

    def test_screen_reports_viewport(self) -> None:
        _, host, win, document = self._setup()

        for target in (win, host):
            screen = target["screen"]
            assert (screen["width"], screen["height"]) == (320, 480)
            assert (screen["availWidth"], screen["availHeight"]) == (320, 480)
            assert (target["innerWidth"], target["innerHeight"]) == (320, 480)

        document.elements[VIEWPORT_ELEMENT_ID].client_width = 768
        assert win["screen"]["width"] == 768
        assert host["innerWidth"] == 768

    def test_missing_viewport_element_fails_on_read(self) -> None:
        _, _, win, document = self._setup()
        document.elements.clear()
        with pytest.raises(AttributeError):
            win["innerWidth"]

    def test_platform_objects_are_marshaled(self) -> None:
        platform = Platform(objects={"device": {"name": "Bold 9700"}, "blackberry": "bb"})
        bridge, host, win, _ = self._setup(platform)

        assert win["blackberry"] == "bb"
        assert host["device"] == {"name": "Bold 9700"}
        assert set(bridge.cells) == {"tinyHippos", "XMLHttpRequest", "device", "blackberry"}

    def test_custom_builder(self) -> None:
        document = Document({VIEWPORT_ELEMENT_ID: Element(100, 200)})
        host, win = _window(), _window()
        bridge = EmulatorBridge(host, document)

        bridge.init(
            win,
            None,
            Platform(objects={"navigator": "nav"}),
            builder=lambda objects: {key.upper(): value for key, value in objects.items()},
        )

        assert win["NAVIGATOR"] == "nav"
        assert "navigator" not in win

    def test_platform_initialize_runs_with_target_window(self) -> None:
        platform = InitializingPlatform()
        _, _, win, _ = self._setup(platform)
        assert platform.initialized == [win]
