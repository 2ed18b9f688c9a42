"""
hospital/theme.py

Theme preference resolution.

The user picks light, dark or system.  In system mode the resolved theme
shadows the OS color scheme, which can change at any time without user
action.  The resolver keeps a root-level ``dark`` marker in sync so the
presentation layer can style itself from one flag.
"""

from __future__ import annotations

import logging
from typing import Callable, Literal, Optional, Union

from pydantic import TypeAdapter

from hospital.events import Signal, Subscription
from hospital.mirror import THEME, DurableMirror
from storage.models import ColorScheme, ThemePreference
from storage.seed import DEFAULT_THEME

logger = logging.getLogger(__name__)

_THEME_ADAPTER = TypeAdapter(Literal["light", "dark", "system"])

DARK_MARKER = "dark"

PALETTES: dict[str, dict[str, str]] = {
    "dark": {
        "background": "#111827",
        "surface": "#1f2937",
        "surfaceHover": "#374151",
        "border": "#374151",
        "textPrimary": "#f9fafb",
        "textSecondary": "#9ca3af",
        "textMuted": "#6b7280",
        "inputBg": "#111827",
        "iconColor": "#9ca3af",
        "shadow": "0 4px 6px -1px rgba(0, 0, 0, 0.5)",
        "dropdownShadow": "0 20px 25px -5px rgba(0, 0, 0, 0.5), 0 10px 10px -5px rgba(0, 0, 0, 0.3)",
    },
    "light": {
        "background": "#f3f4f6",
        "surface": "#ffffff",
        "surfaceHover": "#f9fafb",
        "border": "#e5e7eb",
        "textPrimary": "#111827",
        "textSecondary": "#4b5563",
        "textMuted": "#9ca3af",
        "inputBg": "#f3f4f6",
        "iconColor": "#6b7280",
        "shadow": "0 4px 6px -1px rgba(0, 0, 0, 0.1)",
        "dropdownShadow": "0 20px 25px -5px rgba(0, 0, 0, 0.1), 0 10px 10px -5px rgba(0, 0, 0, 0.04)",
    },
}


class ColorSchemeSignal:
    """
    The OS-reported color scheme.

    Whatever observes the platform (the Streamlit console, a test) calls
    :meth:`publish`; listeners hear about actual changes only.
    """

    def __init__(self, initial: Union[ColorScheme, str] = ColorScheme.light):
        self.current: str = ColorScheme(initial).value
        self._signal = Signal("color-scheme")

    def subscribe(self, callback: Callable[[str], None]) -> Subscription:
        return self._signal.subscribe(callback)

    def publish(self, scheme: Union[ColorScheme, str]) -> None:
        value = ColorScheme(scheme).value
        if value == self.current:
            return
        self.current = value
        self._signal.emit(value)

    @property
    def listener_count(self) -> int:
        return len(self._signal)


class PreferenceResolver:
    def __init__(self, mirror: DurableMirror, os_scheme: ColorSchemeSignal):
        self._mirror = mirror
        self._os_scheme = os_scheme
        self.theme: str = mirror.hydrate(
            THEME, _THEME_ADAPTER, lambda: DEFAULT_THEME, accept_bare=True
        )
        self.system_theme: str = os_scheme.current
        self.root_classes: set[str] = set()
        self._resolved_changed = Signal("resolved-theme")
        self._subscription: Optional[Subscription] = os_scheme.subscribe(self._on_os_change)
        self._apply()

    @property
    def resolved_theme(self) -> str:
        if self.theme == ThemePreference.system.value:
            return self.system_theme
        return self.theme

    @property
    def palette(self) -> dict[str, str]:
        return dict(PALETTES[self.resolved_theme])

    def on_resolved_change(self, callback: Callable[[str], None]) -> Subscription:
        return self._resolved_changed.subscribe(callback)

    def set_theme(self, theme: Union[ThemePreference, str]) -> None:
        """Change the explicit preference and persist it immediately."""
        value = ThemePreference(theme).value
        before = self.resolved_theme
        self.theme = value
        self._mirror.save(THEME, _THEME_ADAPTER, value)
        logger.info("Theme preference set to %s", value)
        self._after_change(before)

    def _on_os_change(self, scheme: str) -> None:
        before = self.resolved_theme
        self.system_theme = scheme
        logger.debug("OS color scheme is now %s", scheme)
        self._after_change(before)

    def _after_change(self, before: str) -> None:
        self._apply()
        if self.resolved_theme != before:
            self._resolved_changed.emit(self.resolved_theme)

    def _apply(self) -> None:
        if self.resolved_theme == ColorScheme.dark.value:
            self.root_classes.add(DARK_MARKER)
        else:
            self.root_classes.discard(DARK_MARKER)

    def flush(self) -> bool:
        return self._mirror.save(THEME, _THEME_ADAPTER, self.theme)

    def close(self) -> None:
        """Release the OS color-scheme subscription."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def __enter__(self) -> "PreferenceResolver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
