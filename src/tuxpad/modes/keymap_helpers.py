"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from tuxpad.keymaps import KeymapRegistry


class _HasKeyParts(Protocol):
    key: str
    modifiers: Tuple[str, ...]


def key_to_token(key: _HasKeyParts) -> str:
    if key.modifiers:
        modifier = "+".join(sorted(m.lower() for m in key.modifiers))
        return f"{modifier}+{key.key}"
    return key.key


class _ExtrasHolder(Protocol):
    extras: dict


def require_keymap_registry(context: _ExtrasHolder) -> "KeymapRegistry":
    registry = context.extras.get("keymap_registry")
    if registry is None:
        raise RuntimeError("ModeContext.extras missing 'keymap_registry'")
    return registry  # type: ignore[return-value]


__all__ = ["key_to_token", "require_keymap_registry"]
