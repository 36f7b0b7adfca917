"""Modal text editor core for files larger than memory comfortably holds."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "config",
    "editing",
    "keymaps",
    "modes",
    "runtime",
    "session",
]

__version__ = "0.1.0"
