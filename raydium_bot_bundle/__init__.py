# raydium_bot_bundle/__init__.py
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("raydium-bot-bundle")
except PackageNotFoundError:
    __version__ = "0.0.0"

from .common.constants import APP_NAME, NETWORK

# Public API surface (include lazy names so `import *` and IDEs see them)
__all__ = [
    "__version__",
    "APP_NAME",
    "NETWORK",
    # Lazy names:
    "enrich_holdings",
    "create_pool_keys",
    "load_settings",
]

_LAZY = {
    "enrich_holdings": ".trading_bot.holdings",
    "create_pool_keys": ".trading_bot.liquidity",
    "load_settings": ".trading_bot.settings",
}


def __getattr__(name: str):
    """Lazy access to the main helpers so importing the package stays cheap."""
    if name in _LAZY:
        from importlib import import_module
        return getattr(import_module(_LAZY[name], __name__), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | set(_LAZY))
