"""Color registry source package.

This package contains:
- config: Configuration loading and management
- registry: Codec, pricing, ledger, renderer and the ColorRegistry itself
"""

from __future__ import annotations

__all__: list[str] = []
