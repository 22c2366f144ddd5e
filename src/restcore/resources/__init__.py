r"""API resource wrappers."""

from __future__ import annotations

__all__ = ["Legs"]

from restcore.resources.legs import Legs
