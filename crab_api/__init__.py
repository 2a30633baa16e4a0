"""
Top‑level package for the Crab API.

The package provides no public exports of its own; the web
application lives in ``crab_api.app`` and the ``python -m crab_api``
entry point in ``crab_api.__main__``.
"""

__all__ = []
