"""
Application package initializer.

The service is organised into the same layers as any larger FastAPI
project: ``core`` (configuration, logging, database pool),
``schemas`` (request and response models), ``services`` (SQL access)
and ``api`` (routers).  Only one resource, ``/crabs``, is exposed.
"""

from .main import app  # noqa: F401
