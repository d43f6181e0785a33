"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (identities, records, session, notifications)
has a schema module, a service module and a router defined in
``api/v1/endpoints``.  The login, dashboard and admin views live in
``views``.
"""

from .main import app  # noqa: F401
