"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Stores are
plain objects built by ``create_app`` and passed to the routes that
need them, so tests can construct them directly.
"""
