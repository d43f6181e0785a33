"""
Pydantic schema definitions for API payloads.

Each domain (identities, records, notifications, views) defines its own
Pydantic models for request and response bodies.
"""
