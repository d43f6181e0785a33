"""
API package containing versioned routes and shared dependencies.

Version subpackages such as ``v1`` expose a top‑level ``router`` which
includes all of their domain‑specific endpoints.
"""
