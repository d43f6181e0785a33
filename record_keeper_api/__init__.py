"""
Top‑level package for the Record Keeper API.

This file makes ``record_keeper_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``record_keeper_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
