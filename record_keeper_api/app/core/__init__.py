"""Configuration, logging, storage, errors and access control."""
