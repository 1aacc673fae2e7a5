"""Listing persistence layer.

This module stores owners and listings in a SQLAlchemy database.
It exposes connection management and per-record write operations.
"""
