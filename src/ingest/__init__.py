"""Listing file ingestion pipeline.

This module reads listing files line by line, parses each record,
and coordinates owner resolution and listing creation in the store.
"""
