"""Snapshot ingest pipeline.

This module validates gateway requests and normalizes snapshot payloads.
It hands finished records to the store layer for a single upsert.
"""
