"""Snapshot storage layer.

This module persists snapshot records keyed by timestamp.
It provides the DynamoDB adapter and an in-memory store for local runs.
"""
