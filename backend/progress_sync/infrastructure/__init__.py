"""Infrastructure Layer — store clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic (types and errors only)
    - All external calls wrapped with error mapping to SyncStoreError

Design Decisions:
    - Thin adapters over raw clients (ADR: single responsibility)
"""
