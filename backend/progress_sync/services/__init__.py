"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services own all store IO; core functions never await

Design Decisions:
    - One service per resource (ADR: impureim sandwich)
"""
