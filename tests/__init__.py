"""
Shirokuma SDK Test Suite.

This package contains:
- unit/: Unit tests (no network, no engine)
- integration/: Session and GraphQL client against a fake node
"""
