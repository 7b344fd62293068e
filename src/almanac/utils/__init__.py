"""Support namespace for cross-cutting, dependency-light helpers.

This package is a neutral place for small, reusable functions that would
otherwise clutter feature packages. It is not an architectural layer.

Scope:
- Small, stateless helpers with minimal dependencies (clocks, string helpers).
- No business rules, no orchestration, no wiring.

Import direction:
- May be imported by any ALMANAC package; must not import from them.

Public API:
- Nothing is re-exported here. Import helpers from their defining modules.
"""
