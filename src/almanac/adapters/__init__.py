"""Adapters (infrastructure) for ALMANAC.

Provide concrete implementations of the ports in `almanac.interfaces`
(calendar stores, unit of work, id generators) plus persistence mapping and
related wiring (engines, metadata, migrations).

Dependency rule: may import `almanac.domain` and `almanac.interfaces`; the
domain must not import this package.
"""
