"""Service layer for ALMANAC.

Implements application use-cases: command handlers, read queries, the identity
policy and transaction boundaries. Works against the ports in
`almanac.interfaces` and the values in `almanac.domain`.

Dependency rule: may import `almanac.domain` and `almanac.interfaces`, but not
`almanac.adapters` or `almanac.entrypoints`.
"""
