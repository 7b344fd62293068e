"""Entrypoints (inbound adapters) for ALMANAC.

Expose the application to the outside world: today that is the ``almanac``
command-line interface. Parse and validate inputs, call service-layer handlers
through the bootstrap, and present results.

Dependency rule: may import `almanac.bootstrap` and `almanac.service_layer`;
avoid importing `almanac.adapters` directly.
"""
