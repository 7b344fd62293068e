"""Bootstrap (composition root) for ALMANAC.

Assembles the application at runtime: wires concrete adapters to service-layer
handlers, composes shared services (message bus, unit of work, id generator)
and reads configuration.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `almanac.adapters`, `almanac.service_layer`,
  `almanac.interfaces`, `almanac.domain`, and `almanac.config`.
- Inner layers must not import `almanac.bootstrap`.
"""

from .bootstrap import (
    AppContainer,
    bootstrap,
    build_id_generator,
    build_message_bus,
    build_uow,
)

__all__ = [
    "AppContainer",
    "bootstrap",
    "build_id_generator",
    "build_message_bus",
    "build_uow",
]
