"""Bootstrap (composition root) for TALLY.

Assembles the application at runtime: wires concrete adapters to service-layer
handlers, composes shared services (message bus, unit of work), reads
configuration and hands it to the handlers explicitly.

Import rules:
- Entry points import *this* package (not adapters/service_layer/interfaces/domain).
- This package may import: `tally.adapters`, `tally.service_layer`,
  `tally.interfaces`, `tally.domain`, and `tally.config`.
- Inner layers must not import `tally.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap, build_message_bus

__all__ = ["AppContainer", "bootstrap", "build_message_bus"]
