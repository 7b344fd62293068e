"""Every test under `tests/unit/` carries the `unit` mark."""

from tests.helpers.markers import default_marker_hook

pytest_collection_modifyitems = default_marker_hook(__file__, "unit")
