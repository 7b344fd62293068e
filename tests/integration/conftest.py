"""Every test under `tests/integration/` carries the `integration` mark."""

from tests.helpers.markers import default_marker_hook

pytest_collection_modifyitems = default_marker_hook(__file__, "integration")
