"""Every test under `tests/e2e/` carries the `e2e` mark."""

from tests.helpers.markers import default_marker_hook

pytest_collection_modifyitems = default_marker_hook(__file__, "e2e")
