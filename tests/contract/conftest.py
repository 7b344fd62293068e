"""Every test under `tests/contract/` carries the `contract` mark."""

from tests.helpers.markers import default_marker_hook

pytest_collection_modifyitems = default_marker_hook(__file__, "contract")
