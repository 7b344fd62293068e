"""The ``almanac`` command-line interface."""
