"""Functional tests: whole user workflows driven through the ``almanac`` CLI."""
