"""Ports (framework-free ABCs) for ALMANAC.

Layering & dependency rules:
- Do NOT import from adapters, bootstrap, or entrypoints.
- Safe to import from the service layer and adapters.
"""
