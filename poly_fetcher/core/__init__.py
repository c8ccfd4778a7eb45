"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: GeoJSON type names, Nominatim tags, service defaults
- log: Per-component log verbosity
- exceptions: Custom exception hierarchy
"""
