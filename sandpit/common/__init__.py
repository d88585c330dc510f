"""
Package marker for shared helpers under `sandpit.common`.
Cross-cutting concerns that are not tied to the HTTP layer live here.
"""
