"""
Package marker for source code under `sandpit`.
It groups the name registry service modules under a stable import path.
Most functionality lives in the `api` subpackage; this file intentionally stays lightweight.
"""
