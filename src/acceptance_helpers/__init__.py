"""Helpers for the OpenCloud acceptance-test harness.

Bearer-token acquisition lives in :mod:`acceptance_helpers.oidc`; the
mailbox reader and the CI pipeline evaluator are thin HTTP clients next to it.
"""

__version__ = "0.1.0"
