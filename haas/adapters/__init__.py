"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP, filesystem, and
    the offline service double) used by use cases.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by ``haas.app.controller`` for runtime wiring and by tests for
    transport-level behavior verification.
"""
