"""Use-case layer for the HaaS client workflows.

Each module wraps one remote operation behind a port and translates adapter
failures into the domain error taxonomy, without performing transport I/O
directly.
"""
