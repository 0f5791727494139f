"""
Exception taxonomy.

Transform failures are *not* exceptions: they travel as
:class:`gro.geodesy.types.TransformFailure` values so that a listing can
omit one map link instead of aborting.  Only misconfiguration and bad
queries are raised.
"""

from __future__ import annotations


class GroError(Exception):
    """Base class for all errors raised by the package."""


class ConfigurationError(GroError, ValueError):
    """Invalid zone or datum parameters at construction time."""


class QueryError(GroError, ValueError):
    """Invalid query origin or radius (caller error, not missing data)."""
