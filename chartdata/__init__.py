"""Chart data transformation and formatting engine.

Builds a case-insensitive row model over raw query results, resolves field
configuration against it, formats values for display and composes the
series/tooltip fragments chart adapters need.
"""

__version__ = "0.1.0"
