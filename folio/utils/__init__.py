"""
Utilities package for Folio.

- frozen: read-only views of nested mapping/sequence trees
"""

from .frozen import freeze, thaw

__all__ = ["freeze", "thaw"]
