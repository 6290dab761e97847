"""Camel K Reconciler - trait pipeline and build reconciliation core.

This package turns Integration resources into staged cluster objects
through an ordered trait pipeline, and reconciles Build resources against
the externally observed state of their build pods.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
