"""
Core module for varbench.

Provides the coordinate kernel shared by the generator and the readers.
"""

from .kernel import CoordinateKernel

__all__ = ["CoordinateKernel"]
