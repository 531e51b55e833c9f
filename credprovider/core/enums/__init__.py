"""
Core enums for the credprovider package.
"""

from .validation import ErrorType

__all__ = ['ErrorType']
