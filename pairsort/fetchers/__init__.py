"""
Element fetcher implementations.

Provides implementations of the ElementFetcher interface for loading the
list of elements to sort.

Available implementations:
- FileElementFetcher: Loads elements from a JSON array or a plain text file
"""

from .file_fetcher import FileElementFetcher

__all__ = ["FileElementFetcher"]
