"""Fetch, normalise and classify Trade Republic timeline data, with CSV and storage helpers."""

__version__ = "0.1.0"