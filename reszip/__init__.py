"""Reservation PDF export service.

Logs in to the Lucee booking system once, fetches one PDF per reservation,
and returns the batch as a single ZIP.
"""

__version__ = "1.0.0"
