"""Time-of-day series extraction from spreadsheet workbooks.

Validates loosely formatted value/time columns of every sheet and extracts
sorted (HH:MM, value) series for chart rendering.
"""

__version__ = "0.1.0"
