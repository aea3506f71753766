"""
Talent leave calendar - grouped, color-resolved leave calendars with a
biweekly sprint calendar.
"""

__version__ = "0.1.0"
