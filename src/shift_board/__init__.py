"""
Shift Board

Shift, availability, time-off and shift-trade management for small teams,
with manager and employee roles and a weekly calendar view.
"""

__version__ = "1.0.0"
__author__ = "Shift Board Team"
