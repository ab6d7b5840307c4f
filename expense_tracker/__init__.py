"""
Expense Tracker - Source Package

A small personal finance tool for recording expenses from the terminal,
reporting on them and listing them in another currency.

DESIGN PRINCIPLES:
1. One flat JSON file is the whole database
2. A corrupt file is an error, never an empty store
3. Saves replace the file atomically
4. One failed conversion never hides the others
5. Storage and rate lookups are swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
