"""Time Card System package.

Feature modules (employees, sessions, timecards, ...) sit on top of a small
spreadsheet-style storage port, with a thin Flask API layer in front.
"""
