"""
Group stage simulator: fixtures, match simulation, standings and
championship predictions for a small round-robin league.
"""
__version__ = "0.1.0"
