"""
Group Gradebook: weighted learner grades for a course assignment group

Validates a course snapshot and computes per-learner percentage scores and
points-weighted averages, with due-date filtering and a flat late penalty.
"""

__version__ = "0.1.0"
