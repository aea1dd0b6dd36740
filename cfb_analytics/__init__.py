"""
College football ranking and percentile normalization engine.
"""

__version__ = "1.0.0"
