"""
Utilities for splitbrain: scenario file reading and replay logging.
"""
