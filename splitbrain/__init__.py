"""
splitbrain: Hybrid Logical Clock primitives.

Immutable hybrid logical clocks that order events causally across
processes while staying close to wall-clock time, together with the
partial-comparison and merge contracts they are built on.

Based on "Logical Physical Clocks and Consistent Snapshots in Globally
Distributed Databases" by Kulkarni, Demirbas et al.
"""

__version__ = "0.1.0"
