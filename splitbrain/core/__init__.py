"""
Core clock types for splitbrain.

Contains the partial comparison vocabulary, the merge contracts, the
wrapped physical clock, the hybrid logical clock built on top of it,
and a thread-safe holder for a process's current clock.
"""
