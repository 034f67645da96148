"""
Scenario parser for splitbrain.

Provides lexical analysis, parsing, and statement nodes for the small
line-oriented language used to replay hybrid logical clock scenarios
across several simulated processes.
"""
