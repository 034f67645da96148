"""
Lexical analyzer for clock scenarios.

Tokenizes a scenario statement into names, numbers, literal clock stamps
(``120:3``), the reading marker ``@`` and the action keywords.
"""

from __future__ import annotations

import sly


class LexerError(Exception):
    """Exception raised for lexical analysis errors."""
    pass


class ScenarioLexer(sly.Lexer):
    """
    Lexical analyzer for scenario statements.

    Token Types:
        NAME                           - Process or message identifiers
        NUMBER                         - Wall-clock readings
        STAMP                          - Literal ``timestamp:counter`` pairs
        AT                             - Reading marker ``@``
        TICK, SEND, RECEIVE, MERGE     - Process actions
        COMPARE                        - Comparison statement
    """

    tokens = {
        NAME, NUMBER, STAMP,
        AT,
        TICK, SEND, RECEIVE, MERGE,
        COMPARE,
    }

    ignore = " \t"

    @_(r"\n+")
    def ignore_newline(self, t):
        self.lineno += len(t.value)

    # Trailing comments
    ignore_comment = r"\#[^\n]*"

    AT = r"@"

    # STAMP must come before NUMBER
    @_(r"\d+\s*:\s*\d+")
    def STAMP(self, t):
        ts, counter = t.value.split(":")
        t.value = (int(ts), int(counter))
        return t

    @_(r"\d+")
    def NUMBER(self, t):
        t.value = int(t.value)
        return t

    # Keywords are matched as names and then reclassified.
    # Only exact (case-insensitive) matches are keywords.
    @_(r"[a-zA-Z_][a-zA-Z0-9_\-\.]*")
    def NAME(self, t):
        keywords = {
            "tick": "TICK",
            "send": "SEND",
            "receive": "RECEIVE",
            "recv": "RECEIVE",
            "merge": "MERGE",
            "compare": "COMPARE",
        }
        t.type = keywords.get(t.value.lower(), "NAME")
        return t

    def error(self, t):
        """Handle invalid characters."""
        raise LexerError(
            f"Invalid character '{t.value[0]}' at line {self.lineno}, index {self.index}"
        )
