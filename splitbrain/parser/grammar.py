"""
Parser for clock scenario statements.

Each statement is one of::

    <process> [@ <reading>] tick
    <process> [@ <reading>] send <message>
    <process> [@ <reading>] receive <message>
    <process> [@ <reading>] receive <timestamp>:<counter>
    <process> [@ <reading>] merge <process>
    compare <process> <process>
"""

from __future__ import annotations

from typing import List

import sly

from splitbrain.parser.ast_nodes import (
    Compare,
    MergeFrom,
    Receive,
    Send,
    Statement,
    Tick,
)
from splitbrain.parser.lexer import ScenarioLexer


class ParseError(Exception):
    """Exception raised for parsing errors."""

    pass


class _SLYParser(sly.Parser):
    """SLY-based parser for a single scenario statement."""

    tokens = ScenarioLexer.tokens

    start = "statement"

    def __init__(self) -> None:
        self.line = 0

    # --- Statements ---

    @_("NAME reading action")
    def statement(self, p):
        kind, arg = p.action
        return _build(kind, p.NAME, p.reading, arg, self.line)

    @_("NAME action")
    def statement(self, p):
        kind, arg = p.action
        return _build(kind, p.NAME, None, arg, self.line)

    @_("COMPARE NAME NAME")
    def statement(self, p):
        return Compare(left=p.NAME0, right=p.NAME1, line=self.line)

    # --- Reading marker ---

    @_("AT NUMBER")
    def reading(self, p):
        return p.NUMBER

    # --- Actions ---

    @_("TICK")
    def action(self, p):
        return ("tick", None)

    @_("SEND NAME")
    def action(self, p):
        return ("send", p.NAME)

    @_("RECEIVE NAME")
    def action(self, p):
        return ("receive", p.NAME)

    @_("RECEIVE STAMP")
    def action(self, p):
        return ("receive_stamp", p.STAMP)

    @_("MERGE NAME")
    def action(self, p):
        return ("merge", p.NAME)

    def error(self, token):
        if token:
            raise ParseError(
                f"Syntax error at '{token.value}' "
                f"(type: {token.type}, line: {self.line}, index: {token.index})"
            )
        raise ParseError(f"Syntax error: unexpected end of statement (line: {self.line})")


def _build(kind: str, process: str, reading, arg, line: int) -> Statement:
    if kind == "tick":
        return Tick(process=process, reading=reading, line=line)
    if kind == "send":
        return Send(process=process, reading=reading, message=arg, line=line)
    if kind == "receive":
        return Receive(process=process, reading=reading, message=arg, line=line)
    if kind == "receive_stamp":
        return Receive(process=process, reading=reading, stamp=arg, line=line)
    return MergeFrom(process=process, reading=reading, source=arg, line=line)


class ScenarioParser:
    """
    Parser for clock scenarios.

    Wraps the SLY-based parser with a clean public interface.
    """

    def __init__(self) -> None:
        self._lexer = ScenarioLexer()
        self._parser = _SLYParser()

    def parse_statement(self, text: str, line: int = 0) -> Statement:
        """
        Parse a single statement.

        Args:
            text: The statement text.
            line: Line number used in the result and in error messages.

        Raises:
            LexerError: If the text contains an invalid character.
            ParseError: If the statement is syntactically invalid.
        """
        text = text.strip()
        if not text:
            raise ParseError(f"Syntax error: empty statement (line: {line})")

        self._parser.line = line
        result = self._parser.parse(self._lexer.tokenize(text, lineno=line))
        if result is None:
            raise ParseError(f"Syntax error: could not parse statement (line: {line})")
        return result

    def parse(self, text: str) -> List[Statement]:
        """
        Parse a whole scenario, one statement per line.

        Blank lines and lines starting with ``#`` (comments and
        directives) are skipped.

        Raises:
            LexerError: If any line contains an invalid character.
            ParseError: If any statement is syntactically invalid.
        """
        statements: List[Statement] = []
        for lineno, raw in enumerate(text.splitlines(), start=1):
            stripped = raw.strip()
            if not stripped or stripped.startswith("#"):
                continue
            statements.append(self.parse_statement(stripped, line=lineno))
        return statements
