"""Tokenizer and recursive descent parser for lameval programs. Produces the statements defined in lang/lexical.py.

All grammar can be loosely defined as follows:

```
<program>     ::= [<statement>] (";" [<statement>])*
<statement>   ::= <name> "=" <λ-term>            ; assignment, value is reduced and bound to name
                | <λ-term>                       ; executed, result is printed
<λ-term>      ::= <abstraction> | <application>
<abstraction> ::= ("λ" | "\") <name> "." <λ-term>   ; body is greedy
<application> ::= <atom>+ [<abstraction>]         ; associating by left: a b c = ((a b) c)
<atom>        ::= <name> | <number> | "(" <λ-term> ")"

<comment>     ::= "#" <char>*                    ; until end of line
```

<number> is a Church numeral literal: 2 is read as λf.λx.f (f x).
"""

import re
from collections import namedtuple

from lameval.lang.error import GenericException
from lameval.lang.lexical import Assignment, ExecStmt
from lameval.lang.numerical import cnumber
from lameval.pure.lexical import Abstraction, Application, Variable


Token = namedtuple("Token", ["kind", "text", "offset"])

TOKEN_RE = re.compile(r"""
    (?P<space>\s+)
  | (?P<comment>\#[^\n]*)
  | (?P<lambda>[λ\\])
  | (?P<dot>\.)
  | (?P<lparen>\()
  | (?P<rparen>\))
  | (?P<equals>=)
  | (?P<semi>;)
  | (?P<number>[0-9]+(?![A-Za-z0-9_']))
  | (?P<name>[A-Za-z_][A-Za-z0-9_']*)
""", re.VERBOSE)

ATOM_STARTS = ("name", "number", "lparen")
DESCRIPTIONS = {
    "lambda": "'λ'", "dot": "'.'", "lparen": "'('", "rparen": "')'", "equals": "'='", "semi": "';'",
    "number": "number", "name": "name", "end": "end of input",
}


def locate(text, offset):
    """Returns (line, line_num, column) of offset in text."""
    line_start = text.rfind("\n", 0, offset) + 1
    line_end = text.find("\n", offset)
    if line_end == -1:
        line_end = len(text)
    return text[line_start:line_end], text.count("\n", 0, offset) + 1, offset - line_start


def syntax_error(text, msg, offset, snippet):
    """GenericException pointing at snippet, found at offset in text. msg is formatted with (line, snippet)."""
    line, line_num, col = locate(text, offset)
    return GenericException(msg, (line, snippet), start=col, end=col + max(len(snippet), 1), line_num=line_num)


def tokenize(text):
    """Splits text into Tokens, dropping whitespace and comments. Always ends with an 'end' Token."""
    tokens = []
    pos = 0
    while pos < len(text):
        match = TOKEN_RE.match(text, pos)
        if match is None:
            raise syntax_error(text, "'{}' contains illegal character '{}'", pos, text[pos])

        if match.lastgroup not in ("space", "comment"):
            tokens.append(Token(match.lastgroup, match.group(), pos))
        pos = match.end()

    tokens.append(Token("end", "", len(text)))
    return tokens


class Parser:
    """Parses a whole input unit. Use parse() unless the tokens are needed."""

    def __init__(self, text):
        self.text = text
        self.tokens = tokenize(text)
        self.pos = 0

    def peek(self, ahead=0):
        return self.tokens[min(self.pos + ahead, len(self.tokens) - 1)]

    def advance(self):
        token = self.peek()
        self.pos += 1
        return token

    def expect(self, kind):
        token = self.peek()
        if token.kind != kind:
            self.unexpected(token, DESCRIPTIONS[kind])
        return self.advance()

    def unexpected(self, token, wanted):
        snippet = token.text or DESCRIPTIONS["end"]
        raise syntax_error(self.text, "'{}': expected " + wanted + ", found '{}'", token.offset, snippet)

    def program(self):
        stmts = []
        while self.peek().kind != "end":
            if self.peek().kind == "semi":
                self.advance()
                continue

            stmts.append(self.statement())
            if self.peek().kind != "end":
                self.expect("semi")
        return stmts

    def statement(self):
        if self.peek().kind == "name" and self.peek(1).kind == "equals":
            name = self.advance().text
            self.advance()
            return Assignment(name, self.term())
        return ExecStmt(self.term())

    def term(self):
        if self.peek().kind == "lambda":
            return self.abstraction()
        return self.application()

    def abstraction(self):
        self.expect("lambda")
        param = self.expect("name").text
        self.expect("dot")
        return Abstraction(param, self.term())

    def application(self):
        term = self.atom()
        while self.peek().kind in ATOM_STARTS + ("lambda",):
            if self.peek().kind == "lambda":
                return Application(term, self.abstraction())  # greedy body swallows the rest
            term = Application(term, self.atom())
        return term

    def atom(self):
        token = self.peek()
        if token.kind == "name":
            self.advance()
            return Variable(token.text)
        elif token.kind == "number":
            self.advance()
            return cnumber(token.text)
        elif token.kind == "lparen":
            self.advance()
            term = self.term()
            self.expect("rparen")
            return term

        self.unexpected(token, "λ-term")


def parse(text):
    """Returns the list of statements in text. Raises GenericException on malformed input."""
    return Parser(text).program()
