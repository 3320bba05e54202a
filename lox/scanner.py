"""scanner

scan(src: str, diagnostics: Diagnostics) -> tokens: list
    Scans src string, returns a list of tokens ending with an EOF token.
    Lexical errors are reported to diagnostics, and scanning continues.
"""

from typing import List, Optional

from . import builtin, lang



# Helper functions

def atEnd(code: "Code") -> bool:
    """Returns True if at end of code."""
    return code.cursor >= code.length

def check(code: "Code") -> str:
    """Returns char at cursor, or '' if at end of code."""
    if atEnd(code):
        return ''
    return code.src[code.cursor]

def checkNext(code: "Code") -> str:
    """Returns char after cursor, or '' if at end of code."""
    if code.cursor + 1 >= code.length:
        return ''
    return code.src[code.cursor + 1]

def consume(code: "Code") -> str:
    """Returns char at cursor, advances cursor."""
    char = check(code)
    code.cursor += 1
    return char

def match(code: "Code", expected: str) -> bool:
    """Advances cursor if the char at cursor is expected."""
    if check(code) != expected:
        return False
    code.cursor += 1
    return True

def isdigit(char: str) -> bool:
    return '0' <= char <= '9'

def isalpha(char: str) -> bool:
    return ('a' <= char <= 'z') or ('A' <= char <= 'Z') or char == '_'

def isalnum(char: str) -> bool:
    return isalpha(char) or isdigit(char)

def makeToken(
    code: "Code",
    type: lang.TokenType,
    literal: lang.PyLiteral = None,
) -> lang.Token:
    """Factory function for a Token spanning start to cursor."""
    lexeme = code.src[code.start:code.cursor]
    return lang.Token(type, lexeme, literal, code.line)



# Scanning functions

def word(code: "Code") -> lang.Token:
    """A word is a sequence of chars starting with a letter or
    underscore, and continuing with letters, digits or underscores.
    """
    while isalnum(check(code)):
        consume(code)
    text = code.src[code.start:code.cursor]
    return makeToken(code, builtin.KEYWORDS.get(text, 'IDENTIFIER'))

def number(code: "Code") -> lang.Token:
    """A number is a sequence of digits, optionally followed by a
    period and more digits.
    """
    while isdigit(check(code)):
        consume(code)
    # A trailing period is not part of the number
    if check(code) == '.' and isdigit(checkNext(code)):
        consume(code)  # '.'
        while isdigit(check(code)):
            consume(code)
    text = code.src[code.start:code.cursor]
    return makeToken(code, 'NUMBER', float(text))

def string(code: "Code") -> lang.Token:
    """A string is a sequence of chars that are enclosed in
    double-quotes ("), and may span multiple lines.
    """
    while not atEnd(code) and check(code) != '"':
        if consume(code) == '\n':
            code.line += 1
    if atEnd(code):
        raise builtin.ParseError("Unterminated string.", None, line=code.line)
    consume(code)  # closing '"'
    text = code.src[code.start + 1:code.cursor - 1]
    return makeToken(code, 'STRING', text)

def symbol(code: "Code", char: str) -> lang.Token:
    """A symbol is one char, or two chars ending in '='."""
    if char in builtin.SYM_MULTI:
        single, double = builtin.SYM_MULTI[char]
        return makeToken(code, double if match(code, '=') else single)
    return makeToken(code, builtin.SYM_SINGLE[char])

def comment(code: "Code") -> None:
    """A comment runs from '//' to the end of the line."""
    while not atEnd(code) and check(code) != '\n':
        consume(code)



class Code:
    """
    Encapsulates the source code and its properties.

    Used by the scanner.
    """
    def __init__(
        self,
        src: str,
    ):
        self.src = src
        self.start: int = 0
        self.cursor: int = 0
        self.line: int = 1

    @property
    def length(self):
        return len(self.src)



# Main scanning loop

def scanToken(code: "Code") -> Optional[lang.Token]:
    """Select a scanning function to use, from the next char in the code
    string, and use it.
    Returns None for whitespace and comments.
    """
    char = consume(code)
    if char in (' ', '\r', '\t'):
        return None
    if char == '\n':
        code.line += 1
        return None
    if char == '/' and match(code, '/'):
        comment(code)
        return None
    if char == '"':
        return string(code)
    if isdigit(char):
        return number(code)
    if isalpha(char):
        return word(code)
    if char in builtin.SYM_SINGLE or char in builtin.SYM_MULTI:
        return symbol(code, char)
    raise builtin.ParseError("Unexpected character.", None, line=code.line)

def scan(src: str, diagnostics: builtin.Diagnostics) -> List[lang.Token]:
    code = Code(src)
    tokens = []
    while not atEnd(code):
        code.start = code.cursor
        try:
            token = scanToken(code)
        except builtin.ParseError as err:
            diagnostics.error(err)
            continue
        if token:
            tokens += [token]
    tokens += [lang.Token('EOF', '', None, code.line)]
    return tokens
