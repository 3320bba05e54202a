"""parser

parse(tokens: list, diagnostics: Diagnostics) -> statements: list
    Parses tokens and returns a list of statements.
    Syntax errors are reported to diagnostics; the parser then skips to
    the next statement and continues parsing.
"""

from typing import Callable as function, List, Optional, TypeVar

from . import builtin, lang

R = TypeVar('R')  # Return type



class Tokens:
    """
    Encapsulates the token sequence and the parser's position in it.

    Used by the parser.
    """
    def __init__(
        self,
        tokens: List[lang.Token],
        diagnostics: builtin.Diagnostics,
    ):
        self.tokens = tokens
        self.cursor: int = 0
        self.diagnostics = diagnostics



# Helper functions

def check(tokens: Tokens) -> lang.Token:
    """Returns token at cursor."""
    return tokens.tokens[tokens.cursor]

def previous(tokens: Tokens) -> lang.Token:
    """Returns the most recently consumed token."""
    return tokens.tokens[tokens.cursor - 1]

def atEnd(tokens: Tokens) -> bool:
    """Returns True if at last token."""
    return check(tokens).type == 'EOF'

def consume(tokens: Tokens) -> lang.Token:
    """Returns token at cursor, advances cursor.
    The cursor never moves past the EOF token.
    """
    token = check(tokens)
    if not atEnd(tokens):
        tokens.cursor += 1
    return token

def expectType(tokens: Tokens, *types: lang.TokenType) -> Optional[lang.Token]:
    """Returns token at cursor if its type matches given sequence of
    types, otherwise returns None.
    """
    if check(tokens).type in types:
        return check(tokens)
    return None

def matchType(tokens: Tokens, *types: lang.TokenType) -> Optional[lang.Token]:
    """Returns token at cursor if its type matches given sequence of
    types, otherwise returns None.

    matchType differs from expectType by advancing the cursor upon a
    match.
    """
    if expectType(tokens, *types):
        return consume(tokens)
    return None

def matchTypeElseError(
    tokens: Tokens,
    type: lang.TokenType,
    msg: str,
) -> lang.Token:
    """Returns token at cursor if its type matches, advancing the
    cursor.

    matchTypeElseError differs from matchType by raising an error
    instead of returning None if there is no match.
    """
    token = matchType(tokens, type)
    if token:
        return token
    raise builtin.ParseError(msg, check(tokens))

def error(tokens: Tokens, token: lang.Token, msg: str) -> None:
    """Reports an error which does not leave the parser in a confused
    state, so parsing carries on without resynchronising.
    """
    tokens.diagnostics.error(builtin.ParseError(msg, token))

def synchronize(tokens: Tokens) -> None:
    """Discards tokens until the start of the next statement."""
    consume(tokens)
    while not atEnd(tokens):
        if previous(tokens).type == 'SEMICOLON':
            return
        if expectType(tokens, *builtin.STMT_START):
            return
        consume(tokens)

def buildExprWhileType(
    tokens: Tokens,
    types: List[lang.TokenType],
    parse: function[[Tokens], lang.Expr],
    makeExpr: function,
) -> lang.Expr:
    """
    Builds a left-associative expression tree, parsing another operand
    while the next token is one of the given operator types.

    Used for binary and logical expressions
    """
    expr = parse(tokens)
    while matchType(tokens, *types):
        oper = previous(tokens)
        right = parse(tokens)
        expr = makeExpr(expr, oper, right)
    return expr

def collectWhileComma(
    tokens: Tokens,
    parse: function[[Tokens], R],
    kind: str,
) -> List[R]:
    """
    Parses a comma-separated list of items until the closing ')'.
    Does not consume the ')'.
    """
    parsed: List[R] = []
    if expectType(tokens, 'RIGHT_PAREN'):
        return parsed
    parsed += [parse(tokens)]
    while matchType(tokens, 'COMMA'):
        if len(parsed) >= builtin.MAX_ARGS:
            error(tokens, check(tokens),
                  f"Cannot have more than {builtin.MAX_ARGS} {kind}.")
        parsed += [parse(tokens)]
    return parsed



# Precedence parsers
# The expression parsers use the recursive descent parsing technique to
# handle expression precedence.
#
# Expressions are parsed with this precedence (highest to lowest):
# 1. <literal> | <name> | this | <grouping>
# 2. calls, property access
# 3. !, - (unary)
# 4. *, /
# 5. +, -
# 6. < | <= | > | >=
# 7. != | ==
# 8. and
# 9. or
# 10. assignment

def primary(tokens: Tokens) -> lang.Expr:
    if matchType(tokens, 'FALSE'):
        return lang.Literal(False)
    if matchType(tokens, 'TRUE'):
        return lang.Literal(True)
    if matchType(tokens, 'NIL'):
        return lang.Literal(None)
    if matchType(tokens, 'NUMBER', 'STRING'):
        return lang.Literal(previous(tokens).literal)
    if matchType(tokens, 'THIS'):
        return lang.This(previous(tokens))
    if matchType(tokens, 'IDENTIFIER'):
        return lang.Variable(previous(tokens))
    if matchType(tokens, 'LEFT_PAREN'):
        expr = expression(tokens)
        matchTypeElseError(tokens, 'RIGHT_PAREN',
                           "Expect ')' after expression.")
        return lang.Grouping(expr)
    raise builtin.ParseError("Expect expression.", check(tokens))

def finishCall(tokens: Tokens, callee: lang.Expr) -> lang.Call:
    args = collectWhileComma(tokens, expression, 'arguments')
    paren = matchTypeElseError(tokens, 'RIGHT_PAREN',
                               "Expect ')' after arguments.")
    return lang.Call(callee, paren, args)

def call(tokens: Tokens) -> lang.Expr:
    expr = primary(tokens)
    while True:
        if matchType(tokens, 'LEFT_PAREN'):
            expr = finishCall(tokens, expr)
        elif matchType(tokens, 'DOT'):
            name = matchTypeElseError(tokens, 'IDENTIFIER',
                                      "Expect property name after '.'.")
            expr = lang.Get(expr, name)
        else:
            break
    return expr

def unary(tokens: Tokens) -> lang.Expr:
    if matchType(tokens, 'BANG', 'MINUS'):
        oper = previous(tokens)
        right = unary(tokens)
        return lang.Unary(oper, right)
    return call(tokens)

def factor(tokens: Tokens) -> lang.Expr:
    return buildExprWhileType(tokens, ['SLASH', 'STAR'], unary, lang.Binary)

def term(tokens: Tokens) -> lang.Expr:
    return buildExprWhileType(tokens, ['MINUS', 'PLUS'], factor, lang.Binary)

def comparison(tokens: Tokens) -> lang.Expr:
    return buildExprWhileType(
        tokens,
        ['GREATER', 'GREATER_EQUAL', 'LESS', 'LESS_EQUAL'],
        term,
        lang.Binary,
    )

def equality(tokens: Tokens) -> lang.Expr:
    return buildExprWhileType(
        tokens, ['BANG_EQUAL', 'EQUAL_EQUAL'], comparison, lang.Binary
    )

def logicAnd(tokens: Tokens) -> lang.Expr:
    return buildExprWhileType(tokens, ['AND'], equality, lang.Logical)

def logicOr(tokens: Tokens) -> lang.Expr:
    return buildExprWhileType(tokens, ['OR'], logicAnd, lang.Logical)

def assignment(tokens: Tokens) -> lang.Expr:
    expr = logicOr(tokens)
    if matchType(tokens, 'EQUAL'):
        equals = previous(tokens)
        value = assignment(tokens)  # right-associative
        if isinstance(expr, lang.Variable):
            return lang.Assign(expr.name, value)
        if isinstance(expr, lang.Get):
            return lang.Set(expr.object, expr.name, value)
        error(tokens, equals, "Invalid assignment target.")
    return expr

def expression(tokens: Tokens) -> lang.Expr:
    return assignment(tokens)

# Statement parsers
# Statements are detected based on their first keyword.
# Statements beginning with anything else are expression statements.

def printStmt(tokens: Tokens) -> lang.Print:
    value = expression(tokens)
    matchTypeElseError(tokens, 'SEMICOLON', "Expect ';' after value.")
    return lang.Print(value)

def expressionStmt(tokens: Tokens) -> lang.Expression:
    expr = expression(tokens)
    matchTypeElseError(tokens, 'SEMICOLON', "Expect ';' after expression.")
    return lang.Expression(expr)

def returnStmt(tokens: Tokens) -> lang.Return:
    keyword = previous(tokens)
    value = None
    if not expectType(tokens, 'SEMICOLON'):
        value = expression(tokens)
    matchTypeElseError(tokens, 'SEMICOLON', "Expect ';' after return value.")
    return lang.Return(keyword, value)

def block(tokens: Tokens) -> lang.Stmts:
    """Parses declarations up to and including the closing '}'.
    Returns the list of parsed statements.
    """
    stmts: lang.Stmts = []
    while not expectType(tokens, 'RIGHT_BRACE') and not atEnd(tokens):
        stmt = declaration(tokens)
        if stmt:
            stmts += [stmt]
    matchTypeElseError(tokens, 'RIGHT_BRACE', "Expect '}' after block.")
    return stmts

def ifStmt(tokens: Tokens) -> lang.If:
    matchTypeElseError(tokens, 'LEFT_PAREN', "Expect '(' after 'if'.")
    cond = expression(tokens)
    matchTypeElseError(tokens, 'RIGHT_PAREN', "Expect ')' after if condition.")
    thenBranch = statement(tokens)
    elseBranch = None
    if matchType(tokens, 'ELSE'):
        elseBranch = statement(tokens)
    return lang.If(cond, thenBranch, elseBranch)

def whileStmt(tokens: Tokens) -> lang.While:
    matchTypeElseError(tokens, 'LEFT_PAREN', "Expect '(' after 'while'.")
    cond = expression(tokens)
    matchTypeElseError(tokens, 'RIGHT_PAREN', "Expect ')' after condition.")
    body = statement(tokens)
    return lang.While(cond, body)

def forStmt(tokens: Tokens) -> lang.Stmt:
    """For loops are desugared into a While loop in a Block:
    the initializer runs once before the loop, and the increment runs
    after the body on every iteration.
    """
    matchTypeElseError(tokens, 'LEFT_PAREN', "Expect '(' after 'for'.")
    if matchType(tokens, 'SEMICOLON'):
        initializer = None
    elif matchType(tokens, 'VAR'):
        initializer = varDecl(tokens)
    else:
        initializer = expressionStmt(tokens)

    cond = None
    if not expectType(tokens, 'SEMICOLON'):
        cond = expression(tokens)
    matchTypeElseError(tokens, 'SEMICOLON', "Expect ';' after loop condition.")

    increment = None
    if not expectType(tokens, 'RIGHT_PAREN'):
        increment = expression(tokens)
    matchTypeElseError(tokens, 'RIGHT_PAREN', "Expect ')' after for clauses.")
    body = statement(tokens)

    if increment:
        body = lang.Block([body, lang.Expression(increment)])
    if cond is None:
        cond = lang.Literal(True)
    body = lang.While(cond, body)
    if initializer:
        body = lang.Block([initializer, body])
    return body

def statement(tokens: Tokens) -> lang.Stmt:
    if matchType(tokens, 'FOR'):
        return forStmt(tokens)
    if matchType(tokens, 'IF'):
        return ifStmt(tokens)
    if matchType(tokens, 'PRINT'):
        return printStmt(tokens)
    if matchType(tokens, 'RETURN'):
        return returnStmt(tokens)
    if matchType(tokens, 'WHILE'):
        return whileStmt(tokens)
    if matchType(tokens, 'LEFT_BRACE'):
        return lang.Block(block(tokens))
    return expressionStmt(tokens)

def varDecl(tokens: Tokens) -> lang.Var:
    name = matchTypeElseError(tokens, 'IDENTIFIER', "Expect variable name.")
    initializer = None
    if matchType(tokens, 'EQUAL'):
        initializer = expression(tokens)
    matchTypeElseError(tokens, 'SEMICOLON',
                       "Expect ';' after variable declaration.")
    return lang.Var(name, initializer)

def parameter(tokens: Tokens) -> lang.Token:
    return matchTypeElseError(tokens, 'IDENTIFIER', "Expect parameter name.")

def functionDecl(tokens: Tokens, kind: str) -> lang.FunctionStmt:
    """Parses a function declaration or a class method.
    kind is used for error messages.
    """
    name = matchTypeElseError(tokens, 'IDENTIFIER', f"Expect {kind} name.")
    matchTypeElseError(tokens, 'LEFT_PAREN', f"Expect '(' after {kind} name.")
    params = collectWhileComma(tokens, parameter, 'parameters')
    matchTypeElseError(tokens, 'RIGHT_PAREN', "Expect ')' after parameters.")
    matchTypeElseError(tokens, 'LEFT_BRACE', f"Expect '{{' before {kind} body.")
    body = block(tokens)
    return lang.FunctionStmt(name, params, body)

def classDecl(tokens: Tokens) -> lang.ClassStmt:
    name = matchTypeElseError(tokens, 'IDENTIFIER', "Expect class name.")
    matchTypeElseError(tokens, 'LEFT_BRACE', "Expect '{' before class body.")
    methods: List[lang.FunctionStmt] = []
    while not expectType(tokens, 'RIGHT_BRACE') and not atEnd(tokens):
        methods += [functionDecl(tokens, 'method')]
    matchTypeElseError(tokens, 'RIGHT_BRACE', "Expect '}' after class body.")
    return lang.ClassStmt(name, methods)

def declaration(tokens: Tokens) -> Optional[lang.Stmt]:
    """Parses a declaration or statement.
    On a syntax error, reports it and skips to the next statement,
    returning None.
    """
    try:
        if matchType(tokens, 'CLASS'):
            return classDecl(tokens)
        if matchType(tokens, 'FUN'):
            return functionDecl(tokens, 'function')
        if matchType(tokens, 'VAR'):
            return varDecl(tokens)
        return statement(tokens)
    except builtin.ParseError as err:
        tokens.diagnostics.error(err)
        synchronize(tokens)
        return None

# Main parsing loop

def parse(
    tokens: List[lang.Token],
    diagnostics: builtin.Diagnostics,
) -> lang.Stmts:
    """Parse declarations until the EOF token."""
    stream = Tokens(tokens, diagnostics)
    statements: lang.Stmts = []
    while not atEnd(stream):
        stmt = declaration(stream)
        if stmt:
            statements += [stmt]
    return statements
