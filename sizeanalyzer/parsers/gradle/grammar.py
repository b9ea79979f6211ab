"""Groovy build-script parser using a Lark LALR grammar.

The grammar covers the subset of Groovy that shows up in ``build.gradle``
files: command expressions (``minSdkVersion 15``), calls with trailing
closures, named arguments, assignments, declarations, annotations, classes
and the usual operators and control flow. The resulting lark tree is folded
into the closed node set of :mod:`sizeanalyzer.parsers.gradle.nodes`, each
node carrying its source span.

A few Groovy constructs need more than one token of lookahead: closure
parameters, casts and typed declarations. :class:`GroovyPostLexer` folds
those token runs into single ``CLOSURE_PARAMETERS``, ``CAST`` and
``TYPE_NAME`` tokens before they reach the LALR parser.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterator, List, Optional, Tuple

from lark import Lark, Token, Tree
from lark.exceptions import LarkError, UnexpectedInput
from lark.lark import PostLex

from sizeanalyzer.parsers.base import GradleParseError
from sizeanalyzer.parsers.gradle.nodes import (
    ArgumentTuple,
    Assignment,
    Block,
    Call,
    Literal,
    NamedArgument,
    Node,
    Other,
    PropertyAccess,
    Span,
    VariableRef,
)

logger = logging.getLogger("sizeanalyzer.parsers.gradle.grammar")


GROOVY_GRAMMAR = r"""
script: _sep* _statements?
_statements: _statement (_sep+ _statement)* _sep*
_sep: _NL | _SEMI

_statement: _plain_statement | annotated_statement
_plain_statement: expression_statement
                | command_call
                | assignment
                | aug_assignment
                | declaration
                | multiple_assignment
                | method_definition
                | class_definition
                | if_statement
                | for_statement
                | while_statement
                | switch_statement
                | try_statement
                | return_statement
                | throw_statement
                | import_statement
                | jump_statement

annotated_statement: (annotation _NL?)+ _plain_statement
annotation: _AT qualified_name (_LPAR _annotation_arguments? _RPAR)?
_annotation_arguments: _annotation_argument (_COMMA _annotation_argument)*
_annotation_argument: expression | element_value
element_value: NAME _ASSIGN expression

expression_statement: expression

// Command expressions: `name arg, arg`, `a.b.name arg`, `id 'x' version '1'`
command_call: postfix command_arguments command_link*
command_link: NAME command_arguments
command_arguments: _command_argument (_COMMA _argument)*
_command_argument: command_expression | named_argument

assignment: postfix _ASSIGN expression
aug_assignment: postfix _AUG_ASSIGN expression

declaration: _modifier+ _declared? NAME (_ASSIGN expression)?
           | TYPE_NAME NAME (_ASSIGN expression)?
multiple_assignment: _DEF _LPAR _multi_target (_COMMA _multi_target)* _RPAR _ASSIGN expression
_multi_target: _declared? NAME
_declared: declared_type | TYPE_NAME
declared_type: qualified_name
_modifier: _DEF | _FINAL | _STATIC | _PRIVATE | _PUBLIC | _PROTECTED

method_definition: _modifier+ _declared? NAME _LPAR _parameters? _RPAR block
                 | TYPE_NAME NAME _LPAR _parameters? _RPAR block
_parameters: parameter (_COMMA parameter)*
parameter: _modifier* _declared? NAME (_ASSIGN expression)?

class_definition: _modifier* _CLASS NAME (_EXTENDS _declared)? (_IMPLEMENTS _declared (_COMMA _declared)*)? block

if_statement: _IF _LPAR expression _RPAR _NL? _body (_ELSE _NL? _body)?
for_statement: _FOR _LPAR for_header _RPAR _NL? _body
for_header: _modifier* _declared? NAME (_IN | _COLON) expression   -> for_in
          | _for_clause? _SEMI expression? _SEMI _for_clause?     -> for_classic
_for_clause: declaration | local_declaration | assignment | aug_assignment | expression
local_declaration: declared_type NAME _ASSIGN expression           -> declaration
while_statement: _WHILE _LPAR expression _RPAR _NL? _body
switch_statement: _SWITCH _LPAR expression _RPAR _LBRACE _sep* switch_case* _RBRACE
switch_case: _CASE expression _COLON _sep* _statements?
           | _DEFAULT _COLON _sep* _statements?
try_statement: _TRY block catch_clause* (_FINALLY block)?
catch_clause: _CATCH _LPAR _declared? NAME _RPAR block
return_statement: _RETURN expression?
throw_statement: _THROW expression
import_statement: _IMPORT _STATIC? NAME (_DOT NAME)* (_DOT _STAR)? (_AS NAME)?
jump_statement: _BREAK | _CONTINUE
// Braces after if/for/while parse as a closure expression statement
_body: _statement

?expression: elvis
           | elvis _QMARK expression _COLON expression               -> conditional
?elvis: disjunction (_ELVIS disjunction)*
?disjunction: conjunction (_OR conjunction)*
?conjunction: bit_or (_AND bit_or)*
?bit_or: bit_xor (_PIPE bit_xor)*
?bit_xor: bit_and (_CARET bit_and)*
?bit_and: equality (_AMP equality)*
?equality: relational (_EQ_OP relational)*
?relational: shift_expr _relational_tail*
_relational_tail: _REL_OP shift_expr
                | _IN shift_expr
                | _INSTANCEOF _declared
                | _AS _declared
?shift_expr: additive (_shift_op additive)*
_shift_op: _SHIFT_OP | _RANGE
?additive: multiplicative (_add_op multiplicative)*
_add_op: _PLUS | _MINUS
?multiplicative: unary (_mul_op unary)*
_mul_op: _STAR | _SLASH | _PERCENT
?unary: power
      | (_BANG | _MINUS | _PLUS | _TILDE | _INCR) unary               -> prefix_expression
      | CAST unary                                                   -> cast_expression
?power: postfix
      | postfix _POWER unary

?postfix: primary
        | postfix _member_op NAME                                    -> property_access
        | postfix _member_op NAME arguments                          -> method_call
        | postfix _METHOD_POINTER NAME                               -> method_pointer
        | postfix _LSQB expression (_COMMA expression)* _RSQB         -> index
        | postfix _INCR                                              -> postfix_expression
_member_op: _DOT | _SAFE_DOT | _SPREAD_DOT

// The first argument of a command may not start with a token that would
// continue the head instead: `(`, `[`, `{`, a sign or `++`.
?command_expression: command_elvis
                   | command_elvis _QMARK expression _COLON expression  -> conditional
?command_elvis: command_disjunction
              | command_disjunction (_ELVIS disjunction)+            -> elvis
?command_disjunction: command_conjunction
                    | command_conjunction (_OR conjunction)+         -> disjunction
?command_conjunction: command_bit_or
                    | command_bit_or (_AND bit_or)+                  -> conjunction
?command_bit_or: command_bit_xor
               | command_bit_xor (_PIPE bit_xor)+                    -> bit_or
?command_bit_xor: command_bit_and
                | command_bit_and (_CARET bit_and)+                  -> bit_xor
?command_bit_and: command_equality
                | command_equality (_AMP equality)+                  -> bit_and
?command_equality: command_relational
                 | command_relational (_EQ_OP relational)+           -> equality
?command_relational: command_shift
                   | command_shift _relational_tail+                 -> relational
?command_shift: command_additive
              | command_additive (_shift_op additive)+               -> shift_expr
?command_additive: command_multiplicative
                 | command_multiplicative (_add_op multiplicative)+  -> additive
?command_multiplicative: command_unary
                       | command_unary (_mul_op unary)+              -> multiplicative
?command_unary: command_power
              | (_BANG | _TILDE) unary                               -> prefix_expression
              | CAST unary                                           -> cast_expression
?command_power: command_postfix
              | command_postfix _POWER unary                         -> power
?command_postfix: command_primary
                | command_postfix _member_op NAME                    -> property_access
                | command_postfix _member_op NAME arguments          -> method_call
                | command_postfix _METHOD_POINTER NAME               -> method_pointer
                | command_postfix _LSQB expression (_COMMA expression)* _RSQB -> index
                | command_postfix _INCR                              -> postfix_expression
?command_primary: literal
                | variable
                | call
                | new_expression

?primary: literal
        | variable
        | call
        | _LPAR expression _RPAR
        | list_literal
        | map_literal
        | closure
        | new_expression
variable: NAME
call: NAME arguments
arguments: _LPAR _argument_list? _RPAR closure?
         | closure
_argument_list: _argument (_COMMA _argument)* _COMMA?
_argument: expression | named_argument
named_argument: (NAME | SQ_STRING | DQ_STRING) _COLON expression

?literal: number | string | boolean | null_literal
number: NUMBER
string: SQ_STRING | DQ_STRING | TSQ_STRING | TDQ_STRING | SLASHY_STRING
boolean: TRUE | FALSE
null_literal: NULL
list_literal: _LSQB (expression (_COMMA expression)* _COMMA?)? _RSQB
map_literal: _LSQB _COLON _RSQB
           | _LSQB named_argument (_COMMA named_argument)* _COMMA? _RSQB
new_expression: _NEW TYPE_NAME (arguments | _LSQB expression _RSQB)
qualified_name: NAME (_DOT NAME)*

block: _LBRACE _sep* _statements? _RBRACE
closure: _LBRACE closure_parameters? _sep* _statements? _RBRACE
closure_parameters: CLOSURE_PARAMETERS? _ARROW

// Produced by GroovyPostLexer from runs of ordinary tokens.
%declare TYPE_NAME CAST CLOSURE_PARAMETERS

// Keywords. NAME matches are re-typed to these by the lexer.
_IF: "if"
_ELSE: "else"
_FOR: "for"
_WHILE: "while"
_SWITCH: "switch"
_CASE: "case"
_DEFAULT: "default"
_TRY: "try"
_CATCH: "catch"
_FINALLY: "finally"
_RETURN: "return"
_THROW: "throw"
_BREAK: "break"
_CONTINUE: "continue"
_DEF: "def"
_FINAL: "final"
_STATIC: "static"
_PRIVATE: "private"
_PUBLIC: "public"
_PROTECTED: "protected"
_CLASS: "class"
_EXTENDS: "extends"
_IMPLEMENTS: "implements"
_NEW: "new"
_IMPORT: "import"
_IN: "in"
_INSTANCEOF: "instanceof"
_AS: "as"
TRUE: "true"
FALSE: "false"
NULL: "null"

// Multi-character operators, longest alternative first.
_ARROW: "->"
_SAFE_DOT: "?."
_SPREAD_DOT: "*."
_METHOD_POINTER: ".&"
_ELVIS: "?:"
_RANGE: "..<" | ".."
_INCR: "++" | "--"
_POWER: "**"
_AUG_ASSIGN.3: ">>>=" | "<<=" | ">>=" | "**=" | "+=" | "-=" | "*=" | "/=" | "%=" | "?=" | "|=" | "&=" | "^="
_EQ_OP: "===" | "==~" | "!==" | "==" | "!=" | "=~"
_SHIFT_OP.2: ">>>" | ">>" | "<<"
_REL_OP: "<=>" | "<=" | ">=" | "<" | ">"
_AND: "&&"
_OR: "||"

_LPAR: "("
_RPAR: ")"
_LSQB: "["
_RSQB: "]"
_LBRACE: "{"
_RBRACE: "}"
_DOT: "."
_COMMA: ","
_SEMI: ";"
_COLON: ":"
_QMARK: "?"
_ASSIGN: "="
_PLUS: "+"
_MINUS: "-"
_STAR: "*"
_SLASH: "/"
_PERCENT: "%"
_BANG: "!"
_TILDE: "~"
_PIPE: "|"
_CARET: "^"
_AMP: "&"
_AT: "@"

NAME: /[A-Za-z_$][A-Za-z0-9_$]*/
NUMBER: /0[xX][0-9a-fA-F_]+[lLgGiI]?|\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d+)?[gGlLdDfFiI]?/
TDQ_STRING.3: /"{3}[\s\S]*?"{3}/
TSQ_STRING.3: /'{3}[\s\S]*?'{3}/
DQ_STRING: /"(?:[^"\\$\n]|\\.|\$\{(?:[^{}"'\n]|"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')*\}|\$)*"/
SQ_STRING: /'(?:[^'\\\n]|\\.)*'/
// A slash opens a regex literal only where no operand can end: at the start,
// after an opening bracket, an operator or a separator.
SLASHY_STRING: /(?:(?<![\s\S])|(?<=[=(,:\[!&|?{};~\n])|(?<=[=(,:\[!&|?{};~\n][ \t]))\/(?![*\/])(?:[^\/\\\n]|\\.)+\//

_NL: /(?:\r?\n[\t \f]*)+/
COMMENT: /\/\/[^\n]*/
BLOCK_COMMENT: /\/\*[\s\S]*?\*\//
WS: /[ \t\f\r]+/
LINE_CONTINUATION: /\\\r?\n/

%ignore WS
%ignore COMMENT
%ignore BLOCK_COMMENT
%ignore LINE_CONTINUATION
"""


# Newlines are dropped after these: the statement cannot end here.
_CONTINUE_AFTER = frozenset(
    {
        "_COMMA",
        "_ASSIGN",
        "_AUG_ASSIGN",
        "_DOT",
        "_SAFE_DOT",
        "_SPREAD_DOT",
        "_METHOD_POINTER",
        "_PLUS",
        "_MINUS",
        "_SLASH",
        "_PERCENT",
        "_POWER",
        "_BANG",
        "_AND",
        "_OR",
        "_PIPE",
        "_CARET",
        "_AMP",
        "_EQ_OP",
        "_REL_OP",
        "_SHIFT_OP",
        "_ELVIS",
        "_QMARK",
        "_COLON",
        "_RANGE",
    }
)

# Newlines are dropped before these: they continue the previous line.
_CONTINUE_BEFORE = frozenset(
    {
        "_DOT",
        "_SAFE_DOT",
        "_SPREAD_DOT",
        "_METHOD_POINTER",
        "_AND",
        "_OR",
        "_QMARK",
        "_ELVIS",
        "_COLON",
        "_ELSE",
        "_CATCH",
        "_FINALLY",
        "_LBRACE",
    }
)

_OPENERS = {"_LPAR": "_RPAR", "_LSQB": "_RSQB", "_LBRACE": "_RBRACE"}
_CLOSERS = {closer: opener for opener, closer in _OPENERS.items()}

_MEMBER_OPERATORS = frozenset({"_DOT", "_SAFE_DOT", "_SPREAD_DOT", "_METHOD_POINTER"})

_KEYWORDS = frozenset(
    {
        "_IF", "_ELSE", "_FOR", "_WHILE", "_SWITCH", "_CASE", "_DEFAULT",
        "_TRY", "_CATCH", "_FINALLY", "_RETURN", "_THROW", "_BREAK",
        "_CONTINUE", "_DEF", "_FINAL", "_STATIC", "_PRIVATE", "_PUBLIC",
        "_PROTECTED", "_CLASS", "_EXTENDS", "_IMPLEMENTS", "_NEW", "_IMPORT",
        "_IN", "_INSTANCEOF", "_AS", "TRUE", "FALSE", "NULL",
    }
)

# A type name is folded after these when it carries type arguments or `[]`.
_TYPE_OPERATORS = frozenset({"_AS", "_INSTANCEOF", "_EXTENDS", "_IMPLEMENTS"})

# A declaration or method header may begin right after these.
_STATEMENT_BOUNDARY = frozenset(
    {
        "_NL",
        "_SEMI",
        "_LBRACE",
        "_ARROW",
        "_COLON",
        "_DEF",
        "_FINAL",
        "_STATIC",
        "_PRIVATE",
        "_PUBLIC",
        "_PROTECTED",
    }
)

# `(` after one of these opens an argument list or a condition, never a cast.
_OPERAND_END = frozenset(
    {
        "NAME",
        "TYPE_NAME",
        "NUMBER",
        "SQ_STRING",
        "DQ_STRING",
        "TSQ_STRING",
        "TDQ_STRING",
        "SLASHY_STRING",
        "TRUE",
        "FALSE",
        "NULL",
        "_RPAR",
        "_RSQB",
        "_RBRACE",
        "_IF",
        "_WHILE",
        "_FOR",
        "_SWITCH",
        "_CATCH",
    }
)

_CAST_OPERANDS = frozenset(
    {
        "NAME",
        "NUMBER",
        "SQ_STRING",
        "DQ_STRING",
        "TSQ_STRING",
        "TDQ_STRING",
        "SLASHY_STRING",
        "TRUE",
        "FALSE",
        "NULL",
        "_LPAR",
        "_NEW",
        "_BANG",
        "_TILDE",
    }
)

_PRIMITIVE_TYPES = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"}
)

_TYPE_ARGUMENT_TOKENS = frozenset(
    {"NAME", "_DOT", "_COMMA", "_QMARK", "_LSQB", "_RSQB", "_EXTENDS"}
)
_PARAMETER_TOKENS = _TYPE_ARGUMENT_TOKENS | {"_REL_OP", "_SHIFT_OP", "_DEF", "_FINAL"}
_ANGLE_BRACKETS = ("<", ">", ">>", ">>>")

_LOOKAHEAD_LIMIT = 64


def _join_lines(stream: Iterator[Token]) -> Iterator[Token]:
    brackets: List[str] = []
    pending: Optional[Token] = None
    previous: Optional[str] = None

    for token in stream:
        kind = token.type
        if kind == "_NL":
            if brackets and brackets[-1] != "_LBRACE":
                continue
            if previous in _CONTINUE_AFTER:
                continue
            if pending is None:
                pending = token
            continue

        # `configurations.default`, `it.class`
        if kind in _KEYWORDS and previous in _MEMBER_OPERATORS:
            token = Token.new_borrow_pos("NAME", str(token), token)
            kind = "NAME"

        if pending is not None:
            if kind not in _CONTINUE_BEFORE:
                yield pending
            pending = None

        if kind in _OPENERS:
            brackets.append(kind)
        elif kind in _CLOSERS:
            if brackets and brackets[-1] == _CLOSERS[kind]:
                brackets.pop()

        previous = kind
        yield token

    if pending is not None:
        yield pending


def _fold(kind: str, tokens: List[Token], separator: str = "") -> Token:
    first, last = tokens[0], tokens[-1]
    return Token(
        kind,
        separator.join(str(token) for token in tokens),
        first.start_pos,
        first.line,
        first.column,
        last.end_line,
        last.end_column,
        last.end_pos,
    )


class _TokenRewriter:
    """Buffers the token stream and folds the runs the parser cannot split."""

    def __init__(self, stream: Iterator[Token]) -> None:
        self._stream = stream
        self._buffer: Deque[Token] = deque()
        self._previous: Optional[str] = None
        self._statement_start = True

    def __iter__(self) -> Iterator[Token]:
        while self._peek(0) is not None:
            group, starts_statement = self._next_group()
            yield from group
            self._previous = group[-1].type
            self._statement_start = (
                starts_statement or self._previous in _STATEMENT_BOUNDARY
            )

    def _peek(self, offset: int) -> Optional[Token]:
        while len(self._buffer) <= offset:
            token = next(self._stream, None)
            if token is None:
                return None
            self._buffer.append(token)
        return self._buffer[offset]

    def _is_type(self, kind: str, offset: int) -> bool:
        token = self._peek(offset)
        return token is not None and token.type == kind

    def _take(self, count: int) -> List[Token]:
        return [self._buffer.popleft() for _ in range(min(count, len(self._buffer)))]

    def _next_group(self) -> Tuple[List[Token], bool]:
        kind = self._buffer[0].type
        if kind == "_AT":
            return self._annotation(), True
        if kind == "_LBRACE":
            return self._closure_header(), False
        if kind == "_NEW":
            return self._new_type(), False
        if kind == "_LPAR":
            cast = self._cast()
            if cast is not None:
                return [cast], False
        elif kind == "NAME":
            end = self._declared_type_end()
            if end is not None:
                return [_fold("TYPE_NAME", self._take(end))], False
        return self._take(1), False

    def _scan_type(self, offset: int) -> Optional[Tuple[int, bool, str]]:
        """Match ``Name(.Name)*<args>?([])*`` at ``offset``.

        Returns the end offset, whether type arguments or array brackets
        were present, and the last segment of the qualified name.
        """
        token = self._peek(offset)
        if token is None or token.type != "NAME":
            return None
        simple = str(token)
        offset += 1
        while self._is_type("_DOT", offset) and self._is_type("NAME", offset + 1):
            simple = str(self._peek(offset + 1))
            offset += 2

        marked = False
        opener = self._peek(offset)
        if opener is not None and opener.type == "_REL_OP" and opener == "<":
            end = self._scan_type_arguments(offset)
            if end is None:
                return None
            offset, marked = end, True
        while self._is_type("_LSQB", offset) and self._is_type("_RSQB", offset + 1):
            offset += 2
            marked = True
        return offset, marked, simple

    def _scan_type_arguments(self, offset: int) -> Optional[int]:
        depth = 0
        for index in range(offset, offset + _LOOKAHEAD_LIMIT):
            token = self._peek(index)
            if token is None:
                return None
            if token.type in ("_REL_OP", "_SHIFT_OP") and token in _ANGLE_BRACKETS:
                if token == "<":
                    depth += 1
                else:
                    depth -= len(token)
            elif token.type not in _TYPE_ARGUMENT_TOKENS:
                return None
            if depth < 0:
                return None
            if depth == 0:
                return index + 1
        return None

    def _declared_type_end(self) -> Optional[int]:
        if self._previous in _MEMBER_OPERATORS:
            return None
        scanned = self._scan_type(0)
        if scanned is None:
            return None
        end, marked, _ = scanned
        if marked and self._previous in _TYPE_OPERATORS:
            return end
        if not self._is_type("NAME", end):
            return None
        if marked:
            return end
        if not self._statement_start:
            return None
        # `String name = ...` or `String name(...) {`
        if self._is_type("_ASSIGN", end + 1):
            return end
        if self._is_type("_LPAR", end + 1) and self._is_method_header(end + 2):
            return end
        return None

    def _is_method_header(self, offset: int) -> bool:
        for index in range(offset, offset + _LOOKAHEAD_LIMIT):
            token = self._peek(index)
            if token is None:
                return False
            if token.type == "_RPAR":
                return self._is_type("_LBRACE", index + 1)
            if token.type not in _PARAMETER_TOKENS:
                return False
            if token.type in ("_REL_OP", "_SHIFT_OP") and token not in _ANGLE_BRACKETS:
                return False
        return False

    def _closure_header(self) -> List[Token]:
        start = 1
        while self._is_type("_NL", start):
            start += 1
        for index in range(start, start + _LOOKAHEAD_LIMIT):
            token = self._peek(index)
            if token is None:
                break
            if token.type == "_ARROW":
                group = self._take(1)
                self._take(start - 1)
                if index > start:
                    group.append(_fold("CLOSURE_PARAMETERS", self._take(index - start), " "))
                group.extend(self._take(1))
                return group
            if token.type not in _PARAMETER_TOKENS:
                break
            if token.type in ("_REL_OP", "_SHIFT_OP") and token not in _ANGLE_BRACKETS:
                break
        return self._take(1)

    def _cast(self) -> Optional[Token]:
        if self._previous in _OPERAND_END:
            return None
        scanned = self._scan_type(1)
        if scanned is None:
            return None
        end, _, simple = scanned
        if simple not in _PRIMITIVE_TYPES and not simple[:1].isupper():
            return None
        if not self._is_type("_RPAR", end):
            return None
        operand = self._peek(end + 1)
        if operand is None or operand.type not in _CAST_OPERANDS:
            return None
        return _fold("CAST", self._take(end + 1))

    def _new_type(self) -> List[Token]:
        group = self._take(1)
        scanned = self._scan_type(0)
        if scanned is not None:
            end, _, _ = scanned
            group.append(_fold("TYPE_NAME", self._take(end)))
        return group

    def _annotation(self) -> List[Token]:
        end = 2
        while self._is_type("_DOT", end) and self._is_type("NAME", end + 1):
            end += 2
        if self._is_type("_LPAR", end):
            depth = 0
            while True:
                token = self._peek(end)
                if token is None:
                    break
                end += 1
                if token.type == "_LPAR":
                    depth += 1
                elif token.type == "_RPAR":
                    depth -= 1
                    if depth == 0:
                        break
        return self._take(end)


class GroovyPostLexer(PostLex):
    """Adapts the raw token stream to the LALR grammar.

    Line breaks inside parentheses and brackets are insignificant; inside
    braces (closures and blocks) they separate statements again. A break
    is also dropped after an operator or comma and before a token that
    continues the previous line (``.method()``, ``else``, ``{``).

    Keywords after a member operator become plain names. Closure parameter
    lists, cast prefixes and declared types are then folded into single
    tokens.
    """

    always_accept = ("_NL",)

    def process(self, stream: Iterator[Token]) -> Iterator[Token]:
        return iter(_TokenRewriter(_join_lines(stream)))


def _tree_span(tree: Tree) -> Optional[Span]:
    meta = tree.meta
    if getattr(meta, "empty", True):
        return None
    return Span(meta.start_pos, meta.end_pos, meta.line, meta.column)


def _token_span(token: Token) -> Span:
    return Span(token.start_pos, token.end_pos, token.line, token.column)


def _merge_spans(first: Optional[Span], last: Optional[Span]) -> Optional[Span]:
    if first is None or last is None:
        return first or last
    return Span(first.start, last.end, first.line, first.column)


def _unquote(token: Token) -> str:
    text = str(token)
    if token.type in ("SQ_STRING", "DQ_STRING") and len(text) >= 2:
        return text[1:-1]
    return text


class TreeBuilder:
    """Folds a lark parse tree into :mod:`nodes` values.

    Rules without a dedicated ``_build_<rule>`` method become :class:`Other`
    nodes whose children are the folded sub-trees.
    """

    def build(self, tree: Tree) -> Node:
        handler = getattr(self, f"_build_{tree.data}", None)
        if handler is None:
            return Other(
                kind=str(tree.data),
                children=self._build_children(tree),
                span=_tree_span(tree),
            )
        return handler(tree)

    def _build_children(self, tree: Tree) -> Tuple[Node, ...]:
        return tuple(
            self.build(child) for child in tree.children if isinstance(child, Tree)
        )

    # -- statements ---------------------------------------------------------

    def _build_script(self, tree: Tree) -> Block:
        return Block(statements=self._build_children(tree), span=_tree_span(tree))

    _build_block = _build_script

    def _build_closure(self, tree: Tree) -> Block:
        statements = tuple(
            self.build(child)
            for child in tree.children
            if isinstance(child, Tree) and child.data != "closure_parameters"
        )
        return Block(statements=statements, span=_tree_span(tree))

    def _build_expression_statement(self, tree: Tree) -> Node:
        return self.build(tree.children[0])

    def _build_annotated_statement(self, tree: Tree) -> Node:
        return self.build(tree.children[-1])

    def _build_assignment(self, tree: Tree) -> Assignment:
        target, value = tree.children
        return Assignment(
            target=self.build(target),
            value=self.build(value),
            span=_tree_span(tree),
        )

    def _build_declaration(self, tree: Tree) -> Node:
        name_token = next(
            child
            for child in tree.children
            if isinstance(child, Token) and child.type == "NAME"
        )
        values = [
            child
            for child in tree.children
            if isinstance(child, Tree) and child.data != "declared_type"
        ]
        if not values:
            return Other(kind="declaration", span=_tree_span(tree))
        return Assignment(
            target=VariableRef(name=str(name_token), span=_token_span(name_token)),
            value=self.build(values[0]),
            span=_tree_span(tree),
        )

    def _build_multiple_assignment(self, tree: Tree) -> Other:
        # `def (a, b) = ...` binds no single name; only the value is walked.
        return Other(
            kind="multiple_assignment",
            children=(self.build(tree.children[-1]),),
            span=_tree_span(tree),
        )

    def _build_method_definition(self, tree: Tree) -> Other:
        # Method bodies are never evaluated, so they are not walked either.
        return Other(kind="method_definition", span=_tree_span(tree))

    def _build_class_definition(self, tree: Tree) -> Other:
        return Other(kind="class_definition", span=_tree_span(tree))

    def _build_import_statement(self, tree: Tree) -> Other:
        return Other(kind="import_statement", span=_tree_span(tree))

    def _build_command_call(self, tree: Tree) -> Call:
        head, arguments, *links = tree.children
        receiver: Optional[Node]
        name: Optional[str]
        if head.data == "variable":
            receiver, name = None, str(head.children[0])
        elif head.data == "property_access":
            receiver, name = self.build(head.children[0]), str(head.children[1])
        else:
            # `foo() bar`, `(x) y`: nothing to name the call after
            receiver, name = self.build(head), None

        args = self._build_command_arguments(arguments)
        call = Call(
            name=name,
            arguments=args,
            receiver=receiver,
            span=_merge_spans(_tree_span(head), args.span),
        )
        head_span = call.span
        # `a x b y` chains as a(x).b(y)
        for link in links:
            link_name, link_arguments = link.children
            link_args = self._build_command_arguments(link_arguments)
            call = Call(
                name=str(link_name),
                arguments=link_args,
                receiver=call,
                span=_merge_spans(head_span, link_args.span),
            )
        return call

    # -- expressions --------------------------------------------------------

    def _build_variable(self, tree: Tree) -> VariableRef:
        return VariableRef(name=str(tree.children[0]), span=_tree_span(tree))

    def _build_property_access(self, tree: Tree) -> PropertyAccess:
        receiver, name_token = tree.children
        return PropertyAccess(
            receiver=self.build(receiver),
            name=str(name_token),
            span=_tree_span(tree),
        )

    def _build_method_call(self, tree: Tree) -> Call:
        receiver, name_token, arguments = tree.children
        return Call(
            name=str(name_token),
            arguments=self._build_arguments(arguments),
            receiver=self.build(receiver),
            span=_tree_span(tree),
        )

    def _build_call(self, tree: Tree) -> Call:
        name_token, arguments = tree.children
        return Call(
            name=str(name_token),
            arguments=self._build_arguments(arguments),
            span=_tree_span(tree),
        )

    def _collect_arguments(self, tree: Tree) -> Tuple[Tuple[Node, ...], Tuple[NamedArgument, ...]]:
        items = []
        named = []
        for child in tree.children:
            if not isinstance(child, Tree):
                continue
            if child.data == "named_argument":
                named.append(self._build_named_argument(child))
            else:
                items.append(self.build(child))
        return tuple(items), tuple(named)

    def _build_arguments(self, tree: Tree) -> ArgumentTuple:
        # Parenthesized arguments (plus any trailing closure) do not form one
        # contiguous argument range, so no span is recorded.
        items, named = self._collect_arguments(tree)
        return ArgumentTuple(items=items, named=named)

    def _build_command_arguments(self, tree: Tree) -> ArgumentTuple:
        items, named = self._collect_arguments(tree)
        return ArgumentTuple(items=items, named=named, span=_tree_span(tree))

    def _build_named_argument(self, tree: Tree) -> NamedArgument:
        key, value = tree.children
        return NamedArgument(
            key=_unquote(key),
            value=self.build(value),
            span=_tree_span(tree),
        )

    def _build_map_literal(self, tree: Tree) -> Other:
        values = tuple(
            self.build(entry.children[-1])
            for entry in tree.children
            if isinstance(entry, Tree)
        )
        return Other(kind="map_literal", children=values, span=_tree_span(tree))

    def _build_number(self, tree: Tree) -> Literal:
        return Literal(kind="number", span=_tree_span(tree))

    def _build_string(self, tree: Tree) -> Literal:
        token = tree.children[0]
        interpolated = (
            token.type in ("DQ_STRING", "TDQ_STRING", "SLASHY_STRING") and "$" in token
        )
        return Literal(kind="string", span=_tree_span(tree), interpolated=interpolated)

    def _build_boolean(self, tree: Tree) -> Literal:
        return Literal(kind="boolean", span=_tree_span(tree))

    def _build_null_literal(self, tree: Tree) -> Literal:
        return Literal(kind="null", span=_tree_span(tree))


class GradleScriptParser:
    """Lark based parser for Groovy ``build.gradle`` scripts.

    The grammar is compiled once; :meth:`parse` is safe to call repeatedly
    and from several threads, each call building its own tree.
    """

    def __init__(self) -> None:
        self.parser = Lark(
            GROOVY_GRAMMAR,
            start="script",
            parser="lalr",
            lexer="basic",
            postlex=GroovyPostLexer(),
            propagate_positions=True,
        )

    def parse_tree(self, text: str) -> Tree:
        """Parse build-script source into the raw lark tree.

        Raises:
            GradleParseError: If the text is not a valid build script.
        """
        try:
            return self.parser.parse(text)
        except UnexpectedInput as exc:
            line = exc.line if exc.line and exc.line > 0 else None
            column = exc.column if line is not None else None
            raise GradleParseError(
                f"Cannot parse build script: {exc.__class__.__name__}",
                line=line,
                column=column,
            ) from exc
        except LarkError as exc:
            raise GradleParseError(f"Cannot parse build script: {exc}") from exc

    def parse(self, text: str) -> Block:
        """Parse build-script source into a :class:`Block` of statements.

        Raises:
            GradleParseError: If the text is not a valid build script.
        """
        tree = self.parse_tree(text)
        script = TreeBuilder().build(tree)
        logger.debug("Parsed build script with %d statements", len(script.statements))
        return script


# Expose a single shared parser instance
GRADLE_PARSER = GradleScriptParser()


__all__ = [
    "GROOVY_GRAMMAR",
    "GroovyPostLexer",
    "TreeBuilder",
    "GradleScriptParser",
    "GRADLE_PARSER",
]
