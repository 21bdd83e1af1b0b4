import re
from collections import namedtuple

from ply import lex

from eulquery.xpath import lexrules

__all__ = [
    'lexer', 'tokenize', 'VariableReference', 'QualifiedName',
    'find_variable_references', 'find_qualified_names', 'rewrite',
    'ContextCall', 'find_relative_paths', 'find_context_calls', 'selects_root',
]

lexer = lex.lex(module=lexrules, reflags=re.UNICODE)

class LexerWrapper(lex.Lexer):
    def token(self):
        self.last = lex.Lexer.token(self)
        if self.last is not None:
            # ply leaves lexpos just past the token it returns
            self.last.endlexpos = self.lexpos
        return self.last
lexer.__class__ = LexerWrapper


def tokenize(expression):
    """Split an XPath expression into a list of ply tokens.

    Each call scans with its own clone of the module lexer, so this is
    safe to call from several threads. Raises
    :class:`~eulquery.xpath.lexrules.LexError` on unknown text.
    """
    scanner = lexer.clone()
    scanner.last = None
    scanner.input(expression)
    return list(scanner)


# token types that can serve as an NCName when they are part of a QName
NAME_TOKENS = set(['NCNAME', 'NODETYPE'] + list(lexrules.reserved.values()))

VariableReference = namedtuple('VariableReference',
                               'prefix local_name start end')
VariableReference.__doc__ = '''A ``$prefix:name`` or ``$name`` reference;
``start`` and ``end`` delimit it (``$`` included) in the expression text.'''

QualifiedName = namedtuple('QualifiedName',
                           'prefix local_name kind start end')
QualifiedName.__doc__ = '''A prefixed name in an expression. ``kind`` is
``'name'`` for a name test, ``'wildcard'`` for ``prefix:*`` and
``'function'`` for a prefixed function call.'''


def _adjacent(first, second):
    return first.endlexpos == second.lexpos


def _qname_at(tokens, i):
    # a QName is NAME COLON (NAME | STAR_OP) with nothing in between; returns
    # the index of its last token, or None
    if i + 2 >= len(tokens):
        return None
    prefix, colon, local = tokens[i:i + 3]
    if prefix.type in NAME_TOKENS and colon.type == 'COLON' and \
            (local.type in NAME_TOKENS or local.type == 'STAR_OP') and \
            _adjacent(prefix, colon) and _adjacent(colon, local):
        return i + 2
    return None


def find_variable_references(tokens):
    "All variable references in a token list, in expression order."
    refs = []
    i = 0
    while i < len(tokens) - 1:
        dollar = tokens[i]
        if dollar.type == 'DOLLAR' and tokens[i + 1].type in NAME_TOKENS:
            last = _qname_at(tokens, i + 1)
            if last is not None and tokens[last].type != 'STAR_OP':
                refs.append(VariableReference(tokens[i + 1].value, tokens[last].value,
                                              dollar.lexpos, tokens[last].endlexpos))
                i = last + 1
                continue
            refs.append(VariableReference(None, tokens[i + 1].value,
                                          dollar.lexpos, tokens[i + 1].endlexpos))
            i += 2
            continue
        i += 1
    return refs


def find_qualified_names(tokens):
    """All prefixed name tests and function names in a token list, in
    expression order. Variable references are not included."""
    names = []
    i = 0
    while i < len(tokens):
        if tokens[i].type == 'DOLLAR':
            # skip the variable name, prefixed or not
            last = _qname_at(tokens, i + 1)
            i = (last if last is not None else i + 1) + 1
            continue
        last = _qname_at(tokens, i)
        if last is None:
            i += 1
            continue
        prefix, local = tokens[i], tokens[last]
        if local.type == 'STAR_OP':
            kind = 'wildcard'
        elif last + 1 < len(tokens) and tokens[last + 1].type == 'OPEN_PAREN':
            kind = 'function'
        else:
            kind = 'name'
        names.append(QualifiedName(prefix.value, local.value, kind,
                                   prefix.lexpos, local.endlexpos))
        i = last + 1
    return names


# tokens after which a name test, '.', '..', '@' or '*' begins a new
# relative location path
PATH_STARTERS = set([
    'OPEN_PAREN', 'COMMA', 'UNION_OP', 'EQUAL_OP', 'REL_OP', 'PLUS_OP',
    'MINUS_OP', 'MULT_OP', 'AND_OP', 'OR_OP', 'DIV_OP', 'MOD_OP',
])
STEP_TOKENS = set([
    'NCNAME', 'NODETYPE', 'STAR_OP', 'ABBREV_STEP_SELF', 'ABBREV_STEP_PARENT',
    'ABBREV_AXIS_AT',
])
# functions that use the context node when called without arguments
CONTEXT_FUNCTIONS = set([
    'name', 'local-name', 'namespace-uri', 'string', 'string-length',
    'normalize-space', 'number',
])

ContextCall = namedtuple('ContextCall', 'name start open close')
ContextCall.__doc__ = '''A call that depends on the context node. ``start``
is where the function name begins, ``open`` is just inside its opening
parenthesis and ``close`` just past its closing one.'''


def _outside_predicates(tokens):
    # (index, token) for every token not inside [ ]
    depth = 0
    for i, token in enumerate(tokens):
        if token.type == 'OPEN_BRACKET':
            depth += 1
        elif token.type == 'CLOSE_BRACKET':
            depth -= 1
        elif depth == 0:
            yield i, token


def _is_function_name(tokens, i):
    if tokens[i].type != 'NCNAME':
        return False
    last = _qname_at(tokens, i)
    if last is None:
        last = i
    return last + 1 < len(tokens) and tokens[last + 1].type == 'OPEN_PAREN'


def find_relative_paths(tokens):
    """Start positions of the relative location paths that are evaluated
    against the context node itself: those outside any predicate and not
    continuing another path or a filter expression."""
    starts = []
    for i, token in _outside_predicates(tokens):
        if token.type not in STEP_TOKENS:
            continue
        previous = tokens[i - 1] if i else None
        if previous is not None and previous.type not in PATH_STARTERS:
            continue
        if _is_function_name(tokens, i):
            continue
        starts.append(token.lexpos)
    return starts


def _closing_paren(tokens, i):
    # index of the parenthesis closing the one at i
    depth = 0
    for j in range(i, len(tokens)):
        if tokens[j].type == 'OPEN_PAREN':
            depth += 1
        elif tokens[j].type == 'CLOSE_PAREN':
            depth -= 1
            if depth == 0:
                return j
    return None


def find_context_calls(tokens):
    """Calls outside any predicate that look at the context node without
    being given a node: ``lang()`` and the argument-less forms of the
    :data:`CONTEXT_FUNCTIONS`."""
    calls = []
    for i, token in _outside_predicates(tokens):
        if token.type != 'NCNAME' or i + 1 >= len(tokens) or \
                tokens[i + 1].type != 'OPEN_PAREN':
            continue
        if i and tokens[i - 1].type == 'COLON':
            continue
        close = _closing_paren(tokens, i + 1)
        if close is None:
            continue
        if token.value == 'lang' or \
                (token.value in CONTEXT_FUNCTIONS and close == i + 2):
            calls.append(ContextCall(token.value, token.lexpos,
                                     tokens[i + 1].endlexpos, tokens[close].endlexpos))
    return calls


ROOT_PATH = re.compile(r'^/(\.(/\.)*)?$')
SELF_PATH = re.compile(r'^\.(/\.)*$')

def selects_root(tokens, from_context=False):
    """True if the tokens are a path that selects nothing but the root of
    the tree, such as ``/`` or ``/.``. With ``from_context``, paths made
    only of ``.`` steps (selecting a context that is the root) count too."""
    symbols = {'PATH_SEP': '/', 'ABBREV_STEP_SELF': '.'}
    shape = ''.join(symbols.get(token.type, '?') for token in tokens)
    if ROOT_PATH.match(shape):
        return True
    return bool(from_context and SELF_PATH.match(shape))


def rewrite(expression, replacements):
    """Replace spans of an expression.

    :param replacements: iterable of ``(start, end, text)``; spans must not
                         overlap; insertions at the same position keep
                         their order
    """
    parts = []
    position = 0
    for start, end, text in sorted(replacements, key=lambda r: r[:2]):
        parts.append(expression[position:start])
        parts.append(text)
        position = end
    parts.append(expression[position:])
    return ''.join(parts)
