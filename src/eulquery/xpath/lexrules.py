"""XPath lexing rules.

To understand how this module works, it is valuable to have a strong
understanding of the `ply <http://www.dabeaz.com/ply/>` module.
"""

from ply.lex import TOKEN


class LexError(ValueError):
    "Raised for text that can not start any XPath token."

    def __init__(self, text, position):
        super(LexError, self).__init__("Unknown text '%s' at position %d" % (text, position))
        self.text = text
        self.position = position


reserved = {
    'or': 'OR_OP',
    'and': 'AND_OP',
    'div': 'DIV_OP',
    'mod': 'MOD_OP',
}

tokens = [
        'PATH_SEP',
        'ABBREV_PATH_SEP',
        'ABBREV_STEP_SELF',
        'ABBREV_STEP_PARENT',
        'AXIS_SEP',
        'ABBREV_AXIS_AT',
        'OPEN_PAREN',
        'CLOSE_PAREN',
        'OPEN_BRACKET',
        'CLOSE_BRACKET',
        'UNION_OP',
        'EQUAL_OP',
        'REL_OP',
        'PLUS_OP',
        'MINUS_OP',
        'MULT_OP',
        'STAR_OP',
        'COMMA',
        'LITERAL',
        'FLOAT',
        'INTEGER',
        'NCNAME',
        'NODETYPE',
        'COLON',
        'DOLLAR',
    ] + list(reserved.values())

t_PATH_SEP = r'/'
t_ABBREV_PATH_SEP = r'//'
t_ABBREV_STEP_SELF = r'\.'
t_ABBREV_STEP_PARENT = r'\.\.'
t_AXIS_SEP = r'::'
t_ABBREV_AXIS_AT = r'@'
t_OPEN_PAREN = r'\('
t_CLOSE_PAREN = r'\)'
t_OPEN_BRACKET = r'\['
t_CLOSE_BRACKET = r'\]'
t_UNION_OP = r'\|'
t_EQUAL_OP = r'!?='
t_REL_OP = r'[<>]=?'
t_PLUS_OP = r'\+'
t_MINUS_OP = r'-'
t_COMMA = r','
t_COLON = r':'
t_DOLLAR = r'\$'

t_ignore = ' \t\r\n'

def t_LITERAL(t):
    r""""[^"]*"|'[^']*'"""
    t.value = t.value[1:-1]
    return t

def t_FLOAT(t):
    r'\d+\.\d*|\.\d+'
    t.value = float(t.value)
    return t

def t_INTEGER(t):
    r'\d+'
    t.value = int(t.value)
    return t

# Monster regex derived from:
#  http://www.w3.org/TR/REC-xml/#NT-NameStartChar
#  http://www.w3.org/TR/REC-xml/#NT-NameChar
# EXCEPT:
# Technically those productions allow ':'. NCName, on the other hand:
#  http://www.w3.org/TR/REC-xml-names/#NT-NCName
# explicitly excludes those names that have ':'. We implement this by
# simply removing ':' from our regexes.

NameStartChar = r'[A-Z_a-z\xc0-\xd6\xd8-\xf6\xf8-\u02ff\u0370-\u037d' + \
    r'\u037f-\u1fff\u200c-\u200d\u2070-\u218f\u2c00-\u2fef\u3001-\ud7ff' + \
    r'\uf900-\ufdcf\ufdf0-\ufffd\U00010000-\U000effff]'
# additional characters allowed in NCNames after the first character
NameChar_extras = r'[-.0-9\xb7\u0300-\u036f\u203f-\u2040]'

NCNAME_REGEX = r'(?:' + NameStartChar + r')(?:' + \
                        NameStartChar + r'|' + NameChar_extras + r')*'

NODE_TYPES = set(['comment', 'text', 'processing-instruction', 'node'])

@TOKEN(NCNAME_REGEX)
def t_NCNAME(t):
    # ply doesn't pick out reserved keywords by itself, so here we check for
    # them ourselves.
    kwtoken = reserved.get(t.value, None)
    if kwtoken:
        t.type = kwtoken
    elif t.value in NODE_TYPES:
        # NOTE: foo:node is a QName, lexed here as NCNAME COLON NODETYPE.
        # QName consumers treat NODETYPE as a plain name after a colon.
        t.type = 'NODETYPE'
    return t


# Per http://www.w3.org/TR/xpath/#exprlex :
#   "If there is a preceding token and the preceding token is not one of @,
#    ::, (, [, , or an Operator, then a * must be recognized as a
#    MultiplyOperator...."
#   "Otherwise, the token must not be recognized as a MultiplyOperator...."
#
# Note that the XPath recommendation doesn't list ':' but we do: NCName ':' '*' is a name
# test, so ':' needs to force the next '*' to be a STAR_OP, not a MULT_OP.
#
# We implement this by making the lexer keep track of its last token. Note
# that the ply lexer doesn't do this by default. This only works because
# core.py tweaks the token() logic to do so. The check is on token types
# so that a literal such as "and" can't force a STAR_OP.
STAR_FORCERS = set([
    'ABBREV_AXIS_AT', 'AXIS_SEP', 'OPEN_PAREN', 'OPEN_BRACKET', 'COMMA',
    'AND_OP', 'OR_OP', 'MOD_OP', 'DIV_OP', 'MULT_OP', 'PATH_SEP',
    'ABBREV_PATH_SEP', 'UNION_OP', 'PLUS_OP', 'MINUS_OP', 'EQUAL_OP',
    'REL_OP', 'COLON',
])
def t_MULT_OP(t):
    r'\*'
    last = getattr(t.lexer, 'last', None)
    if last is None or last.type in STAR_FORCERS:
        t.type = 'STAR_OP'
    # else stick with MULT_OP
    return t

def t_error(t):
    raise LexError(t.value[:10], t.lexpos)
