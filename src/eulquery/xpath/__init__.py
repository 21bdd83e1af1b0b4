"""Functions for scanning XPath expressions.

The lexer finds the parts of an expression that must be resolved before
it is handed to an evaluation engine: variable references and prefixed
names, and the places that depend on the context node.

.. function:: tokenize(xpath_str)

   Split an XPath expression into a list of ply tokens.

This module does not support evaluating XPath expressions.
"""

from eulquery.xpath.core import tokenize, find_variable_references, \
    find_qualified_names, find_relative_paths, find_context_calls, \
    selects_root, rewrite, VariableReference, QualifiedName, ContextCall
from eulquery.xpath.lexrules import LexError
