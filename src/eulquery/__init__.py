# file eulquery\__init__.py
#
#   Copyright 2010 Emory University General Library
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.

"""Compiled XPath queries over in-memory document trees.

Build a document with :mod:`eulquery.tree`, compile an expression once and
evaluate it against as many context nodes as you like::

    from eulquery import compile, filters
    from eulquery.tree import Namespace

    books = compile('//lib:book', filters.element(),
                    namespaces=[Namespace('lib', 'urn:library')])
    for book in books.evaluate_all(doc):
        ...

Expressions are evaluated by a pluggable engine chosen through
:class:`~eulquery.factory.XPathFactory`; the default uses libxml2 through
lxml (:mod:`eulquery.lxmlxpath`).
"""

__version__ = '0.1.0'

from eulquery.compiled import XPathCompiled, XPathDiagnostic
from eulquery.exceptions import QueryException, InvalidExpression, \
    EvaluationFailed
from eulquery.factory import XPathFactory
from eulquery.tree import Namespace

__all__ = [
    'compile', 'XPathCompiled', 'XPathDiagnostic', 'XPathFactory',
    'QueryException', 'InvalidExpression', 'EvaluationFailed', 'Namespace',
]


def compile(expression, filter=None, variables=None, namespaces=None):
    "Compile an expression with the default :class:`~eulquery.factory.XPathFactory`."
    return XPathFactory.instance().compile(expression, filter, variables, namespaces)
