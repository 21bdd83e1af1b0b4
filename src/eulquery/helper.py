# file eulquery\helper.py
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

"""Building XPath expressions for nodes of a tree.

:func:`get_absolute_path` returns an expression that selects one node
from the top of its tree. It needs no namespace bindings: namespaced
names are matched with ``local-name()`` and ``namespace-uri()``.
"""

from eulquery.tree import Document, Element, Attribute, Text, Comment, \
    ProcessingInstruction

__all__ = ['get_absolute_path', 'xpath_literal']


def xpath_literal(value):
    "Quote a string as an XPath literal."
    if "'" not in value:
        return "'%s'" % value
    if '"' not in value:
        return '"%s"' % value
    parts = []
    for i, chunk in enumerate(value.split("'")):
        if i:
            parts.append('"\'"')
        if chunk:
            parts.append("'%s'" % chunk)
    return 'concat(%s)' % ', '.join(parts)


def _name_test(node):
    if node.namespace.uri:
        return '*[local-name() = %s and namespace-uri() = %s]' % \
            (xpath_literal(node.name), xpath_literal(node.namespace.uri))
    return node.name


def _same_test(node, other):
    if isinstance(node, Element):
        return isinstance(other, Element) and other.name == node.name and \
            other.namespace.uri == node.namespace.uri
    if isinstance(node, ProcessingInstruction):
        return isinstance(other, ProcessingInstruction) and other.target == node.target
    return type(other) is type(node)


def _position(node):
    # '[n]' when other siblings match the same step, otherwise ''
    if node.parent is None:
        return ''
    matches = [child for child in node.parent.children if _same_test(node, child)]
    if len(matches) < 2:
        return ''
    for i, child in enumerate(matches):
        if child is node:
            return '[%d]' % (i + 1)


def _text_runs(parent):
    # adjacent Text nodes are one text node to XPath
    runs, run = [], []
    for child in parent.children:
        if isinstance(child, Text):
            run.append(child)
        elif run:
            runs.append(run)
            run = []
    if run:
        runs.append(run)
    return runs


def _text_position(node):
    if node.parent is None:
        return ''
    # runs holding only empty text are not in the engine's tree at all
    runs = [run for run in _text_runs(node.parent) if any(text.value for text in run)]
    for i, run in enumerate(runs):
        if any(text is node for text in run):
            if len(runs) < 2:
                return ''
            return '[%d]' % (i + 1)
    raise ValueError('%r has no text XPath can select' % (node,))


def _step(node):
    if isinstance(node, Element):
        return _name_test(node) + _position(node)
    if isinstance(node, Comment):
        return 'comment()' + _position(node)
    if isinstance(node, ProcessingInstruction):
        return 'processing-instruction(%s)%s' % (xpath_literal(node.target), _position(node))
    if isinstance(node, Text):
        return 'text()' + _text_position(node)
    raise TypeError('No XPath step for %r' % (node,))


def get_absolute_path(node):
    """An absolute XPath expression that selects ``node``.

    Positional predicates are only added where a sibling matches the same
    step. Every Text node of a run of adjacent text gets the path of the
    run; text that is empty throughout its run can not be selected and
    raises ValueError. Raises TypeError for anything that is not a tree
    node.
    """
    if isinstance(node, Document):
        return '/'
    if isinstance(node, Attribute):
        if node.parent is None:
            raise TypeError('%r is not attached to an element' % (node,))
        if node.namespace.uri:
            step = '@' + _name_test(node)
        else:
            step = '@' + node.name
        return '%s/%s' % (get_absolute_path(node.parent), step)
    if not isinstance(node, (Element, Text, Comment, ProcessingInstruction)):
        raise TypeError('No XPath step for %r' % (node,))
    if isinstance(node.parent, Element):
        return '%s/%s' % (get_absolute_path(node.parent), _step(node))
    return '/' + _step(node)
