# file eulquery\navigator.py
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

"""Navigation over a document tree, as seen by a query engine.

A query engine treats namespace declarations as nodes of their own, while
:mod:`eulquery.tree` only infers them from scope. :class:`Navigator`
defines what an engine adapter may ask of the tree; :class:`TreeNavigator`
answers it, wrapping namespace bindings in :class:`NamespaceContainer`
pseudo-nodes where the engine expects namespace nodes.

Pseudo-nodes must never reach a caller. Every result produced by a
compiled query passes through :func:`unwrap`, which swaps each pseudo-node
back for the :class:`~eulquery.tree.Namespace` it wraps.
"""

from eulquery.tree import Namespace, Node, Document, Element, Attribute

__all__ = [
    'Navigator', 'TreeNavigator', 'NamespaceContainer',
    'unwrap', 'unwrap_all', 'iter_unwrapped',
]


class NamespaceContainer(object):
    """A namespace binding dressed up as a node.

    :param namespace: the wrapped :class:`~eulquery.tree.Namespace`
    :param owner: the element whose namespace axis produced this node, or
                  None when the engine does not say
    """

    __slots__ = ('namespace', 'owner')

    kind = 'namespace'

    def __init__(self, namespace, owner=None):
        self.namespace = namespace
        self.owner = owner

    @property
    def parent(self):
        return self.owner

    @property
    def string_value(self):
        return self.namespace.uri

    @property
    def qualified_name(self):
        return self.namespace.prefix

    def __eq__(self, other):
        if not isinstance(other, NamespaceContainer):
            return NotImplemented
        return self.namespace == other.namespace and self.owner is other.owner

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((self.namespace, id(self.owner)))

    def __repr__(self):
        return '<NamespaceContainer %r on %r>' % (self.namespace, self.owner)


def unwrap(obj):
    "Replace a :class:`NamespaceContainer` with its namespace; pass anything else."
    if isinstance(obj, NamespaceContainer):
        return obj.namespace
    return obj


def iter_unwrapped(results):
    for obj in results:
        yield unwrap(obj)


def unwrap_all(results):
    "List of ``results`` with every pseudo-node unwrapped; order is kept."
    return [unwrap(obj) for obj in results]


class Navigator(object):
    """The navigation capabilities an engine adapter relies on.

    Iteration methods return fresh iterators on every call; nothing is
    shared between two iterations.
    """

    def parent_of(self, node):
        raise NotImplementedError

    def children_of(self, node):
        raise NotImplementedError

    def attributes_of(self, node):
        raise NotImplementedError

    def namespaces_of(self, node):
        raise NotImplementedError

    def string_value_of(self, node):
        raise NotImplementedError

    def qualified_name_of(self, node):
        raise NotImplementedError

    def node_kind_of(self, node):
        raise NotImplementedError


class TreeNavigator(Navigator):
    "A :class:`Navigator` over :mod:`eulquery.tree` documents."

    def parent_of(self, node):
        return node.parent

    def children_of(self, node):
        if isinstance(node, (Document, Element)):
            for child in node.children:
                yield child

    def attributes_of(self, node):
        if isinstance(node, Element):
            for attr in node.attributes:
                yield attr

    def namespaces_of(self, node):
        """One :class:`NamespaceContainer` per namespace in scope at an
        element, the way the XPath namespace axis sees them: inherited
        bindings included, redeclared prefixes only once, and no entry for
        "no namespace"."""
        if isinstance(node, Element):
            for namespace in node.namespaces_in_scope():
                if namespace != Namespace.NO_NAMESPACE:
                    yield NamespaceContainer(namespace, node)

    def string_value_of(self, node):
        return node.string_value

    def qualified_name_of(self, node):
        if isinstance(node, (Element, Attribute, NamespaceContainer)):
            return node.qualified_name
        if node.kind == 'processing-instruction':
            return node.target
        return ''

    def node_kind_of(self, node):
        if isinstance(node, (Node, NamespaceContainer)):
            return node.kind
        raise TypeError('%r is not a document node' % (node,))
