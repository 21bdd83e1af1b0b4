# file eulquery\lxmlxpath\navigator.py
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

"""Presents :mod:`eulquery.tree` documents to libxml2's XPath engine.

lxml only evaluates XPath over its own trees, so :class:`LxmlNavigator`
builds an lxml *view* of the tree holding the context node and remembers
which tree node every view node stands for. The view is scratch state for
a single evaluation: :meth:`LxmlNavigator.reset` throws it away.
"""

import logging

from lxml import etree

from eulquery.navigator import TreeNavigator, NamespaceContainer, unwrap
from eulquery.tree import Namespace, Document, Element, Attribute, Text, \
    Comment, ProcessingInstruction

__all__ = ['LxmlNavigator']

logger = logging.getLogger(__name__)


class LxmlNavigator(TreeNavigator):
    """A :class:`~eulquery.navigator.TreeNavigator` that also owns the lxml
    view used for one evaluation.

    After :meth:`bind`, :attr:`context` is the view node to evaluate
    against and :attr:`scope` maps every prefix in scope at the context
    node to its URI.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        "Forget the context, the namespace scope and every view built."
        self.context = None
        self.scope = {}
        self._views = {}    # tree node -> view node
        self._nodes = {}    # view node -> tree node
        self._texts = {}    # (view node, is tail) -> first Text of the run

    def bind(self, node):
        """Prepare to evaluate against ``node``; raises TypeError for a
        node that can not be an evaluation context."""
        self.reset()
        if isinstance(node, Document):
            element = node.root_element
            if element is None:
                raise TypeError('Can not evaluate against a document with no root element')
        elif isinstance(node, (Element, Comment, ProcessingInstruction)):
            element = node
        else:
            raise TypeError('Can not evaluate against %r' % (node,))
        self.context = self.view_of(element)

        scope_element = element
        if not isinstance(scope_element, Element):
            scope_element = element.parent
        if isinstance(scope_element, Element):
            for container in self.namespaces_of(scope_element):
                namespace = unwrap(container)
                self.scope[namespace.prefix] = namespace.uri

    def view_of(self, node):
        "The view node standing for a tree node, building its view if needed."
        if isinstance(node, Document):
            node = node.root_element
            if node is None:
                raise TypeError('A document with no root element has no view')
        if node not in self._views:
            self._build(node.root)
        if node not in self._views:
            raise TypeError('%r is not in a tree lxml can represent' % (node,))
        return self._views[node]

    def _build(self, top):
        logger.debug('building lxml view of %r', top)
        if isinstance(top, Document):
            root = top.root_element
            if root is None:
                return
            root_view = self._build_element(root, None)
            children = list(self.children_of(top))
            position = top.index(root)
            for child in children[:position]:
                root_view.addprevious(self._build_leaf(child))
            for child in reversed(children[position + 1:]):
                root_view.addnext(self._build_leaf(child))
        elif isinstance(top, Element):
            self._build_element(top, None)
        else:
            self._build_leaf(top)

    def _nsmap(self, element):
        # only declare what this element adds to the scope it inherits
        nsmap = {}
        for namespace in element.namespaces_introduced():
            if namespace == Namespace.XML_NAMESPACE or not namespace.uri:
                continue
            nsmap[namespace.prefix or None] = namespace.uri
        return nsmap

    def _remember(self, node, view):
        self._views[node] = view
        self._nodes[view] = node
        return view

    def _build_element(self, element, parent_view):
        if parent_view is None:
            view = etree.Element(element.clark_name, nsmap=self._nsmap(element))
        else:
            view = etree.SubElement(parent_view, element.clark_name,
                                    nsmap=self._nsmap(element))
        self._remember(element, view)
        for attr in self.attributes_of(element):
            view.set(attr.clark_name, attr.value)

        previous = None
        run = []
        for child in self.children_of(element):
            if isinstance(child, Text):
                run.append(child)
                continue
            self._add_text(view, previous, run)
            run = []
            if isinstance(child, Element):
                previous = self._build_element(child, view)
            else:
                previous = self._build_leaf(child)
                view.append(previous)
        self._add_text(view, previous, run)
        return view

    def _add_text(self, view, previous, run):
        # libxml2 has one text node per run of adjacent tree Text nodes
        value = ''.join(self.string_value_of(text) for text in run)
        if not value:
            return
        first = [text for text in run if text.value][0]
        if previous is None:
            view.text = value
            self._texts[(view, False)] = first
        else:
            previous.tail = value
            self._texts[(previous, True)] = first

    def _build_leaf(self, node):
        if isinstance(node, Comment):
            view = etree.Comment(node.value)
        else:
            view = etree.ProcessingInstruction(node.target, node.data or None)
        return self._remember(node, view)

    def to_engine(self, value):
        """Convert a variable value to something lxml accepts: nodes become
        view nodes, attributes and text their string value, a namespace
        its URI."""
        if isinstance(value, (Document, Element, Comment, ProcessingInstruction)):
            return self.view_of(value)
        if isinstance(value, (Attribute, Text)):
            return value.string_value
        if isinstance(value, Namespace):
            return value.uri
        if isinstance(value, NamespaceContainer):
            return value.namespace.uri
        if isinstance(value, (list, tuple)):
            return [self.to_engine(item) for item in value]
        return value

    def to_tree(self, item):
        """Convert one raw lxml result to the tree's terms. Namespace-axis
        results become :class:`~eulquery.navigator.NamespaceContainer`
        pseudo-nodes; lxml does not say which element they came from."""
        if isinstance(item, etree._Element):
            return self._nodes[item]
        if isinstance(item, tuple):
            prefix, uri = item
            return NamespaceContainer(Namespace(prefix or '', uri), None)
        if isinstance(item, str):
            getparent = getattr(item, 'getparent', None)
            parent = getparent() if getparent is not None else None
            if parent is None:
                return str(item)
            if item.is_attribute:
                for attr in self.attributes_of(self._nodes[parent]):
                    if attr.clark_name == item.attrname:
                        return attr
                raise KeyError(item.attrname)
            return self._texts[(parent, bool(item.is_tail))]
        return item
