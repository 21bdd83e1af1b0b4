# file eulquery\tree.py
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

"""A small in-memory document model for :mod:`eulquery` to query.

The tree is deliberately minimal: nodes can be built up and read, but
there is no parsing, serialization, detaching or cloning. Namespace
declarations are not nodes of their own; they are inferred from the
namespaces used and declared by each :class:`Element` and its ancestors
(see :meth:`Element.namespaces_in_scope`).

Example::

    doc = Document()
    lib = Element('library', Namespace('lib', 'urn:library'))
    doc.append(lib)
    book = lib.append(Element('book', lib.namespace))
    book.set_attribute('id', 'b1')
    book.append(Text('Dune'))
"""

__all__ = [
    'Namespace', 'Node', 'Document', 'Element', 'Attribute', 'Text',
    'Comment', 'ProcessingInstruction',
]

XML_URI = 'http://www.w3.org/XML/1998/namespace'


class Namespace(object):
    """An immutable binding of a namespace prefix to a namespace URI.

    Two bindings are equal when both the prefix and the URI match. The
    empty prefix binds the default namespace; :attr:`NO_NAMESPACE` (empty
    prefix, empty URI) stands for "not in any namespace".
    """

    __slots__ = ('_prefix', '_uri')

    def __init__(self, prefix, uri):
        if prefix is None:
            prefix = ''
        if uri is None:
            uri = ''
        if not isinstance(prefix, str) or not isinstance(uri, str):
            raise TypeError('Namespace prefix and URI must be strings')
        if ':' in prefix:
            raise ValueError("Namespace prefix '%s' may not contain ':'" % prefix)
        if prefix and not uri:
            raise ValueError("Namespace prefix '%s' may not be bound to the empty URI" % prefix)
        if (prefix == 'xml') != (uri == XML_URI):
            raise ValueError("The 'xml' prefix is reserved for %s" % XML_URI)
        self._prefix = prefix
        self._uri = uri

    @property
    def prefix(self):
        return self._prefix

    @property
    def uri(self):
        return self._uri

    def __eq__(self, other):
        if not isinstance(other, Namespace):
            return NotImplemented
        return self._prefix == other._prefix and self._uri == other._uri

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((self._prefix, self._uri))

    def __repr__(self):
        return 'Namespace(%r, %r)' % (self._prefix, self._uri)

Namespace.NO_NAMESPACE = Namespace('', '')
Namespace.XML_NAMESPACE = Namespace('xml', XML_URI)


class Node(object):
    "Common behavior for every node in a document tree."

    #: short name of the node kind, matching the XPath data model
    kind = None

    def __init__(self):
        self.parent = None

    @property
    def root(self):
        "The top-most ancestor of this node (the node itself if unattached)."
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def document(self):
        "The :class:`Document` holding this node, or None."
        root = self.root
        if isinstance(root, Document):
            return root
        return None

    @property
    def string_value(self):
        raise NotImplementedError


class _Parent(Node):
    # shared child handling for documents and elements

    allowed_children = ()

    def __init__(self):
        super(_Parent, self).__init__()
        self._content = []

    @property
    def children(self):
        "The child nodes, in document order."
        return tuple(self._content)

    def append(self, child):
        """Add a node as the last child. A plain string is added as a
        :class:`Text` node. Returns the appended node."""
        if isinstance(child, str):
            child = Text(child)
        if not isinstance(child, self.allowed_children):
            raise TypeError('%s can not contain %s' %
                            (type(self).__name__, type(child).__name__))
        if child.parent is not None:
            raise ValueError('%r already has a parent' % child)
        node = self
        while node is not None:
            if node is child:
                raise ValueError('A node can not be its own descendant')
            node = node.parent
        child.parent = self
        self._content.append(child)
        return child

    def extend(self, children):
        for child in children:
            self.append(child)

    def index(self, child):
        "Position of a child node, compared by identity."
        for i, node in enumerate(self._content):
            if node is child:
                return i
        raise ValueError('%r is not a child of %r' % (child, self))


class Document(_Parent):
    """The top of a document tree: at most one root :class:`Element`, plus
    any number of comments and processing instructions."""

    kind = 'document'

    def __init__(self, root=None):
        super(Document, self).__init__()
        if root is not None:
            self.append(root)

    @property
    def allowed_children(self):
        return (Element, Comment, ProcessingInstruction)

    def append(self, child):
        if isinstance(child, Element) and self.root_element is not None:
            raise ValueError('A document can only have one root element')
        return super(Document, self).append(child)

    @property
    def root_element(self):
        for child in self._content:
            if isinstance(child, Element):
                return child
        return None

    @property
    def string_value(self):
        root = self.root_element
        if root is None:
            return ''
        return root.string_value

    def __repr__(self):
        return '<Document root=%r>' % (self.root_element,)


class Element(_Parent):
    """An element node with a local name and a :class:`Namespace`.

    :param name: local name; must not contain ``':'``
    :param namespace: the element's :class:`Namespace`; defaults to
                      :attr:`Namespace.NO_NAMESPACE`
    """

    kind = 'element'

    def __init__(self, name, namespace=None):
        super(Element, self).__init__()
        if not name or ':' in name:
            raise ValueError("'%s' is not a valid element name" % name)
        if namespace is None:
            namespace = Namespace.NO_NAMESPACE
        self.name = name
        self.namespace = namespace
        self._attributes = []
        self._declared = []

    @property
    def allowed_children(self):
        return (Element, Text, Comment, ProcessingInstruction)

    @property
    def qualified_name(self):
        if self.namespace.prefix:
            return '%s:%s' % (self.namespace.prefix, self.name)
        return self.name

    @property
    def clark_name(self):
        if self.namespace.uri:
            return '{%s}%s' % (self.namespace.uri, self.name)
        return self.name

    @property
    def attributes(self):
        return tuple(self._attributes)

    @property
    def declared_namespaces(self):
        "Namespaces declared on this element in addition to its own."
        return tuple(self._declared)

    def _check_prefix(self, namespace):
        # one prefix may only have one meaning on a single element
        used = [self.namespace] + self._declared + \
            [attr.namespace for attr in self._attributes]
        for ns in used:
            if ns.prefix == namespace.prefix and ns.uri != namespace.uri:
                raise ValueError("Prefix '%s' is already bound to '%s' on %s" %
                                 (ns.prefix, ns.uri, self.qualified_name))

    def add_namespace_declaration(self, namespace):
        "Declare an additional namespace on this element."
        if namespace == Namespace.NO_NAMESPACE or namespace == Namespace.XML_NAMESPACE:
            return
        self._check_prefix(namespace)
        if namespace not in self._declared:
            self._declared.append(namespace)

    def set_attribute(self, name, value, namespace=None):
        """Set an attribute, replacing any attribute with the same name and
        namespace URI. Returns the :class:`Attribute`."""
        if namespace is None:
            namespace = Namespace.NO_NAMESPACE
        if not namespace.prefix and namespace.uri:
            raise ValueError('An attribute namespace must have a prefix')
        if namespace.prefix:
            self._check_prefix(namespace)
        attr = Attribute(name, value, namespace)
        for i, existing in enumerate(self._attributes):
            if existing.name == name and existing.namespace.uri == namespace.uri:
                existing.parent = None
                attr.parent = self
                self._attributes[i] = attr
                return attr
        attr.parent = self
        self._attributes.append(attr)
        return attr

    def get_attribute_node(self, name, uri=''):
        for attr in self._attributes:
            if attr.name == name and attr.namespace.uri == uri:
                return attr
        return None

    def get_attribute(self, name, uri='', default=None):
        attr = self.get_attribute_node(name, uri)
        if attr is None:
            return default
        return attr.value

    def namespaces_in_scope(self):
        """All namespace bindings in scope at this element, as a list.

        This element's own namespace comes first, then its additional
        declarations, then the namespaces of its attributes, then the
        bindings inherited from ancestors whose prefix has not been
        redeclared. The ``xml`` namespace is always in scope, and when no
        default namespace applies the list contains
        :attr:`Namespace.NO_NAMESPACE`.
        """
        scope = {}
        result = []

        def add(namespace):
            if namespace.prefix not in scope:
                scope[namespace.prefix] = namespace
                result.append(namespace)

        add(self.namespace)
        for namespace in self._declared:
            add(namespace)
        for attr in self._attributes:
            if attr.namespace.prefix:
                add(attr.namespace)
        if isinstance(self.parent, Element):
            for namespace in self.parent.namespaces_in_scope():
                add(namespace)
        else:
            add(Namespace.XML_NAMESPACE)
            add(Namespace.NO_NAMESPACE)
        return result

    def namespaces_introduced(self):
        "The in-scope bindings that are not inherited unchanged from the parent."
        if isinstance(self.parent, Element):
            inherited = set(self.parent.namespaces_in_scope())
        else:
            inherited = set([Namespace.XML_NAMESPACE, Namespace.NO_NAMESPACE])
        return [ns for ns in self.namespaces_in_scope() if ns not in inherited]

    def get_namespace(self, prefix):
        "The namespace bound to ``prefix`` at this element, or None."
        for namespace in self.namespaces_in_scope():
            if namespace.prefix == prefix:
                return namespace
        return None

    @property
    def string_value(self):
        return ''.join(child.string_value for child in self._content
                       if isinstance(child, (Element, Text)))

    def __repr__(self):
        return '<Element %s>' % self.clark_name


class Attribute(Node):
    "An attribute of an :class:`Element`; created by :meth:`Element.set_attribute`."

    kind = 'attribute'

    def __init__(self, name, value, namespace=None):
        super(Attribute, self).__init__()
        if not name or ':' in name:
            raise ValueError("'%s' is not a valid attribute name" % name)
        if namespace is None:
            namespace = Namespace.NO_NAMESPACE
        self.name = name
        self.value = str(value)
        self.namespace = namespace

    @property
    def qualified_name(self):
        if self.namespace.prefix:
            return '%s:%s' % (self.namespace.prefix, self.name)
        return self.name

    @property
    def clark_name(self):
        if self.namespace.uri:
            return '{%s}%s' % (self.namespace.uri, self.name)
        return self.name

    @property
    def string_value(self):
        return self.value

    def __repr__(self):
        return '<Attribute %s=%r>' % (self.clark_name, self.value)


class Text(Node):
    kind = 'text'

    def __init__(self, value):
        super(Text, self).__init__()
        self.value = value

    @property
    def string_value(self):
        return self.value

    def __repr__(self):
        return '<Text %r>' % self.value


class Comment(Node):
    kind = 'comment'

    def __init__(self, value):
        super(Comment, self).__init__()
        self.value = value

    @property
    def string_value(self):
        return self.value

    def __repr__(self):
        return '<Comment %r>' % self.value


class ProcessingInstruction(Node):
    kind = 'processing-instruction'

    def __init__(self, target, data=''):
        super(ProcessingInstruction, self).__init__()
        if not target or target.lower() == 'xml':
            raise ValueError("'%s' is not a valid processing instruction target" % target)
        self.target = target
        self.data = data or ''

    @property
    def string_value(self):
        return self.data

    def __repr__(self):
        return '<ProcessingInstruction %s %r>' % (self.target, self.data)
