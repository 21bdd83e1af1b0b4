# file eulquery\filters.py
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

"""Result filters for compiled queries.

A filter decides, for every value a query selects, whether the caller gets
it and in what form. :meth:`Filter.filter` returns the (possibly coerced)
value to keep it, or None to drop it. Query results are filtered after any
namespace wrapping has been removed, so a filter sees the same objects the
caller does: tree nodes, :class:`~eulquery.tree.Namespace` bindings,
strings, numbers and booleans.
"""

from eulquery.tree import Document, Element, Attribute, Text, Comment, \
    ProcessingInstruction, Namespace

__all__ = [
    'Filter', 'passthrough', 'element', 'attribute', 'text', 'comment',
    'processing_instruction', 'document', 'content', 'namespace',
    'boolean', 'number', 'string', 'as_filter',
]


class Filter(object):
    "Base class for all result filters; keeps everything unchanged."

    def filter(self, obj):
        return obj

    def matches(self, obj):
        return self.filter(obj) is not None

    def filter_all(self, results):
        "Filter a sequence of results, dropping rejected ones."
        filtered = []
        for obj in results:
            value = self.filter(obj)
            if value is not None:
                filtered.append(value)
        return filtered

    def __call__(self, obj):
        return self.filter(obj)


class ClassFilter(Filter):
    "Keep only instances of the given class(es)."

    def __init__(self, *classes):
        self.classes = classes

    def filter(self, obj):
        if isinstance(obj, self.classes):
            return obj
        return None

    def __repr__(self):
        return 'ClassFilter(%s)' % ', '.join(cls.__name__ for cls in self.classes)


class NamedFilter(ClassFilter):
    """Keep instances of one node class, optionally restricted by local name
    and namespace URI."""

    def __init__(self, cls, name=None, namespace=None):
        super(NamedFilter, self).__init__(cls)
        self.name = name
        if isinstance(namespace, Namespace):
            namespace = namespace.uri
        self.namespace = namespace

    def filter(self, obj):
        if super(NamedFilter, self).filter(obj) is None:
            return None
        if self.name is not None and obj.name != self.name:
            return None
        if self.namespace is not None and obj.namespace.uri != self.namespace:
            return None
        return obj


class ProcessingInstructionFilter(ClassFilter):

    def __init__(self, target=None):
        super(ProcessingInstructionFilter, self).__init__(ProcessingInstruction)
        self.target = target

    def filter(self, obj):
        obj = super(ProcessingInstructionFilter, self).filter(obj)
        if obj is not None and self.target is not None and obj.target != self.target:
            return None
        return obj


class BooleanFilter(Filter):
    def filter(self, obj):
        if isinstance(obj, bool):
            return obj
        return None


class NumberFilter(Filter):
    # bool is an int subclass, but not a number as far as queries go
    def filter(self, obj):
        if isinstance(obj, (int, float)) and not isinstance(obj, bool):
            return obj
        return None


class StringFilter(Filter):
    def filter(self, obj):
        if isinstance(obj, str):
            return obj
        return None


class FunctionFilter(Filter):
    "Adapt a plain callable to the :class:`Filter` interface."

    def __init__(self, function):
        self.function = function

    def filter(self, obj):
        return self.function(obj)

    def __repr__(self):
        return 'FunctionFilter(%r)' % (self.function,)


_passthrough = Filter()


def passthrough():
    "A filter that keeps every result unchanged."
    return _passthrough


def element(name=None, namespace=None):
    """Keep elements, optionally only those with the given local name and
    namespace (a URI or a :class:`~eulquery.tree.Namespace`)."""
    return NamedFilter(Element, name, namespace)


def attribute(name=None, namespace=None):
    "Keep attributes, optionally by local name and namespace."
    return NamedFilter(Attribute, name, namespace)


def text():
    return ClassFilter(Text)


def comment():
    return ClassFilter(Comment)


def processing_instruction(target=None):
    return ProcessingInstructionFilter(target)


def document():
    return ClassFilter(Document)


def content():
    "Keep anything that can be the child of an element."
    return ClassFilter(Element, Text, Comment, ProcessingInstruction)


def namespace():
    return ClassFilter(Namespace)


def boolean():
    return BooleanFilter()


def number():
    return NumberFilter()


def string():
    return StringFilter()


def as_filter(obj):
    """Return ``obj`` as a :class:`Filter`: None gives :func:`passthrough`,
    a callable is wrapped in a :class:`FunctionFilter`."""
    if obj is None:
        return passthrough()
    if isinstance(obj, Filter):
        return obj
    if callable(obj):
        return FunctionFilter(obj)
    raise TypeError('%r is not a usable result filter' % (obj,))
