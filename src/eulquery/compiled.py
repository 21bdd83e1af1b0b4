# file eulquery\compiled.py
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

"""Compiled XPath queries.

:class:`XPathCompiled` holds everything about a query that does not
change between evaluations: the expression, the result filter, and the
variable and namespace bindings. Engine adapters subclass it and supply
:meth:`XPathCompiled._evaluate_raw`; everything a caller sees goes
through :func:`~eulquery.navigator.unwrap` and then the result filter.

A compiled query holds no reference to any context node and may be
evaluated from several threads at once.
"""

from contextlib import closing
import logging

from eulquery import filters
from eulquery.exceptions import EvaluationFailed
from eulquery.navigator import iter_unwrapped, unwrap_all
from eulquery.resolvers import NamespaceContext, VariableContext, ContextResolver
from eulquery.tree import Namespace

__all__ = ['XPathCompiled', 'XPathDiagnostic']

logger = logging.getLogger(__name__)


def _collect_namespaces(namespaces):
    # prefix -> Namespace; the default prefix is always bound
    bound = {}
    if namespaces is None:
        namespaces = []
    elif isinstance(namespaces, dict):
        namespaces = namespaces.items()
    for namespace in namespaces:
        if not isinstance(namespace, Namespace):
            prefix, uri = namespace
            namespace = Namespace(prefix, uri)
        existing = bound.get(namespace.prefix)
        if existing is not None and existing != namespace:
            raise ValueError("Namespace prefix '%s' is bound to both '%s' and '%s'" %
                             (namespace.prefix, existing.uri, namespace.uri))
        bound[namespace.prefix] = namespace
    bound.setdefault('', Namespace.NO_NAMESPACE)
    return bound


def _variable_key(name, namespaces):
    # (uri, local name) for any of the supported ways of naming a variable
    if isinstance(name, tuple):
        uri, local_name = name
        return (uri or '', local_name)
    if not isinstance(name, str):
        raise TypeError('Variable name must be a string or a (namespace, name) '
                        'tuple, not %s' % type(name).__name__)
    if name.startswith('{'):
        uri, sep, local_name = name[1:].partition('}')
        if not sep or not local_name:
            raise ValueError("'%s' is not a valid variable name" % name)
        return (uri, local_name)
    prefix, sep, local_name = name.rpartition(':')
    if prefix not in namespaces:
        raise ValueError("Prefix '%s' of variable '%s' is not bound" % (prefix, name))
    return (namespaces[prefix].uri, local_name)


class XPathDiagnostic(object):
    """What one evaluation produced, for working out why a query does not
    return what was expected.

    :attr:`raw_results` are the unwrapped results before filtering;
    :attr:`result` are the values the filter kept and
    :attr:`filtered_results` the ones it dropped.
    """

    def __init__(self, compiled, context, raw_results, result, filtered_results,
                 first_only):
        self.compiled = compiled
        self.context = context
        self.first_only = first_only
        self.raw_results = raw_results
        self.result = result
        self.filtered_results = filtered_results

    def __str__(self):
        return '[XPathDiagnostic: expression: %s first: %s context: %r ' \
               'raw: %d result: %d filtered: %d]' % \
            (self.compiled.expression, self.first_only, self.context,
             len(self.raw_results), len(self.result), len(self.filtered_results))


class XPathCompiled(NamespaceContext, VariableContext):
    """Base class for a compiled query.

    :param expression: the XPath expression
    :param filter: a :class:`~eulquery.filters.Filter` or callable applied
                   to every result; returns the value to keep, or None to
                   drop the result. Defaults to keeping everything.
    :param variables: dict of variable values. Keys may be
                      ``(namespace_uri, local_name)`` tuples, Clark names
                      (``{uri}name``), ``prefix:name`` using a prefix from
                      ``namespaces``, or a plain name.
    :param namespaces: :class:`~eulquery.tree.Namespace` objects (or
                       ``(prefix, uri)`` pairs, or a dict of prefix to URI)
                       available to the expression
    """

    def __init__(self, expression, filter=None, variables=None, namespaces=None):
        if not isinstance(expression, str):
            raise TypeError('XPath expression must be a string, not %s' %
                            type(expression).__name__)
        if not expression.strip():
            raise ValueError('XPath expression must not be empty')
        self._expression = expression
        self._filter = filters.as_filter(filter)
        self._namespaces = _collect_namespaces(namespaces)
        self._variables = {}
        for name, value in (variables or {}).items():
            key = _variable_key(name, self._namespaces)
            if key in self._variables:
                raise ValueError('Variable {%s}%s is bound more than once' % key)
            self._variables[key] = value
        self._resolver = ContextResolver(self)

    @property
    def expression(self):
        return self._expression

    @property
    def filter(self):
        return self._filter

    @property
    def namespaces(self):
        "The bound namespaces, sorted by prefix."
        return tuple(self._namespaces[prefix] for prefix in sorted(self._namespaces))

    def get_namespace(self, prefix):
        "The :class:`~eulquery.tree.Namespace` bound to ``prefix``; KeyError if none is."
        if prefix is None:
            prefix = ''
        return self._namespaces[prefix]

    @property
    def variables(self):
        return dict(self._variables)

    def get_variable(self, name, namespace_uri=None):
        """Value of a bound variable; KeyError if it is not bound.

        ``name`` takes any of the forms accepted for the ``variables``
        constructor argument. With ``namespace_uri`` given, ``name`` is the
        local name.
        """
        if namespace_uri is not None:
            key = (namespace_uri, name)
        else:
            try:
                key = _variable_key(name, self._namespaces)
            except ValueError as e:
                raise KeyError(name) from e
        return self._variables[key]

    def translate_namespace_prefix_to_uri(self, prefix):
        return self._resolver.translate_namespace_prefix_to_uri(prefix)

    def get_variable_value(self, namespace_uri, prefix, local_name):
        return self._resolver.get_variable_value(namespace_uri, prefix, local_name)

    def _evaluate_raw(self, context):
        """Generator of the engine's results for ``context``, in engine
        order. Results may include
        :class:`~eulquery.navigator.NamespaceContainer` pseudo-nodes.
        Implemented by engine adapters."""
        raise NotImplementedError

    def _apply_filter(self, obj):
        try:
            return self._filter.filter(obj)
        except Exception as e:
            raise EvaluationFailed("Result filter %r failed on %r" % (self._filter, obj), e) from e

    def evaluate_all(self, context):
        """Evaluate against ``context`` and return a list of every result
        the filter keeps, in the order the engine produced them."""
        logger.debug("evaluating '%s' against %r", self._expression, context)
        raw = unwrap_all(self._evaluate_raw(context))
        results = []
        for obj in raw:
            value = self._apply_filter(obj)
            if value is not None:
                results.append(value)
        return results

    def evaluate_first(self, context):
        """Evaluate against ``context`` and return the first result the
        filter keeps, or None if there is none."""
        logger.debug("evaluating first of '%s' against %r", self._expression, context)
        with closing(self._evaluate_raw(context)) as raw:
            for obj in iter_unwrapped(raw):
                value = self._apply_filter(obj)
                if value is not None:
                    return value
        return None

    def diagnose(self, context, first_only=False):
        "Evaluate and report unfiltered and filtered results as an :class:`XPathDiagnostic`."
        raw_results, result, filtered = [], [], []
        with closing(self._evaluate_raw(context)) as raw:
            for obj in iter_unwrapped(raw):
                raw_results.append(obj)
                value = self._apply_filter(obj)
                if value is None:
                    filtered.append(obj)
                    continue
                result.append(value)
                if first_only:
                    break
        return XPathDiagnostic(self, context, raw_results, result, filtered, first_only)

    def __repr__(self):
        return '<%s %r>' % (type(self).__name__, self._expression)
