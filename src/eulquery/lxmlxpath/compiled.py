# file eulquery\lxmlxpath\compiled.py
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

"""Compiled queries evaluated by libxml2, through :mod:`lxml.etree`.

libxml2 resolves namespace prefixes and variables from tables filled in
before evaluation rather than by calling back, and it has no namespaced
variables. The expression is therefore scanned with the
:mod:`eulquery.xpath` lexer when it is compiled:

* prefixed variable references (``$p:name``) are renamed to engine-local
  names, much as :class:`lxml.etree.ETXPath` renames ``{uri}`` names;
* every variable is resolved through
  :meth:`~eulquery.resolvers.ContextResolver.get_variable_value` at each
  evaluation;
* prefixes the query does not bind are resolved against the namespaces in
  scope at the context node. A prefix that resolves to no namespace is
  removed from name tests, which then match names in no namespace.

lxml always evaluates a document at its root element and drops document
nodes from node-sets. For a :class:`~eulquery.tree.Document` context the
relative paths of the expression are anchored at ``/`` and argument-less
context functions are given ``/``. Paths that select nothing but the
root (``/``, ``/.``, or ``.`` against a document) return the document
without asking the engine.
"""

from contextlib import contextmanager
import logging
import threading

from lxml import etree

from eulquery import xpath
from eulquery.compiled import XPathCompiled
from eulquery.exceptions import UnresolvableVariable, compile_failures, \
    evaluation_failures
from eulquery.lxmlxpath.navigator import LxmlNavigator
from eulquery.resolvers import ContextResolver
from eulquery.tree import Document

__all__ = ['LxmlCompiled']

logger = logging.getLogger(__name__)

NO_NAMESPACE_WILDCARD = "*[namespace-uri()='']"


class LxmlCompiled(XPathCompiled):
    "An :class:`~eulquery.compiled.XPathCompiled` evaluated by lxml."

    def __init__(self, expression, filter=None, variables=None, namespaces=None):
        super(LxmlCompiled, self).__init__(expression, filter, variables, namespaces)

        with compile_failures(expression, xpath.LexError):
            tokens = xpath.tokenize(expression)

        # (prefix, local name) -> name the engine knows the variable by
        self._variable_names = {}
        self._variable_renames = []
        for ref in xpath.find_variable_references(tokens):
            key = (ref.prefix, ref.local_name)
            if key not in self._variable_names:
                if ref.prefix is None:
                    self._variable_names[key] = ref.local_name
                else:
                    self._variable_names[key] = '__xpv%02d' % len(self._variable_names)
            if ref.prefix is not None:
                self._variable_renames.append(
                    (ref.start, ref.end, '$' + self._variable_names[key]))

        self._qualified_names = xpath.find_qualified_names(tokens)
        self._unbound_prefixes = sorted(set(
            qname.prefix for qname in self._qualified_names
            if qname.prefix != 'xml' and qname.prefix not in self._namespaces))
        self._engine_namespaces = dict(
            (ns.prefix, ns.uri) for ns in self._namespaces.values()
            if ns.prefix and ns.prefix != 'xml')

        # insertions that make the expression start from a document node
        self._document_anchors = [(start, start, '/')
                                  for start in xpath.find_relative_paths(tokens)]
        for call in xpath.find_context_calls(tokens):
            if call.name == 'lang':
                # a document has no xml:lang
                self._document_anchors.append((call.start, call.start, '(false() and '))
                self._document_anchors.append((call.close, call.close, ')'))
            else:
                self._document_anchors.append((call.open, call.open, '/'))
        self._selects_root = xpath.selects_root(tokens)
        self._selects_self = xpath.selects_root(tokens, from_context=True)

        self._handles = {}
        self._handles_lock = threading.Lock()
        # compile right away so that a bad expression fails here
        with compile_failures(expression, etree.XPathError):
            self._handle_for(tuple((prefix, '') for prefix in self._unbound_prefixes))
        logger.debug("compiled '%s'", expression)

    def _compile_handle(self, resolved, anchored):
        namespaces = dict(self._engine_namespaces)
        replacements = list(self._variable_renames)
        if anchored:
            replacements.extend(self._document_anchors)
        no_namespace = set()
        for prefix, uri in resolved:
            if uri:
                namespaces[prefix] = uri
            else:
                no_namespace.add(prefix)
        for qname in self._qualified_names:
            if qname.prefix not in no_namespace:
                continue
            if qname.kind == 'name':
                replacements.append((qname.start, qname.end, qname.local_name))
            elif qname.kind == 'wildcard':
                replacements.append((qname.start, qname.end, NO_NAMESPACE_WILDCARD))
            # a function name keeps its prefix; the engine reports it as undefined
        text = xpath.rewrite(self._expression, replacements)
        logger.debug("compiling '%s' as '%s' with namespaces %s",
                     self._expression, text, namespaces)
        return etree.XPath(text, namespaces=namespaces)

    def _handle_for(self, resolved, anchored=False):
        # one engine handle per combination of resolved prefixes, for
        # element and for document contexts
        key = (resolved, anchored and bool(self._document_anchors))
        with self._handles_lock:
            handle = self._handles.get(key)
            if handle is None:
                handle = self._handles[key] = self._compile_handle(*key)
            return handle

    @contextmanager
    def _navigation(self, context):
        # a fresh navigator per evaluation, reset however the evaluation ends
        navigator = LxmlNavigator()
        try:
            with evaluation_failures(self._expression, TypeError, ValueError):
                navigator.bind(context)
            yield navigator
        finally:
            navigator.reset()

    def _evaluate_raw(self, context):
        with self._navigation(context) as navigator:
            is_document = isinstance(context, Document)
            if self._selects_root or (is_document and self._selects_self):
                if context.document is not None:
                    yield context.document
                return

            resolver = ContextResolver(self, navigator.scope)
            with evaluation_failures(self._expression, etree.XPathError,
                                     UnresolvableVariable, TypeError, ValueError):
                resolved = tuple(
                    (prefix, resolver.translate_namespace_prefix_to_uri(prefix))
                    for prefix in self._unbound_prefixes)
                handle = self._handle_for(resolved, is_document)
                variables = {}
                for (prefix, local_name), name in self._variable_names.items():
                    value = resolver.get_variable_value(None, prefix, local_name)
                    variables[name] = navigator.to_engine(value)
                result = handle(navigator.context, **variables)

            if not isinstance(result, list):
                # number, string or boolean
                result = [result]
            for item in result:
                yield navigator.to_tree(item)
