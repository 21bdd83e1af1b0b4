# file eulquery\resolvers.py
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

"Namespace prefix and variable lookups made on behalf of an engine."

from eulquery.exceptions import UnresolvableVariable

__all__ = ['NamespaceContext', 'VariableContext', 'ContextResolver']


class NamespaceContext(object):
    def translate_namespace_prefix_to_uri(self, prefix):
        raise NotImplementedError


class VariableContext(object):
    def get_variable_value(self, namespace_uri, prefix, local_name):
        raise NotImplementedError


class ContextResolver(NamespaceContext, VariableContext):
    """Resolve prefixes and variables for one compiled query.

    :param compiled: the :class:`~eulquery.compiled.XPathCompiled` whose
                     namespace and variable bindings are used
    :param scope: optional dict of prefix to URI in scope at the context
                  node of the current evaluation; consulted only for
                  prefixes the compiled query does not bind
    """

    def __init__(self, compiled, scope=None):
        self.compiled = compiled
        self.scope = scope or {}

    def translate_namespace_prefix_to_uri(self, prefix):
        """URI for a prefix. An unknown prefix means "no namespace" and
        gives the empty string rather than an error."""
        if prefix is None:
            prefix = ''
        try:
            return self.compiled.get_namespace(prefix).uri
        except KeyError:
            return self.scope.get(prefix, '')

    def get_variable_value(self, namespace_uri, prefix, local_name):
        """Value bound to a variable. An empty ``namespace_uri`` is taken
        from ``prefix``. Raises
        :class:`~eulquery.exceptions.UnresolvableVariable` if nothing is
        bound."""
        if namespace_uri is None:
            namespace_uri = ''
        if prefix is None:
            prefix = ''
        if not namespace_uri:
            namespace_uri = self.translate_namespace_prefix_to_uri(prefix)
        try:
            return self.compiled.get_variable(local_name, namespace_uri)
        except KeyError:
            raise UnresolvableVariable(namespace_uri, local_name) from None
