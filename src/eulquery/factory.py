# file eulquery\factory.py
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

"""Choosing the engine that compiles queries.

:meth:`XPathFactory.instance` returns the process-wide factory. Which
factory class that is can be set with the ``EULQUERY_XPATH_FACTORY``
environment variable, as a dotted path such as
``eulquery.lxmlxpath.LxmlXPathFactory`` (the default).
"""

from importlib import import_module
import logging
import os
import threading

from eulquery.exceptions import QueryException

__all__ = ['XPathFactory', 'FACTORY_ENVIRONMENT_VARIABLE', 'DEFAULT_FACTORY']

logger = logging.getLogger(__name__)

FACTORY_ENVIRONMENT_VARIABLE = 'EULQUERY_XPATH_FACTORY'
DEFAULT_FACTORY = 'eulquery.lxmlxpath.LxmlXPathFactory'


class XPathFactory(object):
    "Base class for factories of :class:`~eulquery.compiled.XPathCompiled` queries."

    _instance = None
    _instance_lock = threading.Lock()

    def compile(self, expression, filter=None, variables=None, namespaces=None):
        "Compile an expression; see :class:`~eulquery.compiled.XPathCompiled`."
        raise NotImplementedError

    @classmethod
    def instance(cls):
        """The default factory, created on first use from the class named by
        ``EULQUERY_XPATH_FACTORY``."""
        with XPathFactory._instance_lock:
            if XPathFactory._instance is None:
                path = os.environ.get(FACTORY_ENVIRONMENT_VARIABLE) or DEFAULT_FACTORY
                XPathFactory._instance = XPathFactory.new_instance(path)
            return XPathFactory._instance

    @classmethod
    def reset_instance(cls):
        "Forget the default factory, so the next :meth:`instance` reads the environment again."
        with XPathFactory._instance_lock:
            XPathFactory._instance = None

    @staticmethod
    def new_instance(path):
        "Create a factory from a dotted ``module.ClassName`` path."
        module_name, _, class_name = path.rpartition('.')
        try:
            if not module_name:
                raise ImportError("'%s' is not a dotted class path" % path)
            factory_class = getattr(import_module(module_name), class_name)
        except (ImportError, AttributeError) as e:
            raise QueryException('Unable to load XPath factory %s' % path, e)
        if not (isinstance(factory_class, type) and issubclass(factory_class, XPathFactory)):
            raise QueryException('%s is not an XPathFactory' % path)
        logger.debug('using XPath factory %s', path)
        return factory_class()
