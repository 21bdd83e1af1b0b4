"""Query evaluation by libxml2's XPath 1.0 engine, through `lxml
<http://lxml.de/>`_.

.. autoclass:: LxmlXPathFactory
.. autoclass:: LxmlCompiled
.. autoclass:: LxmlNavigator
"""

from eulquery.lxmlxpath.navigator import LxmlNavigator
from eulquery.lxmlxpath.compiled import LxmlCompiled
from eulquery.lxmlxpath.factory import LxmlXPathFactory
