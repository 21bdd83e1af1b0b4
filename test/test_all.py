#!/usr/bin/env python

import os
import unittest
import logging.config

from testcore import tests_from_modules, get_test_runner

test_modules = (
    'test_tree',
    'test_exceptions',
    'test_filters',
    'test_xpath',
    'test_navigator',
    'test_resolvers',
    'test_compiled',
    'test_factory',
    'test_helper',
    )

if __name__ == '__main__':
    # load logging config, if any
    test_dir = os.path.dirname(os.path.abspath(__file__))
    LOGGING_CONF = os.path.join(test_dir, 'logging.conf')
    if os.path.exists(LOGGING_CONF):
        logging.config.fileConfig(LOGGING_CONF)

    # generate test suite from test modules
    alltests = unittest.TestSuite(tests_from_modules(test_modules))

    get_test_runner().run(alltests)
