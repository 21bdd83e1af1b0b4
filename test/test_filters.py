#!/usr/bin/env python

import unittest

from eulquery import filters
from eulquery.tree import Namespace, Document, Element, Text, Comment, \
    ProcessingInstruction

from testcore import main, library_fixture, LIB, DC

class FilterTest(unittest.TestCase):
    def setUp(self):
        self.doc = library_fixture()
        self.library = self.doc.root_element
        self.book = self.library.children[0]
        self.title = self.book.children[0]
        self.comment = self.library.children[2]
        self.pi = self.doc.children[0]

    def test_passthrough(self):
        f = filters.passthrough()
        for obj in (self.doc, self.book, 'x', 1.0, False, LIB):
            self.assertTrue(f.filter(obj) is obj)

    def test_element(self):
        self.assertTrue(filters.element().matches(self.book))
        self.assertFalse(filters.element().matches(self.comment))
        self.assertTrue(filters.element('book', LIB).matches(self.book))
        self.assertTrue(filters.element('book', LIB.uri).matches(self.book))
        self.assertFalse(filters.element('book').matches(self.title))
        self.assertFalse(filters.element(namespace=DC).matches(self.book))

    def test_attribute(self):
        lang = self.book.get_attribute_node('lang', DC.uri)
        ident = self.book.get_attribute_node('id')
        self.assertEqual([ident, lang], filters.attribute().filter_all(self.book.attributes))
        self.assertEqual([lang], filters.attribute(namespace=DC).filter_all(self.book.attributes))
        self.assertEqual([ident], filters.attribute('id', '').filter_all(self.book.attributes))

    def test_node_kinds(self):
        text = self.book.children[1]
        self.assertTrue(filters.text().matches(text))
        self.assertFalse(filters.text().matches('text'))
        self.assertTrue(filters.comment().matches(self.comment))
        self.assertTrue(filters.document().matches(self.doc))
        self.assertTrue(filters.processing_instruction().matches(self.pi))
        self.assertTrue(filters.processing_instruction('catalog').matches(self.pi))
        self.assertFalse(filters.processing_instruction('other').matches(self.pi))
        self.assertTrue(filters.namespace().matches(LIB))
        content = filters.content()
        self.assertEqual([self.book, text, self.comment, self.pi],
                         content.filter_all([self.book, text, self.comment, self.pi, self.doc, LIB]))

    def test_values(self):
        self.assertEqual([True, False], filters.boolean().filter_all([True, 1, False, 'x']))
        self.assertEqual([1, 2.5], filters.number().filter_all([True, 1, 2.5, '3']))
        self.assertEqual(['3'], filters.string().filter_all([3, '3', None]))

    def test_as_filter(self):
        self.assertTrue(filters.as_filter(None) is filters.passthrough())
        f = filters.element()
        self.assertTrue(filters.as_filter(f) is f)
        upper = filters.as_filter(lambda obj: obj.upper() if isinstance(obj, str) else None)
        self.assertEqual(['A'], upper.filter_all(['a', 1]))
        self.assertEqual('B', upper('b'))
        self.assertRaises(TypeError, filters.as_filter, 'not callable')


if __name__ == '__main__':
    main()
