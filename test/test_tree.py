#!/usr/bin/env python

import unittest

from eulquery.tree import Namespace, Document, Element, Attribute, Text, \
    Comment, ProcessingInstruction

from testcore import main, library_fixture, LIB, DC

class NamespaceTest(unittest.TestCase):
    def test_equality(self):
        self.assertEqual(Namespace('a', 'urn:a'), Namespace('a', 'urn:a'))
        self.assertNotEqual(Namespace('a', 'urn:a'), Namespace('b', 'urn:a'))
        self.assertNotEqual(Namespace('a', 'urn:a'), Namespace('a', 'urn:b'))
        self.assertEqual(1, len(set([Namespace('a', 'urn:a'), Namespace('a', 'urn:a')])))

    def test_constants(self):
        self.assertEqual('', Namespace.NO_NAMESPACE.prefix)
        self.assertEqual('', Namespace.NO_NAMESPACE.uri)
        self.assertEqual('xml', Namespace.XML_NAMESPACE.prefix)
        self.assertEqual('http://www.w3.org/XML/1998/namespace', Namespace.XML_NAMESPACE.uri)

    def test_invalid(self):
        self.assertRaises(ValueError, Namespace, 'a', '')
        self.assertRaises(ValueError, Namespace, 'a:b', 'urn:a')
        self.assertRaises(ValueError, Namespace, 'xml', 'urn:a')
        self.assertRaises(ValueError, Namespace, 'x', Namespace.XML_NAMESPACE.uri)
        self.assertRaises(TypeError, Namespace, 1, 'urn:a')

    def test_immutable(self):
        ns = Namespace('a', 'urn:a')
        self.assertRaises(AttributeError, setattr, ns, 'prefix', 'b')


class ElementTest(unittest.TestCase):
    def setUp(self):
        self.doc = library_fixture()
        self.library = self.doc.root_element
        self.book = self.library.children[0]

    def test_names(self):
        self.assertEqual('lib:library', self.library.qualified_name)
        self.assertEqual('{urn:example:library}library', self.library.clark_name)
        note = self.library.children[-1]
        self.assertEqual('note', note.qualified_name)
        self.assertEqual('note', note.clark_name)

    def test_structure(self):
        self.assertTrue(self.doc is self.library.parent)
        self.assertTrue(self.doc is self.book.document)
        self.assertTrue(self.doc is self.book.root)
        self.assertEqual(5, len(self.library.children))
        self.assertEqual('b1', self.book.get_attribute('id'))
        self.assertEqual('en', self.book.get_attribute('lang', DC.uri))
        self.assertEqual(None, self.book.get_attribute('lang'))

    def test_string_value(self):
        self.assertEqual('Dunetext', self.book.string_value)
        self.assertEqual('DunetextEmmaUlyssesthree books', self.doc.string_value)

    def test_append_rules(self):
        self.assertRaises(ValueError, self.library.append, self.book)
        self.assertRaises(ValueError, self.doc.append, Element('second'))
        self.assertRaises(TypeError, self.doc.append, Text('loose'))
        parent = Element('parent')
        child = parent.append(Element('child'))
        # no cycles
        self.assertRaises(ValueError, child.append, parent)

    def test_set_attribute_replaces(self):
        old = self.book.get_attribute_node('id')
        new = self.book.set_attribute('id', 'changed')
        self.assertEqual('changed', self.book.get_attribute('id'))
        self.assertEqual(None, old.parent)
        self.assertTrue(self.book is new.parent)
        self.assertEqual(2, len(self.book.attributes))

    def test_prefix_conflicts(self):
        self.assertRaises(ValueError, self.book.add_namespace_declaration,
                          Namespace('lib', 'urn:other'))
        self.assertRaises(ValueError, self.book.set_attribute, 'x', '1',
                          Namespace('lib', 'urn:other'))
        self.assertRaises(ValueError, self.book.set_attribute, 'x', '1',
                          Namespace('', 'urn:default'))

    def test_namespaces_in_scope(self):
        scope = self.book.namespaces_in_scope()
        self.assertEqual(LIB, scope[0])
        self.assertTrue(DC in scope)
        self.assertTrue(Namespace.XML_NAMESPACE in scope)
        self.assertTrue(Namespace.NO_NAMESPACE in scope)
        self.assertEqual(len(scope), len(set(ns.prefix for ns in scope)))

    def test_shadowing(self):
        inner = Namespace('lib', 'urn:example:other')
        child = self.book.append(Element('shelf', inner))
        self.assertEqual(inner, child.get_namespace('lib'))
        self.assertEqual(LIB, self.book.get_namespace('lib'))
        self.assertEqual([inner], child.namespaces_introduced())

    def test_default_namespace_undeclared(self):
        outer = Element('outer', Namespace('', 'urn:default'))
        inner = outer.append(Element('inner'))
        self.assertEqual(Namespace.NO_NAMESPACE, inner.get_namespace(''))
        self.assertEqual([Namespace.NO_NAMESPACE], inner.namespaces_introduced())
        self.assertEqual([Namespace('', 'urn:default')], outer.namespaces_introduced())

    def test_introduced_at_root(self):
        self.assertEqual([LIB, DC], self.library.namespaces_introduced())
        # everything the book uses is already declared on the library
        self.assertEqual([], self.book.namespaces_introduced())


class LeafTest(unittest.TestCase):
    def test_leaf_values(self):
        self.assertEqual('x', Text('x').string_value)
        self.assertEqual(' c ', Comment(' c ').string_value)
        pi = ProcessingInstruction('target', 'data')
        self.assertEqual('data', pi.string_value)
        self.assertEqual('', ProcessingInstruction('target').string_value)
        self.assertRaises(ValueError, ProcessingInstruction, 'xml')
        attr = Attribute('lang', 'en', DC)
        self.assertEqual('dc:lang', attr.qualified_name)
        self.assertEqual('{%s}lang' % DC.uri, attr.clark_name)

    def test_empty_document(self):
        doc = Document()
        self.assertEqual(None, doc.root_element)
        self.assertEqual('', doc.string_value)


if __name__ == '__main__':
    main()
