import unittest

from eulquery.tree import Namespace, Document, Element, Text, Comment, \
    ProcessingInstruction

def tests_from_modules(modnames):
    return [ unittest.findTestCases(__import__(modname, fromlist=['*']))
             for modname in modnames ]
# helper, not a test: keep pytest from collecting it
tests_from_modules.__test__ = False

def get_test_runner(runner=None):
    if runner is None:
        runner = unittest.TextTestRunner()
    return runner

def main(testRunner=None, *args, **kwargs):
    if testRunner is None:
        testRunner = get_test_runner()

    unittest.main(testRunner=testRunner, *args, **kwargs)


LIB = Namespace('lib', 'urn:example:library')
DC = Namespace('dc', 'http://purl.org/dc/elements/1.1/')

def library_fixture():
    """A small library catalog, equivalent to:

    <?catalog version="2"?>
    <lib:library xmlns:lib="urn:example:library"
                 xmlns:dc="http://purl.org/dc/elements/1.1/">
        <lib:book id="b1" dc:lang="en"><dc:title>Dune</dc:title>text</lib:book>
        <lib:book id="b2"><dc:title>Emma</dc:title></lib:book>
        <!-- shelved -->
        <lib:book id="b3"><dc:title>Ulysses</dc:title></lib:book>
        <note>three books</note>
    </lib:library>
    """
    doc = Document()
    doc.append(ProcessingInstruction('catalog', 'version="2"'))
    library = doc.append(Element('library', LIB))
    library.add_namespace_declaration(DC)
    for ident, title in (('b1', 'Dune'), ('b2', 'Emma'), ('b3', 'Ulysses')):
        if ident == 'b3':
            library.append(Comment(' shelved '))
        book = library.append(Element('book', LIB))
        book.set_attribute('id', ident)
        book.append(Element('title', DC)).append(Text(title))
    library.children[0].set_attribute('lang', 'en', DC)
    library.children[0].append(Text('text'))
    library.append(Element('note')).append('three books')
    return doc
