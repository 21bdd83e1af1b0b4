#!/usr/bin/env python

import unittest

from eulquery import xpath

from testcore import main

def types(expr):
    return [tok.type for tok in xpath.tokenize(expr)]

class LexTest(unittest.TestCase):
    def test_path(self):
        self.assertEqual(['ABBREV_PATH_SEP', 'NCNAME', 'PATH_SEP', 'ABBREV_AXIS_AT', 'NCNAME'],
                         types('//book/@id'))

    def test_axis_and_qname(self):
        self.assertEqual(['NCNAME', 'AXIS_SEP', 'NCNAME', 'COLON', 'NCNAME'],
                         types('ancestor::lib:book'))

    def test_star(self):
        self.assertEqual(['STAR_OP'], types('*'))
        self.assertEqual(['NCNAME', 'COLON', 'STAR_OP'], types('lib:*'))
        self.assertEqual(['INTEGER', 'MULT_OP', 'INTEGER'], types('2 * 3'))
        self.assertEqual(['NCNAME', 'MULT_OP', 'ABBREV_AXIS_AT', 'STAR_OP'],
                         types('price * @*'))
        self.assertEqual(['LITERAL', 'MULT_OP', 'INTEGER'], types('"and" * 2'))

    def test_reserved_and_nodetypes(self):
        self.assertEqual(['NCNAME', 'AND_OP', 'NCNAME', 'OR_OP', 'NODETYPE', 'OPEN_PAREN', 'CLOSE_PAREN'],
                         types('a and b or text()'))

    def test_literals_and_numbers(self):
        tokens = xpath.tokenize('''"it's" = 'say "hi"' + 1.5 + 2''')
        self.assertEqual("it's", tokens[0].value)
        self.assertEqual('say "hi"', tokens[2].value)
        self.assertEqual(1.5, tokens[4].value)
        self.assertEqual(2, tokens[6].value)

    def test_non_ascii_names(self):
        tokens = xpath.tokenize('caf\xe9/na\xefve-name.x')
        self.assertEqual(['NCNAME', 'PATH_SEP', 'NCNAME'], [tok.type for tok in tokens])
        self.assertEqual('na\xefve-name.x', tokens[2].value)

    def test_positions(self):
        tokens = xpath.tokenize('a / bc')
        self.assertEqual((0, 1), (tokens[0].lexpos, tokens[0].endlexpos))
        self.assertEqual((4, 6), (tokens[2].lexpos, tokens[2].endlexpos))

    def test_unknown_text(self):
        self.assertRaises(xpath.LexError, xpath.tokenize, 'a # b')
        self.assertRaises(ValueError, xpath.tokenize, '"unterminated')


class VariableReferenceTest(unittest.TestCase):
    def test_references(self):
        expr = 'title[substring-after(text(), $pre:separator) = $x] | $div'
        refs = xpath.find_variable_references(xpath.tokenize(expr))
        self.assertEqual([('pre', 'separator'), (None, 'x'), (None, 'div')],
                         [(ref.prefix, ref.local_name) for ref in refs])
        self.assertEqual('$pre:separator', expr[refs[0].start:refs[0].end])
        self.assertEqual('$x', expr[refs[1].start:refs[1].end])

    def test_spaced_colon_is_not_a_prefix(self):
        refs = xpath.find_variable_references(xpath.tokenize('$a and b'))
        self.assertEqual([(None, 'a')], [(ref.prefix, ref.local_name) for ref in refs])


class QualifiedNameTest(unittest.TestCase):
    def test_kinds(self):
        expr = '/lib:library/dc:*[ex:upper(@dc:lang) = $v:lang][lib:node()]'
        names = xpath.find_qualified_names(xpath.tokenize(expr))
        self.assertEqual([('lib', 'library', 'name'), ('dc', '*', 'wildcard'),
                          ('ex', 'upper', 'function'), ('dc', 'lang', 'name'),
                          ('lib', 'node', 'function')],
                         [(n.prefix, n.local_name, n.kind) for n in names])
        self.assertEqual('lib:library', expr[names[0].start:names[0].end])

    def test_axis_is_not_a_prefix(self):
        names = xpath.find_qualified_names(xpath.tokenize('child::book | namespace::*'))
        self.assertEqual([], names)


class ContextDependenceTest(unittest.TestCase):
    def starts(self, expr):
        return xpath.find_relative_paths(xpath.tokenize(expr))

    def test_relative_paths(self):
        self.assertEqual([0], self.starts('lib:book | //note'))
        self.assertEqual([6, 14], self.starts('count(x[y]) + .'))
        self.assertEqual([7], self.starts('$v/a | @id'))
        self.assertEqual([0], self.starts('child::a/b'))
        self.assertEqual([4], self.starts('f:x(a)'))
        self.assertEqual([4], self.starts('2 * b'))
        self.assertEqual([], self.starts('/a | //b[c]'))

    def test_context_calls(self):
        calls = xpath.find_context_calls(xpath.tokenize('name() = local-name(a) and lang("en")'))
        self.assertEqual([('name', 0, 5, 6), ('lang', 27, 32, 37)], calls)
        self.assertEqual([], xpath.find_context_calls(xpath.tokenize("//a[name() = 'x']")))

    def test_selects_root(self):
        def root(expr, from_context=False):
            return xpath.selects_root(xpath.tokenize(expr), from_context)
        self.assertTrue(root('/'))
        self.assertTrue(root('/./.'))
        self.assertFalse(root('.'))
        self.assertTrue(root('.', True))
        self.assertTrue(root('./.', True))
        self.assertFalse(root('/a'))
        self.assertFalse(root('//.'))


class RewriteTest(unittest.TestCase):
    def test_rewrite(self):
        self.assertEqual('//b[$v]', xpath.rewrite('//a:b[$p:v]', [(2, 4, ''), (6, 10, '$v')]))
        self.assertEqual('abc', xpath.rewrite('abc', []))
        # insertions at one position keep their order
        self.assertEqual('(a)', xpath.rewrite('a', [(0, 0, '('), (1, 1, ')')]))
        self.assertEqual('bax', xpath.rewrite('x', [(0, 0, 'b'), (0, 0, 'a')]))


if __name__ == '__main__':
    main()
