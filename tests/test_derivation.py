import unittest
import io

from retrace.parsing import derivation
from retrace.parsing.derivation import Derivation, derivation_from_history, replay, top_down, bottom_up
from retrace.parsing.interface import SHIFT, DerivationMismatch
from retrace.parsing.grammar import Grammar
from retrace.support import pretty

from example.arithmetic import build_grammar as arithmetic

SUM_BOTTOM_UP = (5, 3, 6, 3, 1, 2, 0)  # 6 4 7 4 2 3 1, counting from one

class TestHistory(unittest.TestCase):
	def test_shifts_are_dropped_and_order_kept(self):
		history = [SHIFT, SHIFT, 5, 3, SHIFT, SHIFT, 6, 3, 1, 2, SHIFT, 0]
		self.assertEqual((5, 3, 6, 3, 1, 2, 0), derivation_from_history(history))
	
	def test_empty_history(self):
		self.assertEqual((), derivation_from_history([]))
	
	def test_only_shifts(self):
		self.assertEqual((), derivation_from_history([SHIFT, SHIFT]))
	
	def test_numbering(self):
		d = Derivation(SUM_BOTTOM_UP, 40)
		self.assertEqual((6, 4, 7, 4, 2, 3, 1), d.numbered())
		self.assertEqual(SUM_BOTTOM_UP, d.numbered(0))
		self.assertEqual('6 4 7 4 2 3 1', str(d))


class TestReplay(unittest.TestCase):
	def setUp(self):
		self.grammar = arithmetic()
	
	def test_tree_shape(self):
		tree = replay(self.grammar, '!a+b!', SUM_BOTTOM_UP)
		self.assertEqual('A', tree.symbol)
		self.assertEqual(0, tree.rule_id)
		self.assertEqual(['!', 'B', '!'], [child.symbol for child in tree.children])
		self.assertEqual(list('!a+b!'), tree.leaves())
	
	def test_top_down_derivation(self):
		tree = replay(self.grammar, '!a+b!', SUM_BOTTOM_UP)
		self.assertEqual((1, 3, 4, 6, 2, 4, 7), tuple(r+1 for r in top_down(tree)))
	
	def test_bottom_up_round_trip(self):
		for sentence in ['!a+b!', '!a*b!', '!(a+b)*(b+a)!', '!((a))!']:
			with self.subTest(sentence=sentence):
				result = self.grammar.analyze(sentence)
				self.assertEqual(result.rule_ids, bottom_up(replay(self.grammar, sentence, result.rule_ids)))
	
	def test_wrong_rule(self):
		with self.assertRaises(DerivationMismatch):
			replay(self.grammar, '!a+b!', (5, 3, 6, 3, 1, 1, 0))
	
	def test_no_such_rule(self):
		with self.assertRaises(DerivationMismatch):
			replay(self.grammar, '!a!', (99, 0))
	
	def test_wrong_sentence(self):
		with self.assertRaises(DerivationMismatch):
			replay(self.grammar, '!a*b!', SUM_BOTTOM_UP)
	
	def test_unfinished_derivation(self):
		with self.assertRaises(DerivationMismatch):
			replay(self.grammar, '!a!', (0,))
	
	def test_too_many_rules(self):
		with self.assertRaises(DerivationMismatch):
			replay(self.grammar, '!a!', (5, 5, 3, 1, 0))
	
	def test_nonterminal_in_input(self):
		with self.assertRaises(DerivationMismatch):
			replay(self.grammar, '!B!', (0,))
	
	def test_single_rule_grammar(self):
		grammar = Grammar.shorthand('S', {'S': 'ab'})
		tree = replay(grammar, 'ab', (0,))
		self.assertEqual((0,), top_down(tree))
		self.assertEqual((0,), bottom_up(tree))


class TestTreeDisplay(unittest.TestCase):
	def test_outline(self):
		grammar = Grammar.shorthand('S', {'S': 'aX', 'X': 'b'})
		out = io.StringIO()
		pretty.print_tree(derivation.replay(grammar, 'ab', (1, 0)), out)
		self.assertEqual("S  (1)\n  a\n  X  (2)\n    b\n", out.getvalue())


if __name__ == '__main__':
	unittest.main()
