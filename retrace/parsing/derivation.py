"""
What to make of a successful analysis.

The engine's history interleaves shifts and reductions. The reductions alone, in the
order they happened, are a bottom-up derivation: reading them left to right repeats
exactly the reductions that turned the input into the start symbol.

Read backwards, the same sequence is a rightmost derivation: begin with the start
symbol and expand the rightmost non-terminal by each rule in turn. That observation
lets ``replay`` rebuild the parse tree without searching, and the tree in turn yields
the top-down (leftmost) derivation by a pre-order walk.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional

from .interface import SHIFT, DerivationMismatch

def derivation_from_history(history) -> tuple:
	""" Keep the reductions, drop the shifts, preserve the order. """
	return tuple(entry for entry in history if entry is not SHIFT)


class Derivation(NamedTuple):
	"""
	rule_ids: the reductions, in the order applied; 0-based rule ids.
	steps: how many moves the search made to find them.
	"""
	rule_ids: tuple
	steps: int = 0

	def numbered(self, base=1) -> tuple:
		""" The same rule ids counted from ``base``, which is how people tend to number rules. """
		return tuple(r + base for r in self.rule_ids)

	def __str__(self):
		return ' '.join(map(str, self.numbered()))


@dataclass(eq=False)
class ParseNode:
	"""
	symbol: the grammar symbol at this node.
	rule_id: which rule expanded it, or None for a terminal leaf.
	children: one node per right-hand-side symbol of that rule.
	"""
	__slots__ = ('symbol', 'rule_id', 'children')
	symbol: object
	rule_id: Optional[int]
	children: list

	def is_leaf(self): return self.rule_id is None

	def leaves(self) -> list:
		""" The frontier of the tree, left to right. """
		return [node.symbol for node in _pre_order(self) if node.is_leaf()]


def replay(grammar, tokens, rule_ids) -> ParseNode:
	"""
	Rebuild the parse tree for ``tokens`` from a bottom-up derivation.
	Raises DerivationMismatch if the rules do not fit together or do not yield the input.
	"""
	tokens = tuple(tokens)
	root = ParseNode(grammar.start, None, [])
	form = [root]  # Sentential form; nodes with rule_id None are terminals or not-yet-expanded non-terminals.
	for step, rule_id in enumerate(reversed(tuple(rule_ids))):
		if not 0 <= rule_id < len(grammar.rules): raise DerivationMismatch("Step %d: there is no rule %r."%(step, rule_id))
		rule = grammar.rules[rule_id]
		position = _rightmost_nonterminal(grammar, form)
		if position is None: raise DerivationMismatch("Step %d: rule %r has no non-terminal left to expand."%(step, rule_id))
		node = form[position]
		if node.symbol != rule.lhs:
			raise DerivationMismatch("Step %d: rule %r expands %r, but the rightmost non-terminal is %r."%(step, rule_id, rule.lhs, node.symbol))
		node.rule_id = rule_id
		node.children = [ParseNode(symbol, None, []) for symbol in rule.rhs]
		form[position:position+1] = node.children
	frontier = tuple(node.symbol for node in form)
	if _rightmost_nonterminal(grammar, form) is not None or frontier != tokens:
		raise DerivationMismatch("The derivation yields %r, not %r."%(frontier, tokens))
	return root

def _rightmost_nonterminal(grammar, form):
	for position in range(len(form) - 1, -1, -1):
		if form[position].is_leaf() and grammar.is_nonterminal(form[position].symbol): return position

def _pre_order(tree):
	stack = [tree]
	while stack:
		node = stack.pop()
		yield node
		stack.extend(reversed(node.children))

def top_down(tree) -> tuple:
	""" The leftmost derivation: rules in the order a top-down parser would predict them. """
	return tuple(node.rule_id for node in _pre_order(tree) if not node.is_leaf())

def bottom_up(tree) -> tuple:
	""" The rules in the order a shift-reduce parser would reduce them: a post-order walk. """
	result = []
	stack = [(tree, False)]
	while stack:
		node, done = stack.pop()
		if node.is_leaf(): continue
		if done: result.append(node.rule_id)
		else:
			stack.append((node, True))
			stack.extend((child, False) for child in reversed(node.children))
	return tuple(result)
