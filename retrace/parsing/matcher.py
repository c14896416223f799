"""
Finding a reduction: which rule's right-hand side is a suffix of the stack?

The answer is always the lowest-numbered matching rule at or after some starting
rule id. That starting point is how backtracking resumes: having undone a reduction
by rule ``r``, the engine asks again starting from ``r+1``, so every alternative gets
its turn exactly once and in registration order.
"""

import collections
import bisect

def find_reduction(rules, stack, from_index=0):
	"""
	The plain scan: try each rule in turn.
	:return: a rule id, or None if no rule at or after ``from_index`` matches.
	"""
	for rule_id in range(from_index, len(rules)):
		if is_suffix(rules[rule_id].rhs, stack): return rule_id

def is_suffix(rhs, stack) -> bool:
	size = len(rhs)
	return 0 < size <= len(stack) and tuple(stack[-size:]) == tuple(rhs)


class ReductionMatcher:
	"""
	Same answers as ``find_reduction``, but it only looks at rules whose right-hand
	side ends in the symbol on top of the stack. Candidate lists are kept in ascending
	rule-id order, so the earliest-rule tie-break is untouched.
	"""
	def __init__(self, rules):
		self.rules = rules
		self.by_last_symbol = collections.defaultdict(list)
		for rule_id, rule in enumerate(rules):
			self.by_last_symbol[rule.rhs[-1]].append(rule_id)
	
	def find_reduction(self, stack, from_index=0):
		if not stack: return None
		candidates = self.by_last_symbol.get(stack[-1], ())
		for i in range(bisect.bisect_left(candidates, from_index), len(candidates)):
			rule_id = candidates[i]
			if is_suffix(self.rules[rule_id].rhs, stack): return rule_id
