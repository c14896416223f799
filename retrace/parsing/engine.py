"""
Non-deterministic shift-reduce parsing, by backtracking.

There's no parse table here. The engine keeps a stack of symbols and a history of
its moves, and it makes the same two moves as any shift-reduce parser:
	* "shift" the next input terminal onto the stack;
	* "reduce" a right-hand side on top of the stack to its rule's left-hand side.

Without a table to say which move is right, it guesses. It always prefers to reduce,
and among reductions it prefers the earliest-registered rule. When the input runs
out and the stack is not just the start symbol, some guess was wrong: the engine
unwinds its history one move at a time, looking for the most recent point where it
could have done something else. At a reduction, "something else" means a later rule
that fits the same stack, or failing that, shifting instead. A shift is never the
right place to change course, since nothing else was possible there.

If the engine unwinds all the way to the beginning, every alternative has been
tried and the input is not in the language.

The whole thing is a three-state machine:

	NORMAL:   reduce greedily, then shift; at end of input, accept or go to REVERSE.
	REVERSE:  undo moves until an alternative turns up, then go back to NORMAL.
	ACCEPTED / REJECTED:  done.

Each transition is a method on ``Session``, which holds the stack, the history,
and the read cursor for one analysis. Sessions are cheap and disposable. The grammar
is never touched, so one engine (or one grammar) may serve any number of them.
"""

import enum
from typing import Optional

from .interface import SHIFT, QuietListener, AnalysisListener, InternalInvariantViolation, StepLimitExceeded
from .matcher import ReductionMatcher
from .derivation import Derivation, derivation_from_history

DEFAULT_STEP_LIMIT = 1_000_000

class State(enum.Enum):
	NORMAL = 'normal'
	REVERSE = 'reverse'
	ACCEPTED = 'accepted'
	REJECTED = 'rejected'

	def is_final(self): return self in (State.ACCEPTED, State.REJECTED)


class Session:
	"""
	The working state of one analysis.

	stack: the sentential form built so far, as a list of symbols.
	history: one entry per stack mutation; SHIFT, or the rule id of a reduction.
	cursor: how many input terminals have been shifted.
	steps: how many moves (including undo moves) have been made.

	The engine relies on cursor == history.count(SHIFT) at all times.
	"""
	def __init__(self, grammar, matcher, tokens, *, listener:AnalysisListener=QuietListener(), step_limit=DEFAULT_STEP_LIMIT):
		self.grammar = grammar
		self.matcher = matcher
		self.tokens = tuple(tokens)
		self.listener = listener
		self.step_limit = step_limit
		self.stack = []
		self.history = []
		self.cursor = 0
		self.steps = 0
		self.state = State.NORMAL

	def input_remains(self) -> bool: return self.cursor < len(self.tokens)

	def at_goal(self) -> bool: return len(self.stack) == 1 and self.stack[0] == self.grammar.start

	def _tick(self):
		self.steps += 1
		if self.step_limit is not None and self.steps > self.step_limit:
			raise StepLimitExceeded(self.step_limit)

	def shift(self):
		self._tick()
		terminal = self.tokens[self.cursor]
		self.stack.append(terminal)
		self.history.append(SHIFT)
		self.cursor += 1
		self.listener.on_shift(self, terminal)

	def reduce(self, rule_id):
		self._tick()
		rule = self.grammar.rules[rule_id]
		del self.stack[-len(rule.rhs):]
		self.stack.append(rule.lhs)
		self.history.append(rule_id)
		self.listener.on_reduce(self, rule_id)

	def normal(self):
		""" Reduce as far as possible, then shift one terminal or decide what the end of input means. """
		while True:
			rule_id = self.matcher.find_reduction(self.stack, 0)
			if rule_id is None: break
			self.reduce(rule_id)
		if self.input_remains(): self.shift()
		elif self.at_goal(): self.state = State.ACCEPTED
		else: self.state = State.REVERSE

	def reverse(self):
		""" Undo the most recent move, and take the first alternative to it if there is one. """
		if not self.history:
			self.state = State.REJECTED
			return
		if not self.stack: raise InternalInvariantViolation("Stack underflow with %d moves still in history."%len(self.history))
		self._tick()
		symbol = self.stack.pop()
		entry = self.history.pop()
		if entry is SHIFT:
			if self.cursor == 0: raise InternalInvariantViolation("Undid a shift with the cursor already at the start of input.")
			self.cursor -= 1
			if symbol != self.tokens[self.cursor]:
				raise InternalInvariantViolation("Undid a shift of %r but found %r on the stack."%(self.tokens[self.cursor], symbol))
			self.listener.on_unwind(self, entry)
			return
		rule = self.grammar.rules[entry]
		if symbol != rule.lhs:
			raise InternalInvariantViolation("Undid reduction %d to %r but found %r on the stack."%(entry, rule.lhs, symbol))
		self.listener.on_unwind(self, entry)
		self.stack.extend(rule.rhs)
		self.listener.on_restore(self, entry)
		alternative = self.matcher.find_reduction(self.stack, entry+1)
		if alternative is not None:
			self.reduce(alternative)
			self.state = State.NORMAL
		elif self.input_remains():
			self.shift()
			self.state = State.NORMAL

	def run(self):
		""" Drive the machine to a final state. """
		if not all(map(self.grammar.is_terminal, self.tokens)):
			# A foreign symbol can never be part of a sentence.
			self.state = State.REJECTED
		while not self.state.is_final():
			if self.state is State.NORMAL: self.normal()
			else: self.reverse()
		if self.state is State.ACCEPTED: self.listener.on_accept(self)
		else: self.listener.on_reject(self)
		return self.state

	def derivation(self) -> Derivation:
		assert self.state is State.ACCEPTED, self.state
		return Derivation(derivation_from_history(self.history), self.steps)


class ParserEngine:
	"""
	Binds a grammar to the backtracking algorithm.

	Options:
		step_limit: the most moves (shifts, reductions, and undos) one analysis may take
			before raising StepLimitExceeded. ``None`` means no limit.
		listener: receives a call for every move. See ``interface.AnalysisListener``.

	Constructing an engine freezes the grammar.
	"""
	def __init__(self, grammar, *, step_limit=DEFAULT_STEP_LIMIT, listener:AnalysisListener=None):
		self.grammar = grammar.freeze()
		self.matcher = ReductionMatcher(grammar.rules)
		self.step_limit = step_limit
		self.listener = listener or QuietListener()

	def start(self, tokens) -> Session:
		return Session(self.grammar, self.matcher, tokens, listener=self.listener, step_limit=self.step_limit)

	def analyze(self, tokens) -> Optional[Derivation]:
		"""
		:param tokens: any iterable of terminal symbols. (A string will do, for single-character terminals.)
		:return: a Derivation if the input is a sentence of the grammar; otherwise None.
		"""
		session = self.start(tokens)
		if session.run() is State.ACCEPTED: return session.derivation()

	def recognize(self, tokens) -> bool:
		return self.analyze(tokens) is not None
