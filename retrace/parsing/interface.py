"""
Backtracking Parser Interface Definitions

Two kinds of trouble come out of this package, and they must never be confused:

* The input is not a sentence of the language. That is an ordinary answer,
  reported by returning ``None`` (or the ``REJECTED`` state), never by raising.
* Something is wrong with the grammar or the engine. That is a fault, and
  it raises one of the exceptions below immediately.

A malformed grammar must not masquerade as an unrecognized input.
"""

import sys
from typing import Protocol

from ..support import pretty

SHIFT = 'shift' # History entry for a shift. Reductions are recorded as bare rule ids.

class ConfigurationError(ValueError):
	""" The grammar is ill-formed: bad alphabet, bad rule, late registration, or a reduction cycle. """

class GrammarSyntaxError(ConfigurationError):
	""" The textual grammar format could not be understood. """
	def __init__(self, line_number, message):
		super().__init__("Line %d: %s"%(line_number, message))
		self.line_number = line_number

class DerivationMismatch(ValueError):
	""" A sequence of rule ids does not derive the given input from the start symbol. """

class EngineFault(RuntimeError):
	""" Base class for conditions that mean the engine itself (or its grammar) went wrong mid-analysis. """

class InternalInvariantViolation(EngineFault):
	""" The stack, the history, and the cursor have fallen out of step with each other. """

class StepLimitExceeded(EngineFault):
	""" The search took more steps than the configured limit allows. """
	def __init__(self, limit):
		super().__init__("Analysis exceeded the limit of %d steps."%limit)
		self.limit = limit


class AnalysisListener(Protocol):
	"""
	Implement (some of) this interface to watch the engine work.
	Every hook defaults to doing nothing. The ``session`` argument is the
	live state of the analysis; treat it as read-only.
	"""
	def on_shift(self, session, terminal): pass
	def on_reduce(self, session, rule_id): pass
	def on_unwind(self, session, entry):
		""" The most recent move was just undone. ``entry`` is SHIFT or a rule id. """
	def on_restore(self, session, rule_id):
		""" An earlier reduction was undone and its right-hand side put back on the stack. """
	def on_accept(self, session): pass
	def on_reject(self, session): pass

class QuietListener(AnalysisListener):
	""" Protocols cannot be instantiated, so here's a simple way to get "do nothing" behavior. """
	pass

class TraceListener(AnalysisListener):
	"""
	Prints one line per move: the state, what happened, the stack, and
	the input with the read cursor marked.
	"""
	def __init__(self, grammar, file=None, *, base=1):
		self.grammar = grammar
		self.file = file or sys.stdout
		self.base = base
	
	def _emit(self, session, state, action):
		stack = ' '.join(map(str, session.stack))
		tape = pretty.dotted(session.tokens, session.cursor)
		print("%-8s %-24s %-30s %s"%(state, action, stack, tape), file=self.file)
	
	def on_shift(self, session, terminal):
		self._emit(session, session.state.name, 'shift %s'%terminal)
	
	def on_reduce(self, session, rule_id):
		self._emit(session, session.state.name, 'reduce (%d) %s'%(rule_id+self.base, self.grammar.rules[rule_id]))
	
	def on_unwind(self, session, entry):
		what = 'shift' if entry is SHIFT else 'reduce (%d)'%(entry+self.base)
		self._emit(session, session.state.name, 'undo '+what)
	
	def on_restore(self, session, rule_id):
		self._emit(session, session.state.name, 'restore (%d)'%(rule_id+self.base))
	
	def on_accept(self, session):
		print("Accepted after %d steps."%session.steps, file=self.file)
	
	def on_reject(self, session):
		print("Rejected after %d steps."%session.steps, file=self.file)
