"""
# Grammars for the backtracking parser

A context free grammar here consists of:
	* A set of terminal symbols,
	* A set of non-terminal symbols, disjoint from the terminals,
	* A start symbol, which must be one of the non-terminals,
	* An ordered list of production rules, each consisting of:
		* left-hand side (exactly one non-terminal symbol)
		* right-hand side (ordered sequence of ONE or more symbols)

Unlike the textbook definition, the rules form a list, not a set. A rule's position
in that list is its *rule id*, and rule ids do real work: when several rules could
reduce the same top-of-stack, the earliest-registered one is tried first, and the
parser reports its derivation as a sequence of rule ids. Reordering rules may change
which derivation comes back for an ambiguous sentence.

Empty right-hand sides are not allowed. The bottom-up search only reduces what it
can see on the stack, and an epsilon rule would match everywhere forever.

# Build phase

This object follows a builder pattern: construct it with the alphabets, register
rules with ``add_rule(...)``, and then start analyzing. The first analysis freezes the
grammar; after that it is read-only and may be shared by any number of analyses.
Problems are reported eagerly, at the moment they are introduced, through a
fault handler. The default handler raises ``ConfigurationError``.

# Reduction cycles

A family of unit rules like ``A -> B`` and ``B -> A`` (or just ``A -> A``) would let
the greedy reduction phase rename the top of the stack around in circles without
consuming anything. Freezing the grammar checks for such loops and reports them.
Every other grammar terminates: each other reduction shortens the stack, and the
stack can never be longer than the input.
"""

import collections
from typing import NamedTuple, Hashable, Protocol

from ..support import foundation, pretty
from .interface import ConfigurationError, GrammarSyntaxError
from .engine import ParserEngine


class FaultHandler(Protocol):
	"""
	This generic handler just raises exceptions.
	More sophisticated handlers might collect the faults for a complete report.
	"""
	def overlapping_alphabets(self, symbols):
		raise ConfigurationError("Symbols %r are declared both terminal and non-terminal."%sorted(map(str, symbols)))
	
	def undeclared_start(self, symbol):
		raise ConfigurationError("Start symbol %r is not a declared non-terminal."%(symbol,))
	
	def late_registration(self, lhs, rhs):
		raise ConfigurationError("Rule %s -> %s arrived after the grammar was frozen."%(lhs, ' '.join(map(str, rhs))))
	
	def bad_left_side(self, lhs, provenance):
		raise ConfigurationError("Rule at %r has left side %r, which is not a declared non-terminal."%(provenance, lhs))
	
	def empty_right_side(self, lhs, provenance):
		raise ConfigurationError("Rule at %r for %r has an empty right side."%(provenance, lhs))
	
	def undeclared_symbols(self, lhs, symbols, provenance):
		raise ConfigurationError("Rule at %r for %r mentions undeclared symbol(s) %r."%(provenance, lhs, symbols))
	
	def reduction_cycle(self, symbols):
		raise ConfigurationError("Symbols %r may be renamed into one another in a loop."%sorted(map(str, symbols)))

class SimpleFaultHandler(FaultHandler):
	""" Protocols cannot be instantiated, so here's a simple way to get "raise for everything" behavior. """
	pass


class Rule(NamedTuple):
	"""
	lhs: The non-terminal symbol which is declared to produce...
	rhs: this non-empty sequence of symbols.
	provenance: Where did this rule come from? A line number, or whatever makes sense to you.
	"""
	lhs: Hashable
	rhs: tuple
	provenance: object = None
	
	def __str__(self):
		return "%s -> %s"%(self.lhs, ' '.join(map(str, self.rhs)))
	
	def is_rename(self):
		return len(self.rhs) == 1


class Grammar:
	"""
	Alphabets, a start symbol, and an ordered list of rules.
	"""
	def __init__(self, terminals, nonterminals, start, *, fault_handler:FaultHandler=SimpleFaultHandler()):
		terminals, nonterminals = list(terminals), list(nonterminals)
		self.fault_handler = fault_handler
		self.terminals = frozenset(terminals)
		self.nonterminals = frozenset(nonterminals)
		self.start = start
		self.rules:list[Rule] = []
		self.symbol_rule_ids = collections.defaultdict(list)
		self.__order = {}
		self.__frozen = False
		
		overlap = self.terminals & self.nonterminals
		if overlap: fault_handler.overlapping_alphabets(overlap)
		if start not in self.nonterminals: fault_handler.undeclared_start(start)
		# Registration order: terminals first, then non-terminals, each as given.
		for symbol in terminals + nonterminals:
			self.__order.setdefault(symbol, len(self.__order))
	
	def is_terminal(self, symbol) -> bool: return symbol in self.terminals
	def is_nonterminal(self, symbol) -> bool: return symbol in self.nonterminals
	
	def symbol_order(self, symbol) -> int:
		""" Position in which the symbol was declared. Handy as a sort key. """
		return self.__order[symbol]
	
	@property
	def frozen(self) -> bool: return self.__frozen
	
	def add_rule(self, lhs, rhs, provenance=None) -> int:
		"""
		This is your basic mechanism to add BNF rules.
		:return: the new rule's id, which is its 0-based position in the rule list,
			or None if the fault handler reported a problem without raising.
		"""
		rhs = tuple(rhs)
		if self.__frozen:
			self.fault_handler.late_registration(lhs, rhs)
			return None
		if provenance is None: provenance = len(self.rules)
		faulty = False
		if lhs not in self.nonterminals:
			self.fault_handler.bad_left_side(lhs, provenance)
			faulty = True
		if not rhs:
			self.fault_handler.empty_right_side(lhs, provenance)
			faulty = True
		strangers = [s for s in rhs if s not in self.__order]
		if strangers:
			self.fault_handler.undeclared_symbols(lhs, strangers, provenance)
			faulty = True
		if faulty: return None # Reported, so not registered.
		rule_id = foundation.allocate(self.rules, Rule(lhs, rhs, provenance))
		self.symbol_rule_ids[lhs].append(rule_id)
		return rule_id
	
	def freeze(self):
		""" End the build phase. Idempotent. Called automatically by the first analysis. """
		if not self.__frozen:
			self.assert_no_reduction_cycles()
			self.__frozen = True
		return self
	
	def assert_no_reduction_cycles(self):
		""" If a symbol may be renamed into itself (possibly indirectly) then the grammar is diseased. """
		renames = collections.defaultdict(set)
		for rule in self.rules:
			if rule.is_rename():
				if rule.lhs == rule.rhs[0]:
					self.fault_handler.reduction_cycle([rule.lhs])
				else:
					# Reductions run from right to left: the right-hand symbol becomes the left.
					renames[rule.rhs[0]].add(rule.lhs)
		for component in foundation.strongly_connected_components_hashable(renames):
			if len(component) > 1: self.fault_handler.reduction_cycle(component)
	
	def display(self, file=None, *, base=1):
		head = ['', 'Symbol', 'Produces']
		body = [[i+base, rule.lhs, ' '.join(map(str, rule.rhs))] for i,rule in enumerate(self.rules)]
		pretty.print_grid([head] + body, file=file)
	
	def analyze(self, tokens, **kwargs):
		""" Convenience: build a one-off engine with the given options and analyze one input. """
		return ParserEngine(self, **kwargs).analyze(tokens)
	
	def recognize(self, tokens, **kwargs) -> bool:
		return self.analyze(tokens, **kwargs) is not None
	
	@classmethod
	def shorthand(cls, start, rules:dict):
		"""
		Just a quick way to enter a test-grammar with single-character symbols.
		The keys of ``rules`` are the non-terminals; every other character is a terminal.
		Alternatives within a value are separated by "|" and keep their order.
		"""
		nonterminals = list(rules.keys())
		terminals = []
		for rhs in rules.values():
			for symbol in rhs:
				if symbol != '|' and symbol not in rules and symbol not in terminals:
					terminals.append(symbol)
		grammar = cls(terminals, nonterminals, start)
		for lhs, rhs in rules.items():
			for alt in rhs.split('|'):
				grammar.add_rule(lhs, tuple(alt))
		return grammar
	
	@classmethod
	def from_text(cls, text:str, **kwargs):
		"""
		Read the plain-text grammar format:
		
			# comments run to the end of the line
			terminals: ! + * ( ) a b
			nonterminals: A B T M
			start: A
			A -> ! B !
			B -> T | T + B
		
		The three declarations must come before the first rule.
		Each rule's provenance is its line number.
		"""
		declared = {}
		grammar = None
		for line_number, line in enumerate(text.splitlines(), 1):
			line = line.split('#', 1)[0].strip()
			if not line: continue
			if '->' in line:
				if grammar is None:
					missing = {'terminals', 'nonterminals', 'start'} - declared.keys()
					if missing: raise GrammarSyntaxError(line_number, "Rules must follow the declarations; missing %s."%', '.join(sorted(missing)))
					if len(declared['start']) != 1: raise GrammarSyntaxError(line_number, "Exactly one start symbol is required.")
					grammar = cls(declared['terminals'], declared['nonterminals'], declared['start'][0], **kwargs)
				lhs, rest = line.split('->', 1)
				lhs = lhs.split()
				if len(lhs) != 1: raise GrammarSyntaxError(line_number, "A rule needs exactly one symbol on the left.")
				for alt in rest.split('|'):
					grammar.add_rule(lhs[0], alt.split(), line_number)
			elif ':' in line:
				if grammar is not None: raise GrammarSyntaxError(line_number, "Declarations must precede the rules.")
				key, rest = line.split(':', 1)
				key = key.strip().lower()
				if key not in ('terminals', 'nonterminals', 'start'): raise GrammarSyntaxError(line_number, "Unknown declaration %r."%key)
				if key in declared: raise GrammarSyntaxError(line_number, "Duplicate declaration %r."%key)
				declared[key] = rest.split()
			else:
				raise GrammarSyntaxError(line_number, "Cannot understand %r."%line)
		if grammar is None: raise GrammarSyntaxError(0, "The grammar has no rules.")
		return grammar
