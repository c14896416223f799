"""
Decide whether sentences belong to the language of a context-free grammar,
using a backtracking shift-reduce parser, and show how they derive.

The grammar file looks like this:

	terminals: ! + * ( ) a b
	nonterminals: A B T M
	start: A
	A -> ! B !
	B -> T | T + B

Rules are numbered from 1 in the order given, unless --zero-based.
"""

import sys, argparse

from retrace.parsing.grammar import Grammar
from retrace.parsing.engine import ParserEngine, DEFAULT_STEP_LIMIT
from retrace.parsing.interface import ConfigurationError, EngineFault, TraceListener
from retrace.parsing import derivation
from retrace.support import pretty

def parse_arguments(argv=None):
	parser = argparse.ArgumentParser(prog='py -m retrace', description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument('grammar_path', help='path to grammar file')
	parser.add_argument('sentences', nargs='+', help='sentences to analyze')
	parser.add_argument('--trace', action='store_true', help='Show every move the parser makes, including the ones it takes back.')
	parser.add_argument('--pretty', action='store_true', help='Display the numbered rules in grid format before analyzing.')
	parser.add_argument('--tree', action='store_true', help='Display the parse tree of each accepted sentence.')
	parser.add_argument('--top-down', action='store_true', dest='top_down', help='Also show the top-down (leftmost) derivation.')
	parser.add_argument('--zero-based', action='store_true', dest='zero_based', help='Number rules from zero.')
	parser.add_argument('--step-limit', type=int, default=DEFAULT_STEP_LIMIT, dest='step_limit', help='Give up after this many moves (default %(default)s; 0 for no limit).')
	return parser.parse_args(argv)

def tokenize(grammar, sentence):
	""" One character per terminal if all terminals are one character long; otherwise split on whitespace. """
	if all(len(str(t)) == 1 for t in grammar.terminals):
		return [c for c in sentence if not c.isspace()]
	return sentence.split()

def main(args, file=None):
	file = file or sys.stdout
	base = 0 if args.zero_based else 1
	try:
		with open(args.grammar_path) as fh: grammar = Grammar.from_text(fh.read())
		listener = TraceListener(grammar, file, base=base) if args.trace else None
		engine = ParserEngine(grammar, step_limit=args.step_limit or None, listener=listener)
	except ConfigurationError as e:
		print(e.args[0], file=sys.stderr)
		return 2
	except OSError as e:
		print("Cannot read grammar: %s"%e, file=sys.stderr)
		return 2
	if args.pretty: grammar.display(file, base=base)
	status = 0
	for sentence in args.sentences:
		tokens = tokenize(grammar, sentence)
		try: result = engine.analyze(tokens)
		except EngineFault as e:
			print("%s: %s"%(sentence, e), file=sys.stderr)
			return 2
		if result is None:
			print("%s: not in language"%sentence, file=file)
			status = 1
			continue
		print("%s: %s"%(sentence, ' '.join(map(str, result.numbered(base)))), file=file)
		if args.top_down or args.tree:
			tree = derivation.replay(grammar, tokens, result.rule_ids)
			if args.top_down:
				print("\ttop-down: %s"%' '.join(str(r+base) for r in derivation.top_down(tree)), file=file)
			if args.tree: pretty.print_tree(tree, file, base=base)
	return status

if __name__ == '__main__': sys.exit(main(parse_arguments()))
