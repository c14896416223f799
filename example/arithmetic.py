"""
A small expression grammar, built up rule by rule, and a few sentences to try it on.

	1) A -> ! B !
	2) B -> T
	3) B -> T + B
	4) T -> M
	5) T -> M * T
	6) M -> a
	7) M -> b
	8) M -> ( B )

For "!a+b!" the bottom-up derivation is 6 4 7 4 2 3 1 and the top-down one is 1 3 4 6 2 4 7.

Run this as ``python -m example.arithmetic [sentence...]`` from the project root.
"""
import sys

from retrace.parsing.grammar import Grammar
from retrace.parsing import derivation

SAMPLES = ['!a+b!', '!a*b!', '!a+*b!', 'a!b', '!(a+b)*(b+a)!']

def build_grammar() -> Grammar:
	grammar = Grammar('!+*()ab', 'ABTM', 'A')
	grammar.add_rule('A', '!B!')
	grammar.add_rule('B', 'T')
	grammar.add_rule('B', 'T+B')
	grammar.add_rule('T', 'M')
	grammar.add_rule('T', 'M*T')
	grammar.add_rule('M', 'a')
	grammar.add_rule('M', 'b')
	grammar.add_rule('M', '(B)')
	return grammar

def main(sentences):
	grammar = build_grammar()
	grammar.display()
	for sentence in sentences:
		result = grammar.analyze(sentence)
		if result is None:
			print(sentence, "does not belong to the grammar")
		else:
			tree = derivation.replay(grammar, sentence, result.rule_ids)
			print(sentence)
			print("\tbottom-up:", result)
			print("\ttop-down: ", ' '.join(str(r+1) for r in derivation.top_down(tree)))

if __name__ == '__main__': main(sys.argv[1:] or SAMPLES)
