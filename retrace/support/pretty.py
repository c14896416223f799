""" Bits and bobs in support of visualizing grammars, parse stacks, and trees. """
import sys

DOT = '●'

def dotted(symbols, position):
	""" Show a sequence of symbols with a marker at the given position, e.g. the read cursor. """
	items = [str(s) for s in symbols]
	items.insert(position, DOT)
	return "[ %s ]"%" ".join(items)

def print_grid(grid, file=None):
	""" Right-justified columns in a box-drawn frame, with a rule under the first (heading) row. """
	file = file or sys.stdout
	cells = [[str(cell) for cell in row] for row in grid]
	assert len(set(map(len, cells))) == 1, "ragged grid"
	width = [max(len(cell) for cell in column) for column in zip(*cells)]
	def border(joint): return joint.join('─'*(w+2) for w in width)[1:-1]
	print(border('┬'), file=file)
	for r, row in enumerate(cells):
		if r == 1: print(border('┼'), file=file)
		print(' │ '.join(cell.rjust(w) for cell, w in zip(row, width)), file=file)
	print(border('┴'), file=file)

def print_tree(tree, file=None, *, base=1):
	"""
	Indented outline of a parse tree. Interior nodes show the (numbered) rule
	that produced them; leaves are just the terminal symbol.
	"""
	file = file or sys.stdout
	def visit(node, depth):
		indent = '  '*depth
		if node.rule_id is None: print(indent + str(node.symbol), file=file)
		else:
			print("%s%s  (%d)"%(indent, node.symbol, node.rule_id+base), file=file)
			for child in node.children: visit(child, depth+1)
	visit(tree, 0)
