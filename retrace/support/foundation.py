""" Small is beautiful. These algorithms need no introduction. """

def allocate(a_list:list, item):
	"""
	Append an item to a list, and return the new item's index in that list.
	Rule ids come about this way.
	"""
	idx = len(a_list)
	a_list.append(item)
	return idx

def strongly_connected_components_by_tarjan(graph):
	"""
	Tarjan's algorithm. ``graph[q]`` lists the successors of node ``q``,
	with nodes numbered 0..len(graph)-1. Components come out as lists of
	node numbers, sinks first.
	"""
	order = [None] * len(graph)  # Visit order of each node, or None if not yet seen.
	pending = []
	waiting = set()
	components = []
	
	def visit(q) -> int:
		earliest = order[q] = allocate(pending, q)
		waiting.add(q)
		for r in graph[q]:
			if order[r] is None: earliest = min(earliest, visit(r))
			elif r in waiting: earliest = min(earliest, order[r])
		if earliest == order[q]:
			component = pending[earliest:]
			del pending[earliest:]
			waiting.difference_update(component)
			components.append(component)
		return earliest
	
	for q in range(len(graph)):
		if order[q] is None: visit(q)
	return components

def strongly_connected_components_hashable(graph:dict):
	"""
	The same, for a dictionary from each node to an iterable of successor nodes.
	Arcs to nodes that are not keys are ignored. The result is lists of keys.
	"""
	keys = list(graph)
	number = {key:i for i,key in enumerate(keys)}
	numbered = [[number[arc] for arc in graph[key] if arc in number] for key in keys]
	return [[keys[q] for q in component] for component in strongly_connected_components_by_tarjan(numbered)]
