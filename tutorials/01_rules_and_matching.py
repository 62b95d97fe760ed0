"""
Rules and Matching Tutorial (Concept Intro)

Goals:
- Define a two-node pattern with an edge
- Use find_subgraph_matches to list its occurrences
- Compare results with and without symmetry breaking

The pattern is unnamed, so it is symmetric: swapping its two nodes gives
the same pattern.
"""

from rggs import FromNode, NodeSet, RggGraph, find_subgraph_matches


def build_graph():
    g = RggGraph()
    a = g.insert_node()
    b = g.insert_node()
    c = g.insert_node()
    g.add_edge(a, b)
    g.add_edge(b, c)
    return g


def main():
    g = build_graph()

    lhs = NodeSet(nodes=[FromNode(0), FromNode(1)], edges=[(0, 1)])

    # One mapping per edge
    print('matches:', find_subgraph_matches(g, lhs))
    # One mapping per orientation of every edge
    print('all orientations:', find_subgraph_matches(g, lhs, symmetry_breaking=False))


if __name__ == '__main__':
    main()
