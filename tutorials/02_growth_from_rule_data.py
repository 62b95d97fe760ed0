"""
Growth Tutorial

Goals:
- Load rules from plain data (as a YAML or JSON decoder would return them)
- Grow a graph from an axiom for a few ticks with a seeded RNG
- Inspect the growth metrics

The "sprout" rule only fires on stems that have not sprouted yet, so it
sets match_values to have the pattern's attribute conditions checked.
"""

from rggs import Node, RggGraph, RNGManager, deserialize_rules, grow

RULES = [
    {
        'id': 'sprout',
        'match_values': True,
        'from': {'nodes': [{'id': 0, 'name': 'stem', 'values': {'sprouted': ['eq', 0]}}]},
        'to': [
            {'replace': {'target': 0, 'with': {'name': 'stem', 'values': {'sprouted': 1, 'dir': 'dir'}}}},
            {'add': {'neighbors': [0], 'node': {'name': 'stem', 'values': {'sprouted': 0, 'dir': 'dir + rand(-1, 1)'}}}},
        ],
    },
    {
        'id': 'leaf',
        'from': {'nodes': [{'id': 0, 'name': 'stem'}]},
        'to': [{'add': {'neighbors': [0], 'node': {'name': 'leaf', 'values': {'rotation': '90 * dir'}}}}],
    },
]


def main():
    axiom = RggGraph()
    axiom.insert_node_with(Node.from_mapping('stem', {'sprouted': 0, 'dir': 0}))

    rules = deserialize_rules(RULES, strict=True)

    # skip_dirty_matches keeps nodes created in a tick from being rewritten
    # again by later rules of the same tick.
    graph, metrics = grow(
        rules,
        axiom,
        {'max_iterations': 4, 'skip_dirty_matches': True},
        rng_manager=RNGManager(seed=42),
    )

    print('iterations:', metrics['iterations'])
    print('nodes/edges:', metrics['final_nodes'], metrics['final_edges'])
    print('fingerprints:', metrics['history'].fingerprints)
    print(graph.as_dot_string())


if __name__ == '__main__':
    main()
