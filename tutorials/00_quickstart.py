from rggs import Add, FromNode, Node, NodeSet, RggGraph, Rule, ToNode


def main():
    # Quickstart goal:
    # 1) Build a one-node graph (a single "stem")
    # 2) Apply a rule that sprouts a new stem from every stem
    # 3) Print what changed and dump the graph in DOT format

    # The axiom: one stem pointing in direction 0.
    g = RggGraph()
    g.insert_node_with(Node.from_mapping('stem', {'dir': 0}))

    # Match any node named "stem" and attach a new stem to it.
    # Expressions see the matched node's attributes as variables.
    rule = Rule(
        lhs=NodeSet(nodes=[FromNode(id=0, name='stem')]),
        rhs=[Add(neighbors=[0], new_node=ToNode('stem', {'dir': 'dir + 1'}))],
    )

    # Each application rewrites every match found before the pass started,
    # so the stem count doubles per call.
    for _ in range(3):
        result = rule.apply(g)
        print('added:', result.added)

    print('order:', g.order())
    print(g.as_dot_string())


if __name__ == '__main__':
    main()
