import types

import pytest

from retcheck import common, flow
from retcheck.objects import Body, Element, Expression


@pytest.fixture
def source(tmp_path):
    """source(code) writes code to a file and returns a SourceFile."""
    counter = iter(range(1000))

    def create(code):
        path = tmp_path / ('file%d.groovy' % next(counter))
        path.write_text(code, encoding='utf-8')
        return common.SourceFile(path)

    return create


@pytest.fixture
def build(source):
    # all nodes given to chain() except the last one must be pass-through
    def chain(*nodes):
        for before, after in zip(nodes, nodes[1:]):
            before.set_next_node(after)
        return nodes[0]

    def start(*nodes):
        return chain(flow.Start(None), *nodes)

    def value():
        return Expression()

    def returns_value():
        return flow.Return(None, value())

    def implicit_value():
        return flow.Statement(None, value(), may_return_value=True)

    def decision(then, otherwise):
        node = flow.TwoWayDecision(None)
        node.set_then(then)
        node.set_otherwise(otherwise)
        return node

    def body(root_node, code='}'):
        # last child is the closing brace at the end of the code
        source_file = source(code)
        location = common.Location(source_file, len(code) - 1, 1)
        return Body(root_node, [Element(location)])

    return types.SimpleNamespace(**{
        name: func for name, func in locals().items()
        if callable(func) and not name.startswith('_')
    })
