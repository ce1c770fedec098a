"""Control flow graphs of method and closure bodies.

Code like this

    if (x) return 1;
    foo();

is represented like this:

        Start
          |
          V
    ,--is x true?--.
    |yes         no|
    V              V
  Return 1       Statement foo()
                   |
                   V
                 (nothing, the body ends here)

Any place where the body can end is an exit point. Here the Return node is an
exit point and so is the Statement, because nothing comes after it.

Building the graph from source code is not done here. Whoever creates the
subjects also creates their graphs.
"""

import typing

import attr

from retcheck.common import Location
from retcheck.objects import Closure, Expression


class Node:

    def __init__(self, location: typing.Optional[Location]):
        # should be None for nodes created by the compiler
        self.location = location

    def get_jumps_to_including_nones(
            self) -> typing.Iterable[typing.Optional['Node']]:
        """Return iterable of nodes that may be ran after running this node.

        If the body may end after this node without returning or throwing,
        the resulting iterable contains one or more Nones.
        """
        raise NotImplementedError

    def get_jumps_to(self) -> typing.Iterable['Node']:
        """Return iterable of nodes that may be ran after running this node."""
        return (node for node in self.get_jumps_to_including_nones()
                if node is not None)


def _check_jump_target(node: typing.Optional[Node]) -> None:
    # can't jump to Start, avoids special cases
    assert node is None or not isinstance(node, Start)


# a node that can be used like:
#    something --> this node --> something
class PassThroughNode(Node):

    def __init__(self, location: typing.Optional[Location]):
        super().__init__(location)
        self.next_node: typing.Optional[Node] = None

    def get_jumps_to_including_nones(
            self) -> typing.List[typing.Optional[Node]]:
        return [self.next_node]

    def set_next_node(self, next_node: typing.Optional[Node]) -> None:
        _check_jump_target(next_node)
        self.next_node = next_node


# execution of the body begins here
class Start(PassThroughNode):
    pass


class Statement(PassThroughNode):

    def __init__(
            self,
            location: typing.Optional[Location],
            expression: typing.Optional[Expression] = None,
            *, may_return_value: bool = False):
        super().__init__(location)
        # if may_return_value is true and the body ends here, the value of
        # the expression is returned without a return statement
        assert expression is not None or not may_return_value
        self.expression = expression
        self.may_return_value = may_return_value


# the closure gets checked separately, its return statements don't return
# from the body that contains this node
class CreateClosure(PassThroughNode):

    def __init__(
            self,
            location: typing.Optional[Location],
            closure: Closure):
        super().__init__(location)
        self.closure = closure


class TwoWayDecision(Node):

    def __init__(self, location: typing.Optional[Location]):
        super().__init__(location)
        self.then: typing.Optional[Node] = None
        self.otherwise: typing.Optional[Node] = None

    def get_jumps_to_including_nones(
            self) -> typing.List[typing.Optional[Node]]:
        return [self.then, self.otherwise]

    def set_then(self, value: typing.Optional[Node]) -> None:
        _check_jump_target(value)
        self.then = value

    def set_otherwise(self, value: typing.Optional[Node]) -> None:
        _check_jump_target(value)
        self.otherwise = value


class Throw(Node):

    def get_jumps_to_including_nones(
            self) -> typing.List[typing.Optional[Node]]:
        return []


class Return(Node):

    def __init__(
            self,
            location: typing.Optional[Location],
            value: typing.Optional[Expression] = None):
        super().__init__(location)
        self.value = value

    def get_jumps_to_including_nones(
            self) -> typing.List[typing.Optional[Node]]:
        return []


def _iterate_nodes(root_node: Node) -> typing.Iterator[Node]:
    # depth first, and always in the same order
    seen: typing.Set[Node] = set()
    to_visit = [root_node]
    while to_visit:
        node = to_visit.pop()
        if node in seen:
            continue
        seen.add(node)
        yield node
        to_visit.extend(reversed(list(node.get_jumps_to())))


def get_all_nodes(root_node: Node) -> typing.Set[Node]:
    return set(_iterate_nodes(root_node))


@attr.s(auto_attribs=True, frozen=True)
class ExitPoint:
    instruction: Node
    value: typing.Optional[Expression] = None


def _exit_points_of_node(node: Node) -> typing.Iterator[ExitPoint]:
    if isinstance(node, Throw):
        yield ExitPoint(node)
    elif isinstance(node, Return):
        yield ExitPoint(node, node.value)
    else:
        value = None
        if isinstance(node, Statement) and node.may_return_value:
            value = node.expression

        for jump in node.get_jumps_to_including_nones():
            if jump is None:
                yield ExitPoint(node, value)


def visit_all_exit_points(
        root_node: Start,
        visitor: typing.Callable[[ExitPoint], bool]) -> bool:
    """Call visitor(exit_point) for each place where the body can end.

    Exit points inside loops and branches are visited too, but exit points
    of closures created in the body are not. The visitor should return True
    to keep going or False to stop. Returns False if the visitor stopped.
    """
    for node in _iterate_nodes(root_node):
        for exit_point in _exit_points_of_node(node):
            if not visitor(exit_point):
                return False
    return True


def iter_exit_points(root_node: Start) -> typing.Iterator[ExitPoint]:
    for node in _iterate_nodes(root_node):
        yield from _exit_points_of_node(node)


def find_closures(root_node: Start) -> typing.List[Closure]:
    """Return closures created directly in the body, not nested deeper."""
    return [node.closure for node in _iterate_nodes(root_node)
            if isinstance(node, CreateClosure)]


def is_failure_propagating(instruction: Node) -> bool:
    return isinstance(instruction, Throw)


def is_conditional_value_exit(instruction: Node) -> bool:
    return isinstance(instruction, Statement) and instruction.may_return_value


def is_explicit_return(instruction: Node) -> bool:
    return isinstance(instruction, Return)
