"""Checks whether all exit points of a body return a value.

Each exit point gets an ExitKind, and the kinds are folded into three flags.
The order of the exit points doesn't matter, only which kinds there are.
"""

import enum
import functools
import typing

import attr

from retcheck import flow
from retcheck.returnstatus import ReturnStatus


class ExitKind(enum.Enum):
    THROW = 0
    MAYBE_VALUE = 1     # implicit return of the last expression
    VALUE = 2           # 'return something'
    NO_VALUE = 3        # 'return' without a value, or falling off the end


def classify_exit_point(exit_point: flow.ExitPoint) -> ExitKind:
    instruction = exit_point.instruction
    if flow.is_failure_propagating(instruction):
        return ExitKind.THROW
    if flow.is_conditional_value_exit(instruction):
        return ExitKind.MAYBE_VALUE
    if flow.is_explicit_return(instruction) and exit_point.value is not None:
        return ExitKind.VALUE
    return ExitKind.NO_VALUE


@attr.s(auto_attribs=True, frozen=True)
class Flags:
    always_has_return: bool = True
    sometimes_has_return: bool = False
    # not used for anything yet
    has_explicit_return: bool = False


def fold(flags: Flags, kind: ExitKind, status: ReturnStatus) -> Flags:
    if kind == ExitKind.THROW:
        # a path that throws doesn't need a return:
        #
        #    int foo() {
        #        if (x) throw new RuntimeException();
        #        return 1;
        #    }
        if status == ReturnStatus.MUST_RETURN_VALUE:
            return attr.evolve(flags, sometimes_has_return=True)
        return flags

    if kind == ExitKind.MAYBE_VALUE:
        return attr.evolve(flags, sometimes_has_return=True)

    if kind == ExitKind.VALUE:
        return attr.evolve(
            flags, sometimes_has_return=True, has_explicit_return=True)

    assert kind == ExitKind.NO_VALUE, kind
    return attr.evolve(flags, always_has_return=False)


def misses_some_returns(
        kinds: typing.Iterable[ExitKind],
        status: ReturnStatus) -> bool:
    if status == ReturnStatus.SHOULD_NOT_RETURN_VALUE:
        return False

    flags = functools.reduce(
        lambda flags, kind: fold(flags, kind, status), kinds, Flags())

    # also true when there are no exit points at all
    if (status == ReturnStatus.MUST_RETURN_VALUE
            and not flags.sometimes_has_return):
        return True

    return flags.sometimes_has_return and not flags.always_has_return


def body_misses_some_returns(
        root_node: flow.Start,
        status: ReturnStatus) -> bool:
    if status == ReturnStatus.SHOULD_NOT_RETURN_VALUE:
        return False
    return misses_some_returns(
        map(classify_exit_point, flow.iter_exit_points(root_node)), status)
