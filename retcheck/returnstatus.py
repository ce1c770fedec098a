"""Decides how badly a method or closure needs to return a value."""

import enum
import typing

from retcheck.objects import Closure, Method


class ReturnStatus(enum.Enum):
    # not returning a value is an error on every path
    MUST_RETURN_VALUE = 0
    # the return type is not known well enough to be strict, so only
    # returning a value on some paths but not all of them is an error
    SHOULD_RETURN_VALUE = 1
    SHOULD_NOT_RETURN_VALUE = 2


def _closure_status(closure: Closure) -> ReturnStatus:
    returntype = closure.inferred_returntype
    if returntype is None:
        return ReturnStatus.SHOULD_NOT_RETURN_VALUE

    # type parameters are never concrete classes, but check anyway
    if (returntype.resolves_to_concrete_class
            and not returntype.is_type_parameter):
        return ReturnStatus.MUST_RETURN_VALUE
    if returntype.is_void:
        return ReturnStatus.SHOULD_NOT_RETURN_VALUE
    return ReturnStatus.SHOULD_RETURN_VALUE


def _method_status(method: Method) -> ReturnStatus:
    # methods without a written return type don't have to return anything
    if (method.returntype_annotation is not None
            and not method.returntype.is_void):
        return ReturnStatus.MUST_RETURN_VALUE
    return ReturnStatus.SHOULD_NOT_RETURN_VALUE


def get_return_status(subject: typing.Any) -> ReturnStatus:
    if isinstance(subject, Closure):
        return _closure_status(subject)
    if isinstance(subject, Method):
        return _method_status(subject)
    return ReturnStatus.SHOULD_NOT_RETURN_VALUE
