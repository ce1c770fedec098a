"""Types and the things that get checked.

Types here are only as detailed as the missing return check needs. Resolving
them is done elsewhere, and the results end up in the attributes of these
classes.
"""

import collections
import enum
import typing

import attr

from retcheck.common import Location

if typing.TYPE_CHECKING:
    from retcheck import flow


class TypeKind(enum.Enum):
    VOID = 0
    PRIMITIVE = 1
    CLASS = 2
    UNRESOLVED_CLASS = 3   # looks like a class type, but class not found
    TYPE_PARAMETER = 4


@attr.s(auto_attribs=True, eq=False, order=False, frozen=True)
class Type:
    name: str
    kind: TypeKind

    @property
    def is_void(self) -> bool:
        return self.kind == TypeKind.VOID

    @property
    def is_type_parameter(self) -> bool:
        return self.kind == TypeKind.TYPE_PARAMETER

    @property
    def resolves_to_concrete_class(self) -> bool:
        return self.kind == TypeKind.CLASS


BUILTIN_TYPES = collections.OrderedDict((tybe.name, tybe) for tybe in [
    Type('void', TypeKind.VOID),
    Type('int', TypeKind.PRIMITIVE),
    Type('boolean', TypeKind.PRIMITIVE),
    Type('Object', TypeKind.CLASS),
    Type('String', TypeKind.CLASS),
    Type('Integer', TypeKind.CLASS),
])
VOID = BUILTIN_TYPES['void']


@attr.s(auto_attribs=True, eq=False, order=False, frozen=True)
class Expression:
    location: typing.Optional[Location] = None


# location is None for elements created by the compiler
# valid is False after the element has been detached from its tree
@attr.s(auto_attribs=True, eq=False, order=False, frozen=True)
class Element:
    location: typing.Optional[Location]
    valid: bool = True

    @property
    def is_physical(self) -> bool:
        return self.location is not None


@attr.s(auto_attribs=True, eq=False, order=False, frozen=True)
class Body:
    root_node: 'flow.Start'
    children: typing.List[Element] = attr.Factory(list)

    def get_last_child(self) -> typing.Optional[Element]:
        return self.children[-1] if self.children else None


@attr.s(auto_attribs=True, eq=False, order=False, frozen=True, repr=False)
class Method:
    name: str
    # what the source code says, None if the return type is not written
    returntype_annotation: typing.Optional[Type]
    returntype: Type
    body: typing.Optional[Body]     # None for abstract methods

    def __repr__(self) -> str:
        return f'<{__name__}.Method {self.name!r}>'


@attr.s(auto_attribs=True, eq=False, order=False, frozen=True, repr=False)
class Closure:
    inferred_returntype: typing.Optional[Type]
    body: Body

    def __repr__(self) -> str:
        if self.inferred_returntype is None:
            return f'<{__name__}.Closure>'
        return f'<{__name__}.Closure -> {self.inferred_returntype.name}>'


Subject = typing.Union[Method, Closure]
