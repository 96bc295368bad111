"""
Delombok pass.

Materializes the members that Lombok's class annotations would generate:

    @Getter @Setter @NoArgsConstructor @AllArgsConstructor
    class Point extends Shape { int x; int y; }

gains, in this order: a no-args constructor, an all-args constructor
`(x, y)`, the setters `setX`/`setY` and the getters `getX`/`getY`. Every
synthesized constructor starts with `super()` when the class extends a type.

The rewrite is a pure function of the class declaration: a frozen summary is
extracted first and the new members are built from it, so no state leaks
between sibling or nested classes.
"""

import copy
from dataclasses import dataclass, replace
from typing import List, Tuple

from ..parser.ast_nodes import (
    Annotation,
    AssignmentExpression,
    BlockStatement,
    BodyDeclaration,
    ClassDeclaration,
    ConstructorDeclaration,
    ExplicitConstructorInvocation,
    ExpressionStatement,
    FieldAccess,
    FieldDeclaration,
    MethodDeclaration,
    Modifier,
    Name,
    Parameter,
    ReturnStatement,
    Statement,
    ThisExpression,
    TypeNode,
    VoidType,
    variable_type,
)
from .base import TransformPass
from .mappings import capitalize


GETTER = 'Getter'
SETTER = 'Setter'
NO_ARGS_CONSTRUCTOR = 'NoArgsConstructor'
ALL_ARGS_CONSTRUCTOR = 'AllArgsConstructor'
DATA = 'Data'

CLASS_ANNOTATIONS = frozenset({GETTER, SETTER, NO_ARGS_CONSTRUCTOR, ALL_ARGS_CONSTRUCTOR, DATA})
FIELD_ANNOTATIONS = frozenset({GETTER, SETTER})


@dataclass(frozen=True)
class LombokField:
    """An instance field as the accessors see it."""
    name: str
    type: TypeNode
    is_final: bool
    getter: bool
    setter: bool


@dataclass(frozen=True)
class LombokSummary:
    """Everything the synthesized members depend on."""
    class_name: str
    extends: bool
    no_args_constructor: bool
    all_args_constructor: bool
    fields: Tuple[LombokField, ...]


def summarize(decl: ClassDeclaration) -> LombokSummary:
    """Extract the Lombok flags and instance fields of a class declaration."""
    names = {a.simple_name for a in decl.annotations}
    getters = GETTER in names or DATA in names
    setters = SETTER in names or DATA in names

    fields = []
    for member in decl.members:
        if not isinstance(member, FieldDeclaration) or Modifier.STATIC in member.modifiers:
            continue
        field_names = {a.simple_name for a in member.annotations}
        is_final = Modifier.FINAL in member.modifiers
        for var in member.variables:
            fields.append(LombokField(
                name=var.name,
                type=variable_type(member.type, var),
                is_final=is_final,
                getter=getters or GETTER in field_names,
                setter=(setters or SETTER in field_names) and not is_final,
            ))

    return LombokSummary(
        class_name=decl.name,
        extends=bool(decl.extends),
        no_args_constructor=NO_ARGS_CONSTRUCTOR in names,
        all_args_constructor=ALL_ARGS_CONSTRUCTOR in names,
        fields=tuple(fields),
    )


# =============================================================================
# MEMBER BUILDERS
# =============================================================================

def _this_field(name: str) -> FieldAccess:
    return FieldAccess(ThisExpression(), name)


def _assign_field(name: str) -> Statement:
    return ExpressionStatement(AssignmentExpression('=', _this_field(name), Name(name)))


def _super_call(summary: LombokSummary) -> List[Statement]:
    return [ExplicitConstructorInvocation(is_this=False)] if summary.extends else []


def _parameter(f: LombokField) -> Parameter:
    return Parameter(f.name, copy.deepcopy(f.type))


def build_members(summary: LombokSummary) -> List[BodyDeclaration]:
    """Build the synthesized members, in declaration order."""
    members: List[BodyDeclaration] = []

    if summary.no_args_constructor:
        members.append(ConstructorDeclaration(
            summary.class_name,
            modifiers=[Modifier.PUBLIC],
            body=BlockStatement(_super_call(summary)),
        ))

    if summary.all_args_constructor:
        members.append(ConstructorDeclaration(
            summary.class_name,
            parameters=[_parameter(f) for f in summary.fields],
            modifiers=[Modifier.PUBLIC],
            body=BlockStatement(_super_call(summary) + [_assign_field(f.name) for f in summary.fields]),
        ))

    for f in summary.fields:
        if f.setter:
            members.append(MethodDeclaration(
                'set' + capitalize(f.name),
                return_type=VoidType(),
                parameters=[_parameter(f)],
                body=BlockStatement([_assign_field(f.name)]),
                modifiers=[Modifier.PUBLIC],
            ))

    for f in summary.fields:
        if f.getter:
            members.append(MethodDeclaration(
                'get' + capitalize(f.name),
                return_type=copy.deepcopy(f.type),
                body=BlockStatement([ReturnStatement(_this_field(f.name))]),
                modifiers=[Modifier.PUBLIC],
            ))

    return members


def _without(annotations: List[Annotation], names: frozenset) -> List[Annotation]:
    return [a for a in annotations if a.simple_name not in names]


def delombok(decl: ClassDeclaration) -> ClassDeclaration:
    """Return a copy of ``decl`` with its Lombok annotations materialized."""
    summary = summarize(decl)
    members: List[BodyDeclaration] = []
    for member in decl.members:
        if isinstance(member, FieldDeclaration) and Modifier.STATIC not in member.modifiers:
            member = replace(member, annotations=_without(member.annotations, FIELD_ANNOTATIONS))
        members.append(member)
    return replace(
        decl,
        annotations=_without(decl.annotations, CLASS_ANNOTATIONS),
        members=members + build_members(summary),
    )


class DelombokPass(TransformPass):
    """Find Lombok class annotations and materialize them as members."""

    def visit_ClassDeclaration(self, node: ClassDeclaration) -> ClassDeclaration:
        if node.is_interface:
            return self.generic_visit(node)
        return self.generic_visit(delombok(node))
