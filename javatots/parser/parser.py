"""
Java front end.

Parses Java source with javalang and converts the javalang tree into the
transpiler's own AST (see ast_nodes), then recovers comments from the raw
source. Nothing downstream of this module sees javalang types.
"""

from typing import List, Optional, Tuple, TYPE_CHECKING

import javalang

if TYPE_CHECKING:
    from ..codegen.diagnostics import TranspilerDiagnostics

from ..errors import JavaSyntaxError, UnsupportedConstructError
from .ast_nodes import (
    Annotation,
    AnnotationArgument,
    ArrayAccess,
    ArrayCreation,
    ArrayInitializer,
    ArrayType,
    AssertStatement,
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    BodyDeclaration,
    BreakStatement,
    CastExpression,
    CatchClause,
    ClassDeclaration,
    ClassLiteral,
    ClassType,
    CompilationUnit,
    ConditionalExpression,
    ConstructorDeclaration,
    ContinueStatement,
    DoStatement,
    EmptyStatement,
    EnumConstant,
    EnumDeclaration,
    ExplicitConstructorInvocation,
    Expression,
    ExpressionStatement,
    FieldAccess,
    FieldDeclaration,
    ForEachStatement,
    ForStatement,
    IfStatement,
    ImportDeclaration,
    InitializerDeclaration,
    InstanceOfExpression,
    LabeledStatement,
    LambdaExpression,
    Literal,
    LocalClassDeclaration,
    LocalVariableDeclaration,
    MethodCall,
    MethodDeclaration,
    MethodReference,
    Modifier,
    Name,
    ObjectCreation,
    PackageDeclaration,
    Parameter,
    Position,
    PrimitiveType,
    ReturnStatement,
    Statement,
    SuperExpression,
    SwitchCase,
    SwitchStatement,
    SynchronizedStatement,
    ThisExpression,
    ThrowStatement,
    TryStatement,
    TypeDeclaration,
    TypeNode,
    TypeParameter,
    UnaryExpression,
    UnionType,
    VariableDeclarator,
    VoidType,
    WhileStatement,
    WildcardType,
)
from .comments import attach_comments


tree = javalang.tree

_MODIFIER_ORDER = list(Modifier)
_MODIFIERS_BY_KEYWORD = {m.value: m for m in Modifier}


def _position(node) -> Optional[Position]:
    position = getattr(node, 'position', None)
    if position is None:
        return None
    return Position(position.line, position.column)


def class_type_from_name(qualified_name: str) -> ClassType:
    """Build a (possibly scoped) ClassType from a dotted name such as `java.io.IOException`."""
    result: Optional[ClassType] = None
    for part in qualified_name.split('.'):
        result = ClassType(part, scope=result)
    return result


def _dotted_expression(qualified: str) -> Expression:
    """`a.b.c` as nested field accesses on a name."""
    parts = qualified.split('.')
    expr: Expression = Name(parts[0])
    for part in parts[1:]:
        expr = FieldAccess(expr, part)
    return expr


class JavaTreeConverter:
    """
    Converts a javalang compilation unit into the transpiler's AST.

    Modifiers with no TypeScript counterpart (transient, volatile, ...) are
    dropped here and reported as warnings.
    """

    def __init__(
        self,
        diagnostics: Optional['TranspilerDiagnostics'] = None,
        file_path: str = '',
        source: str = '',
    ):
        """
        Initialize the converter.

        Args:
            diagnostics: Collector for dropped-modifier warnings
            file_path: Source path, for diagnostics
            source: The parsed source text, consulted where javalang drops tokens
        """
        self._diagnostics = diagnostics
        self._file_path = file_path
        self._source = source
        self._line_offsets = [0]
        for index, ch in enumerate(source):
            if ch == '\n':
                self._line_offsets.append(index + 1)

    def _is_static_initializer(self, block: BlockStatement) -> bool:
        """Whether `static` precedes the brace that opens an initializer block.

        An empty block has no position to look from and counts as static.
        """
        first = next((s.position for s in block.statements if s.position is not None), None)
        if first is None or first.line > len(self._line_offsets):
            return True
        offset = self._line_offsets[first.line - 1] + first.column - 1
        brace = self._source.rfind('{', 0, offset)
        return self._source[:max(brace, 0)].rstrip().endswith('static')

    # =========================================================================
    # COMPILATION UNIT
    # =========================================================================

    def convert_unit(self, node) -> CompilationUnit:
        package = None
        if node.package is not None:
            package = PackageDeclaration(
                node.package.name,
                self.convert_annotations(node.package.annotations),
                position=_position(node.package),
            )
        imports = [
            ImportDeclaration(
                imp.path,
                is_static=bool(imp.static),
                is_asterisk=bool(imp.wildcard),
                position=_position(imp),
            )
            for imp in node.imports or []
        ]
        types = [self.convert_type_declaration(t) for t in node.types or []]
        return CompilationUnit(package, imports, types)

    # =========================================================================
    # MODIFIERS AND ANNOTATIONS
    # =========================================================================

    def convert_modifiers(self, node) -> List[Modifier]:
        keywords = getattr(node, 'modifiers', None) or set()
        dropped = sorted(k for k in keywords if k not in _MODIFIERS_BY_KEYWORD)
        if dropped and self._diagnostics is not None:
            line = node.position.line if getattr(node, 'position', None) else None
            for keyword in dropped:
                self._diagnostics.warn_modifier_dropped(keyword, self._file_path, line)
        kept = {_MODIFIERS_BY_KEYWORD[k] for k in keywords if k in _MODIFIERS_BY_KEYWORD}
        return [m for m in _MODIFIER_ORDER if m in kept]

    def convert_annotations(self, annotations) -> List[Annotation]:
        return [self.convert_annotation(a) for a in annotations or []]

    def convert_annotation(self, node) -> Annotation:
        element = node.element
        if element is None:
            arguments = []
        elif isinstance(element, list):
            arguments = [
                AnnotationArgument(pair.name, self.convert_element_value(pair.value))
                for pair in element
            ]
        else:
            arguments = [AnnotationArgument(None, self.convert_element_value(element))]
        return Annotation(node.name, arguments, position=_position(node))

    def convert_element_value(self, value) -> Expression:
        if isinstance(value, tree.ElementArrayValue):
            return ArrayInitializer([self.convert_element_value(v) for v in value.values or []])
        if isinstance(value, tree.Annotation):
            annotation = self.convert_annotation(value)
            return Literal(f'@{annotation.name}')
        return self.convert_expression(value)

    # =========================================================================
    # TYPES
    # =========================================================================

    def convert_type(self, node) -> TypeNode:
        """Convert a javalang type, or None for `void`."""
        if node is None:
            return VoidType()
        dimensions = len(getattr(node, 'dimensions', None) or [])
        if isinstance(node, tree.BasicType):
            base: TypeNode = PrimitiveType(node.name)
        else:
            base, inner_dimensions = self._convert_reference_type(node)
            dimensions += inner_dimensions
        if dimensions:
            return ArrayType(base, dimensions)
        return base

    def _convert_reference_type(self, node, scope: Optional[ClassType] = None) -> Tuple[ClassType, int]:
        arguments = None
        if node.arguments is not None:
            arguments = [self.convert_type_argument(a) for a in node.arguments]
        current = ClassType(node.name, arguments, scope=scope, position=_position(node))
        if node.sub_type is not None:
            inner, dimensions = self._convert_reference_type(node.sub_type, current)
            return inner, dimensions + len(node.sub_type.dimensions or [])
        return current, 0

    def convert_type_argument(self, node) -> TypeNode:
        pattern = getattr(node, 'pattern_type', None)
        if pattern == '?':
            return WildcardType()
        if pattern in ('extends', 'super'):
            return WildcardType(self.convert_type(node.type), pattern)
        if isinstance(node, tree.TypeArgument):
            return self.convert_type(node.type)
        return self.convert_type(node)

    def convert_type_parameters(self, params) -> List[TypeParameter]:
        return [
            TypeParameter(p.name, [self.convert_type(b) for b in p.extends or []])
            for p in params or []
        ]

    # =========================================================================
    # DECLARATIONS
    # =========================================================================

    def convert_type_declaration(self, node) -> TypeDeclaration:
        position = _position(node)
        modifiers = self.convert_modifiers(node)
        annotations = self.convert_annotations(node.annotations)

        if isinstance(node, tree.ClassDeclaration):
            return ClassDeclaration(
                node.name,
                modifiers,
                annotations,
                self.convert_type_parameters(node.type_parameters),
                extends=[self.convert_type(node.extends)] if node.extends else [],
                implements=[self.convert_type(t) for t in node.implements or []],
                members=self.convert_members(node.body),
                position=position,
            )
        if isinstance(node, tree.InterfaceDeclaration):
            return ClassDeclaration(
                node.name,
                modifiers,
                annotations,
                self.convert_type_parameters(node.type_parameters),
                extends=[self.convert_type(t) for t in node.extends or []],
                members=self.convert_members(node.body),
                is_interface=True,
                position=position,
            )
        if isinstance(node, tree.EnumDeclaration):
            body = node.body
            constants = [
                EnumConstant(
                    c.name,
                    [self.convert_expression(a) for a in c.arguments or []],
                    self.convert_members(c.body) if c.body is not None else None,
                    self.convert_annotations(c.annotations),
                    position=_position(c),
                )
                for c in body.constants or []
            ]
            return EnumDeclaration(
                node.name,
                modifiers,
                annotations,
                implements=[self.convert_type(t) for t in node.implements or []],
                constants=constants,
                members=self.convert_members(body.declarations),
                position=position,
            )
        raise UnsupportedConstructError('type declaration', f'{type(node).__name__} {node.name}')

    def convert_members(self, body) -> List[BodyDeclaration]:
        members: List[BodyDeclaration] = []
        for member in body or []:
            if isinstance(member, list):
                # Initializer blocks arrive as bare statement lists, without `static`.
                block = self.convert_block(member)
                members.append(InitializerDeclaration(block, self._is_static_initializer(block)))
            else:
                members.append(self.convert_member(member))
        return members

    def convert_member(self, node) -> BodyDeclaration:
        position = _position(node)
        if isinstance(node, tree.FieldDeclaration):
            return FieldDeclaration(
                self.convert_type(node.type),
                [self.convert_declarator(d) for d in node.declarators],
                self.convert_modifiers(node),
                self.convert_annotations(node.annotations),
                position=position,
            )
        if isinstance(node, tree.MethodDeclaration):
            return MethodDeclaration(
                node.name,
                self.convert_type(node.return_type),
                [self.convert_parameter(p) for p in node.parameters or []],
                [class_type_from_name(t) for t in node.throws or []],
                self.convert_block(node.body) if node.body is not None else None,
                self.convert_modifiers(node),
                self.convert_annotations(node.annotations),
                self.convert_type_parameters(node.type_parameters),
                position=position,
            )
        if isinstance(node, tree.ConstructorDeclaration):
            return ConstructorDeclaration(
                node.name,
                [self.convert_parameter(p) for p in node.parameters or []],
                [class_type_from_name(t) for t in node.throws or []],
                self.convert_block(node.body),
                self.convert_modifiers(node),
                self.convert_annotations(node.annotations),
                self.convert_type_parameters(node.type_parameters),
                position=position,
            )
        if isinstance(node, tree.TypeDeclaration):
            return self.convert_type_declaration(node)
        raise UnsupportedConstructError('member', type(node).__name__)

    def convert_declarator(self, node) -> VariableDeclarator:
        initializer = node.initializer
        return VariableDeclarator(
            node.name,
            len(node.dimensions or []),
            self.convert_expression(initializer) if initializer is not None else None,
            position=_position(node),
        )

    def convert_parameter(self, node) -> Parameter:
        if isinstance(node, tree.InferredFormalParameter):
            return Parameter(node.name, position=_position(node))
        return Parameter(
            node.name,
            self.convert_type(node.type),
            self.convert_modifiers(node),
            self.convert_annotations(node.annotations),
            is_varargs=bool(getattr(node, 'varargs', False)),
            position=_position(node),
        )

    def convert_local_variable(self, node) -> LocalVariableDeclaration:
        return LocalVariableDeclaration(
            self.convert_type(node.type),
            [self.convert_declarator(d) for d in node.declarators],
            self.convert_modifiers(node),
            self.convert_annotations(node.annotations),
            position=_position(node),
        )

    # =========================================================================
    # STATEMENTS
    # =========================================================================

    def convert_block(self, statements, position: Optional[Position] = None) -> BlockStatement:
        return BlockStatement(
            [self.convert_statement(s) for s in statements or []],
            position=position,
        )

    def convert_statement(self, node) -> Statement:
        stmt = self._convert_statement(node)
        label = getattr(node, 'label', None)
        if label:
            return LabeledStatement(label, stmt, position=stmt.position)
        return stmt

    def _convert_statement(self, node) -> Statement:
        position = _position(node)

        if isinstance(node, tree.LocalVariableDeclaration):
            return self.convert_local_variable(node)
        elif isinstance(node, tree.TypeDeclaration):
            return LocalClassDeclaration(self.convert_type_declaration(node), position=position)
        elif isinstance(node, tree.BlockStatement):
            return self.convert_block(node.statements, position)
        elif isinstance(node, tree.StatementExpression):
            return self.convert_statement_expression(node, position)
        elif isinstance(node, tree.IfStatement):
            return IfStatement(
                self.convert_expression(node.condition),
                self.convert_statement(node.then_statement),
                self.convert_statement(node.else_statement) if node.else_statement is not None else None,
                position=position,
            )
        elif isinstance(node, tree.WhileStatement):
            return WhileStatement(
                self.convert_expression(node.condition),
                self.convert_statement(node.body),
                position=position,
            )
        elif isinstance(node, tree.DoStatement):
            return DoStatement(
                self.convert_expression(node.condition),
                self.convert_statement(node.body),
                position=position,
            )
        elif isinstance(node, tree.ForStatement):
            return self.convert_for_statement(node, position)
        elif isinstance(node, tree.ReturnStatement):
            expression = node.expression
            return ReturnStatement(
                self.convert_expression(expression) if expression is not None else None,
                position=position,
            )
        elif isinstance(node, tree.ThrowStatement):
            return ThrowStatement(self.convert_expression(node.expression), position=position)
        elif isinstance(node, tree.BreakStatement):
            return BreakStatement(node.goto, position=position)
        elif isinstance(node, tree.ContinueStatement):
            return ContinueStatement(node.goto, position=position)
        elif isinstance(node, tree.SwitchStatement):
            return SwitchStatement(
                self.convert_expression(node.expression),
                [self.convert_switch_case(c) for c in node.cases or []],
                position=position,
            )
        elif isinstance(node, tree.TryStatement):
            return self.convert_try_statement(node, position)
        elif isinstance(node, tree.SynchronizedStatement):
            return SynchronizedStatement(
                self.convert_expression(node.lock),
                self.convert_block(node.block),
                position=position,
            )
        elif isinstance(node, tree.AssertStatement):
            value = node.value
            return AssertStatement(
                self.convert_expression(node.condition),
                self.convert_expression(value) if value is not None else None,
                position=position,
            )
        elif type(node) is tree.Statement:
            return EmptyStatement(position=position)

        raise UnsupportedConstructError('statement', type(node).__name__)

    def convert_statement_expression(self, node, position: Optional[Position]) -> Statement:
        expression = node.expression
        if isinstance(expression, tree.ExplicitConstructorInvocation):
            return ExplicitConstructorInvocation(
                True, [self.convert_expression(a) for a in expression.arguments or []], position=position
            )
        if isinstance(expression, tree.SuperConstructorInvocation):
            return ExplicitConstructorInvocation(
                False, [self.convert_expression(a) for a in expression.arguments or []], position=position
            )
        return ExpressionStatement(self.convert_expression(expression), position=position)

    def convert_for_statement(self, node, position: Optional[Position]) -> Statement:
        control = node.control
        body = self.convert_statement(node.body)
        if isinstance(control, tree.EnhancedForControl):
            return ForEachStatement(
                self.convert_local_variable(control.var),
                self.convert_expression(control.iterable),
                body,
                position=position,
            )

        init = control.init
        if isinstance(init, tree.VariableDeclaration):
            converted_init = self.convert_local_variable(init)
        elif init is None:
            converted_init = None
        else:
            items = init if isinstance(init, list) else [init]
            converted_init = [self.convert_expression(e) for e in items]
        condition = control.condition
        return ForStatement(
            converted_init,
            self.convert_expression(condition) if condition is not None else None,
            [self.convert_expression(e) for e in control.update or []],
            body,
            position=position,
        )

    def convert_switch_case(self, node) -> SwitchCase:
        labels = []
        for label in node.case or []:
            if label == 'default' or label is None:
                continue
            if isinstance(label, str):
                labels.append(Name(label))
            else:
                labels.append(self.convert_expression(label))
        return SwitchCase(
            labels,
            [self.convert_statement(s) for s in node.statements or []],
            position=_position(node),
        )

    def convert_try_statement(self, node, position: Optional[Position]) -> TryStatement:
        resources = [
            LocalVariableDeclaration(
                self.convert_type(r.type),
                [VariableDeclarator(r.name, initializer=self.convert_expression(r.value))],
                self.convert_modifiers(r),
                self.convert_annotations(r.annotations),
                position=_position(r),
            )
            for r in node.resources or []
        ]
        catches = []
        for clause in node.catches or []:
            param = clause.parameter
            types = [class_type_from_name(t) for t in param.types]
            param_type = types[0] if len(types) == 1 else UnionType(types)
            catches.append(CatchClause(
                Parameter(param.name, param_type, self.convert_modifiers(param)),
                self.convert_block(clause.block),
                position=_position(clause),
            ))
        finally_block = None
        if node.finally_block is not None:
            finally_block = self.convert_block(node.finally_block)
        return TryStatement(
            self.convert_block(node.block),
            resources,
            catches,
            finally_block,
            position=position,
        )

    # =========================================================================
    # EXPRESSIONS
    # =========================================================================

    def convert_expression(self, node) -> Expression:
        """Convert an expression, applying the selectors and operators javalang
        hangs on primaries (and on parenthesized expressions)."""
        expr = self._convert_expression(node)
        for selector in getattr(node, 'selectors', None) or []:
            expr = self.apply_selector(expr, selector)
        for operator in getattr(node, 'postfix_operators', None) or []:
            expr = UnaryExpression(operator, expr, is_prefix=False)
        for operator in reversed(getattr(node, 'prefix_operators', None) or []):
            expr = UnaryExpression(operator, expr)
        return expr

    def _convert_expression(self, node) -> Expression:
        position = _position(node)

        if isinstance(node, tree.Literal):
            return Literal(node.value, position=position)
        elif isinstance(node, tree.MemberReference):
            if node.qualifier:
                return FieldAccess(_dotted_expression(node.qualifier), node.member, position=position)
            return Name(node.member, position=position)
        elif isinstance(node, tree.MethodInvocation):
            target = _dotted_expression(node.qualifier) if node.qualifier else None
            return MethodCall(
                node.member,
                [self.convert_expression(a) for a in node.arguments or []],
                target,
                [self.convert_type_argument(t) for t in node.type_arguments or []],
                position=position,
            )
        elif isinstance(node, tree.SuperMethodInvocation):
            return MethodCall(
                node.member,
                [self.convert_expression(a) for a in node.arguments or []],
                SuperExpression(),
                position=position,
            )
        elif isinstance(node, tree.SuperMemberReference):
            return FieldAccess(SuperExpression(), node.member, position=position)
        elif isinstance(node, tree.This):
            return ThisExpression(node.qualifier or None, position=position)
        elif isinstance(node, tree.ClassCreator):
            return ObjectCreation(
                self.convert_type(node.type),
                [self.convert_expression(a) for a in node.arguments or []],
                self.convert_members(node.body) if node.body is not None else None,
                position=position,
            )
        elif isinstance(node, tree.ArrayCreator):
            return ArrayCreation(
                self.convert_type(node.type),
                [self.convert_expression(d) if d is not None else None for d in node.dimensions or []],
                self.convert_array_initializer(node.initializer) if node.initializer is not None else None,
                position=position,
            )
        elif isinstance(node, tree.ArrayInitializer):
            return self.convert_array_initializer(node)
        elif isinstance(node, tree.ClassReference):
            return ClassLiteral(self.convert_type(node.type), position=position)
        elif isinstance(node, tree.VoidClassReference):
            return ClassLiteral(VoidType(), position=position)
        elif isinstance(node, tree.Assignment):
            return AssignmentExpression(
                node.type,
                self.convert_expression(node.expressionl),
                self.convert_expression(node.value),
                position=position,
            )
        elif isinstance(node, tree.TernaryExpression):
            return ConditionalExpression(
                self.convert_expression(node.condition),
                self.convert_expression(node.if_true),
                self.convert_expression(node.if_false),
                position=position,
            )
        elif isinstance(node, tree.BinaryOperation):
            if node.operator == 'instanceof':
                return InstanceOfExpression(
                    self.convert_expression(node.operandl),
                    self.convert_type(node.operandr),
                    position=position,
                )
            return BinaryExpression(
                node.operator,
                self.convert_expression(node.operandl),
                self.convert_expression(node.operandr),
                position=position,
            )
        elif isinstance(node, tree.Cast):
            return CastExpression(
                self.convert_type(node.type),
                self.convert_expression(node.expression),
                position=position,
            )
        elif isinstance(node, tree.LambdaExpression):
            body = node.body
            if isinstance(body, list):
                converted_body = self.convert_block(body)
            else:
                converted_body = self.convert_expression(body)
            return LambdaExpression(
                [self.convert_lambda_parameter(p) for p in node.parameters or []],
                converted_body,
                position=position,
            )
        elif isinstance(node, tree.MethodReference):
            target = node.expression
            if isinstance(target, tree.Type):
                converted_target = _dotted_expression(self._type_name(target))
            else:
                converted_target = self.convert_expression(target)
            return MethodReference(converted_target, node.method.member, position=position)

        raise UnsupportedConstructError('expression', type(node).__name__)

    def convert_lambda_parameter(self, node) -> Parameter:
        if isinstance(node, tree.MemberReference):
            return Parameter(node.member, position=_position(node))
        return self.convert_parameter(node)

    def convert_array_initializer(self, node) -> ArrayInitializer:
        return ArrayInitializer(
            [self.convert_expression(v) for v in node.initializers or []],
            position=_position(node),
        )

    def apply_selector(self, target: Expression, selector) -> Expression:
        position = _position(selector)
        if isinstance(selector, tree.MethodInvocation):
            call = MethodCall(
                selector.member,
                [self.convert_expression(a) for a in selector.arguments or []],
                target,
                [self.convert_type_argument(t) for t in selector.type_arguments or []],
                position=position,
            )
            return self._apply_nested_selectors(call, selector)
        if isinstance(selector, tree.MemberReference):
            return self._apply_nested_selectors(FieldAccess(target, selector.member, position=position), selector)
        if isinstance(selector, tree.ArraySelector):
            return ArrayAccess(target, self.convert_expression(selector.index), position=position)
        raise UnsupportedConstructError('selector', type(selector).__name__)

    def _apply_nested_selectors(self, expr: Expression, selector) -> Expression:
        for inner in getattr(selector, 'selectors', None) or []:
            expr = self.apply_selector(expr, inner)
        return expr

    def _type_name(self, node) -> str:
        parts = []
        while node is not None:
            parts.append(node.name)
            node = getattr(node, 'sub_type', None)
        return '.'.join(parts)


# =============================================================================
# ENTRY POINT
# =============================================================================

def parse_java(
    source: str,
    file_path: str = '',
    diagnostics: Optional['TranspilerDiagnostics'] = None,
) -> CompilationUnit:
    """Parse Java source into a compilation unit with comments attached.

    Args:
        source: The Java source text
        file_path: Source path, for error messages and diagnostics
        diagnostics: Collector for front-end warnings

    Returns:
        The compilation unit

    Raises:
        JavaSyntaxError: If javalang cannot tokenize or parse the source
    """
    try:
        java_tree = javalang.parse.parse(source)
    except javalang.parser.JavaSyntaxError as e:
        at = getattr(e, 'at', None)
        position = getattr(at, 'position', None)
        line = position.line if position is not None else None
        description = getattr(e, 'description', None) or str(e) or 'syntax error'
        raise JavaSyntaxError(description, line=line, unit=file_path or None) from e
    except javalang.tokenizer.LexerError as e:
        raise JavaSyntaxError(str(e) or 'lexer error', unit=file_path or None) from e

    unit = JavaTreeConverter(diagnostics, file_path, source).convert_unit(java_tree)
    return attach_comments(unit, source)
