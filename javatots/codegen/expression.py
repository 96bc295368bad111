"""
Expression generation for Java to TypeScript transpilation.

This module handles the generation of TypeScript code from expression AST
nodes. The front end drops source parentheses, so every operand is
re-parenthesized from operator precedence.
"""

import re
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext
    from .type_converter import TypeConverter
    from .statement import StatementGenerator

from .base import BaseGenerator
from ..errors import UnsupportedConstructError
from ..parser.ast_nodes import (
    Annotation,
    ArrayAccess,
    ArrayCreation,
    ArrayInitializer,
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    CastExpression,
    ClassLiteral,
    ConditionalExpression,
    Expression,
    FieldAccess,
    InstanceOfExpression,
    LambdaExpression,
    Literal,
    MethodCall,
    MethodReference,
    Name,
    ObjectCreation,
    SuperExpression,
    ThisExpression,
    TypeNode,
    UnaryExpression,
)


# =============================================================================
# PRECEDENCE
# =============================================================================

PREC_ASSIGNMENT = 1
PREC_CONDITIONAL = 2
PREC_UNARY = 14
PREC_POSTFIX = 15
PREC_PRIMARY = 16

BINARY_PRECEDENCE = {
    '||': 3,
    '&&': 4,
    '|': 5,
    '^': 6,
    '&': 7,
    '==': 8, '!=': 8,
    '<': 9, '>': 9, '<=': 9, '>=': 9, 'instanceof': 9,
    '<<': 10, '>>': 10, '>>>': 10,
    '+': 11, '-': 11,
    '*': 12, '/': 12, '%': 12,
}

# Java equality is reference equality; TypeScript's strict operators match it.
OPERATOR_MAP = {
    '==': '===',
    '!=': '!==',
}

_INTEGER_SUFFIX = re.compile(r'^(0[xX][0-9a-fA-F_]+|0[bB][01_]+|[0-9][0-9_]*)[lL]$')
_FLOAT_SUFFIX = re.compile(r'^([0-9][0-9_]*\.?[0-9_]*(?:[eE][+-]?[0-9]+)?|\.[0-9_]+(?:[eE][+-]?[0-9]+)?)[fFdD]$')
_LEGACY_OCTAL = re.compile(r'^0([0-7_]+)$')


class ExpressionGenerator(BaseGenerator):
    """
    Generates TypeScript code from Java expression AST nodes.

    This class handles all expression types including:
    - Literals and names
    - Binary, unary, assignment and conditional operations
    - Member access, array access and method calls
    - Object and array creation
    - Casts, instanceof, lambdas and method references
    """

    def __init__(
        self,
        ctx: 'CodeGenerationContext',
        type_converter: 'TypeConverter',
    ):
        """
        Initialize the expression generator.

        Args:
            ctx: The code generation context
            type_converter: The type converter
        """
        super().__init__(ctx)
        self._type_converter = type_converter
        self._statements: Optional['StatementGenerator'] = None

    def set_statement_generator(self, statements: 'StatementGenerator') -> None:
        """Attach the statement generator used for lambda block bodies."""
        self._statements = statements

    # =========================================================================
    # MAIN DISPATCH
    # =========================================================================

    def generate(self, expr: Expression) -> str:
        """Generate TypeScript code from an expression AST node.

        Args:
            expr: The expression AST node

        Returns:
            The TypeScript code string
        """
        if isinstance(expr, Literal):
            return self.generate_literal(expr)
        elif isinstance(expr, Name):
            return expr.identifier
        elif isinstance(expr, ThisExpression):
            return 'this'
        elif isinstance(expr, SuperExpression):
            return 'super'
        elif isinstance(expr, FieldAccess):
            return f'{self._operand(expr.target, PREC_POSTFIX)}.{expr.name}'
        elif isinstance(expr, MethodCall):
            return self.generate_method_call(expr)
        elif isinstance(expr, BinaryExpression):
            return self.generate_binary_expression(expr)
        elif isinstance(expr, UnaryExpression):
            return self.generate_unary_expression(expr)
        elif isinstance(expr, AssignmentExpression):
            target = self._operand(expr.target, PREC_UNARY)
            value = self._operand(expr.value, PREC_ASSIGNMENT)
            return f'{target} {expr.operator} {value}'
        elif isinstance(expr, ConditionalExpression):
            condition = self._operand(expr.condition, PREC_CONDITIONAL + 1)
            then_expr = self._operand(expr.then_expression, PREC_ASSIGNMENT)
            else_expr = self._operand(expr.else_expression, PREC_CONDITIONAL)
            return f'{condition} ? {then_expr} : {else_expr}'
        elif isinstance(expr, CastExpression):
            return f'({self._operand(expr.expression, PREC_UNARY)} as {self._type_converter.convert(expr.type)})'
        elif isinstance(expr, InstanceOfExpression):
            return self.generate_type_test(expr.expression, expr.type)
        elif isinstance(expr, ArrayAccess):
            return f'{self._operand(expr.target, PREC_POSTFIX)}[{self.generate(expr.index)}]'
        elif isinstance(expr, ObjectCreation):
            return self.generate_object_creation(expr)
        elif isinstance(expr, ArrayCreation):
            return self.generate_array_creation(expr)
        elif isinstance(expr, ArrayInitializer):
            return self.generate_array_initializer(expr)
        elif isinstance(expr, LambdaExpression):
            return self.generate_lambda(expr)
        elif isinstance(expr, MethodReference):
            return self.generate_method_reference(expr)
        elif isinstance(expr, ClassLiteral):
            return self._type_converter.runtime_name(expr.type)

        raise UnsupportedConstructError('expression', type(expr).__name__)

    # =========================================================================
    # PRECEDENCE HELPERS
    # =========================================================================

    def precedence(self, expr: Expression) -> int:
        """Binding strength of an expression's outermost operator."""
        if isinstance(expr, BinaryExpression):
            return BINARY_PRECEDENCE.get(expr.operator, PREC_UNARY)
        if isinstance(expr, InstanceOfExpression):
            return BINARY_PRECEDENCE['instanceof']
        if isinstance(expr, UnaryExpression):
            return PREC_UNARY if expr.is_prefix else PREC_POSTFIX
        if isinstance(expr, AssignmentExpression):
            return PREC_ASSIGNMENT
        if isinstance(expr, ConditionalExpression):
            return PREC_CONDITIONAL
        if isinstance(expr, LambdaExpression):
            return PREC_ASSIGNMENT
        return PREC_PRIMARY

    def _operand(self, expr: Expression, minimum: int) -> str:
        """Render ``expr``, parenthesized if it binds looser than ``minimum``."""
        code = self.generate(expr)
        if self.precedence(expr) < minimum:
            return f'({code})'
        return code

    # =========================================================================
    # LITERALS
    # =========================================================================

    def generate_literal(self, lit: Literal) -> str:
        """Generate a literal, dropping Java-only numeric suffixes."""
        value = lit.value
        match = _INTEGER_SUFFIX.match(value)
        if match:
            return match.group(1)
        if not value.lower().startswith('0x'):
            match = _FLOAT_SUFFIX.match(value)
            if match:
                return match.group(1)
        match = _LEGACY_OCTAL.match(value)
        if match:
            return f'0o{match.group(1)}'
        return value

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def generate_binary_expression(self, expr: BinaryExpression) -> str:
        """Generate a binary operation, mapping Java equality to strict equality."""
        prec = self.precedence(expr)
        left = self._operand(expr.left, prec)
        right = self._operand(expr.right, prec + 1)
        operator = OPERATOR_MAP.get(expr.operator, expr.operator)
        return f'{left} {operator} {right}'

    def generate_unary_expression(self, expr: UnaryExpression) -> str:
        """Generate a prefix or postfix unary operation."""
        if expr.is_prefix:
            operand = self._operand(expr.operand, PREC_UNARY)
            # Keep `- -x` and `+ +x` from fusing into `--x` and `++x`.
            if operand.startswith(expr.operator[-1]) and expr.operator in ('-', '+'):
                return f'{expr.operator}({operand})'
            return f'{expr.operator}{operand}'
        return f'{self._operand(expr.operand, PREC_POSTFIX)}{expr.operator}'

    def generate_type_test(self, operand: Expression, type_node: TypeNode) -> str:
        """Generate an instanceof test, using typeof for scalar types."""
        runtime_name = self._type_converter.runtime_name(type_node)
        if self._type_converter.is_typeof_type(type_node):
            return f"typeof {self._operand(operand, PREC_UNARY)} === '{runtime_name}'"
        return f'{self._operand(operand, BINARY_PRECEDENCE["instanceof"])} instanceof {runtime_name}'

    # =========================================================================
    # CALLS AND CREATION
    # =========================================================================

    def generate_arguments(self, args: List[Expression]) -> str:
        """Generate a comma-separated argument list."""
        return ', '.join(self.generate(arg) for arg in args)

    def generate_method_call(self, call: MethodCall) -> str:
        """Generate a method call."""
        args = self.generate_arguments(call.arguments)
        type_args = ''
        if call.type_arguments:
            type_args = '<' + ', '.join(self._type_converter.convert(t) for t in call.type_arguments) + '>'
        if call.target is None:
            return f'{call.name}{type_args}({args})'
        return f'{self._operand(call.target, PREC_POSTFIX)}.{call.name}{type_args}({args})'

    def generate_object_creation(self, expr: ObjectCreation) -> str:
        """Generate `new T(args)`.

        Raises:
            UnsupportedConstructError: For anonymous class bodies
        """
        if expr.body is not None:
            raise UnsupportedConstructError(
                'anonymous class',
                f'new {expr.type.qualified_name}() {{ ... }} at line {self._line(expr)}',
            )
        type_name = self._type_converter.convert(expr.type)
        if expr.type.type_arguments == []:
            # Diamond: let TypeScript infer the arguments.
            type_name = expr.type.qualified_name
        return f'new {type_name}({self.generate_arguments(expr.arguments)})'

    def generate_array_initializer(self, expr: ArrayInitializer) -> str:
        """Generate an array literal."""
        return f'[{self.generate_arguments(expr.values)}]'

    def generate_array_creation(self, expr: ArrayCreation) -> str:
        """Generate array creation.

        `new int[] {1, 2}` becomes `[1, 2]`; `new int[n]` becomes
        `new Array<number>(n)`; `new int[n][m]` nests `Array.from` so every
        inner array is allocated as in Java.
        """
        if expr.initializer is not None:
            return self.generate_array_initializer(expr.initializer)
        return self._sized_array(expr.element_type, expr.dimensions)

    def _sized_array(self, element_type: TypeNode, dimensions: List[Optional[Expression]]) -> str:
        element = self._type_converter.convert(element_type)
        if ' | ' in element:
            element = f'({element})'
        size = dimensions[0]
        inner_dims = dimensions[1:]
        inner_type = element + '[]' * len(inner_dims)
        if size is None:
            return f'new Array<{inner_type}>()'
        length = self.generate(size)
        if inner_dims and inner_dims[0] is not None:
            inner = self._sized_array(element_type, inner_dims)
            return f'Array.from({{length: {length}}}, () => {inner})'
        return f'new Array<{inner_type}>({length})'

    # =========================================================================
    # FUNCTIONS
    # =========================================================================

    def generate_lambda(self, expr: LambdaExpression) -> str:
        """Generate an arrow function."""
        params = []
        for param in expr.parameters:
            if param.type is None:
                params.append(param.name)
            else:
                params.append(f'{param.name}: {self._type_converter.convert(param.type)}')
        head = f'({", ".join(params)}) =>'

        if isinstance(expr.body, BlockStatement):
            if self._statements is None:
                raise UnsupportedConstructError('lambda', 'block body without a statement generator')
            with self._ctx.method_body():
                body = self._statements.generate_block(expr.body, inline=True)
            return f'{head} {body}'

        body = self._operand(expr.body, PREC_ASSIGNMENT)
        return f'{head} {body}'

    def generate_method_reference(self, expr: MethodReference) -> str:
        """Generate a method reference as a function value."""
        target = self._operand(expr.target, PREC_POSTFIX)
        if expr.name == 'new':
            return f'(...args) => new {target}(...args)'
        if isinstance(expr.target, ThisExpression):
            return f'this.{expr.name}.bind(this)'
        return f'{target}.{expr.name}'

    # =========================================================================
    # ANNOTATIONS
    # =========================================================================

    def generate_annotation(self, annotation: Annotation) -> str:
        """Render an annotation as its Java source text, which is also decorator syntax."""
        if not annotation.arguments:
            return f'@{annotation.name}'
        args = []
        for arg in annotation.arguments:
            value = self.generate(arg.value)
            args.append(value if arg.name is None else f'{arg.name} = {value}')
        return f'@{annotation.name}({", ".join(args)})'
