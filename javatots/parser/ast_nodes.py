"""
AST node definitions for Java compilation units.

This module contains all the dataclasses representing nodes in the tree that
the Java front end produces and the transform passes rewrite in place before
the TypeScript code generator renders it.

Every node carries three keyword-only metadata fields that take no part in
equality: ``position`` (first token of the node), ``comment`` (the comment
directly preceding the node) and ``orphan_comments`` (comments inside the
node that could not be attached to any child).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Union


# =============================================================================
# METADATA
# =============================================================================

@dataclass(frozen=True, order=True)
class Position:
    """1-based line and column of a node or comment in the Java source."""
    line: int
    column: int


@dataclass
class Comment:
    """A source comment. ``content`` excludes the comment delimiters."""
    content: str
    kind: str = 'line'  # 'line', 'block' or 'javadoc'
    position: Optional[Position] = None


# Fields every node carries that are not part of the tree structure.
METADATA_FIELDS = frozenset({'position', 'comment', 'orphan_comments'})


# =============================================================================
# BASE NODE
# =============================================================================

@dataclass
class ASTNode:
    """Base class for all AST nodes."""
    position: Optional[Position] = field(default=None, kw_only=True, compare=False, repr=False)
    comment: Optional[Comment] = field(default=None, kw_only=True, compare=False, repr=False)
    orphan_comments: List[Comment] = field(
        default_factory=list, kw_only=True, compare=False, repr=False
    )


class Modifier(Enum):
    """The declaration modifiers the code generator knows how to place."""
    PUBLIC = 'public'
    PROTECTED = 'protected'
    PRIVATE = 'private'
    ABSTRACT = 'abstract'
    STATIC = 'static'
    FINAL = 'final'


class TypeMarker(Enum):
    """Tags a transform pass can leave on a type reference for the generator."""
    OR_NULL = 'or_null'  # Optional<T>, rendered as `T | null`


# =============================================================================
# TYPE NODES
# =============================================================================

@dataclass
class TypeNode(ASTNode):
    """Base class for type references."""
    pass


@dataclass
class ClassType(TypeNode):
    """A named, possibly generic, possibly qualified type reference.

    ``type_arguments`` is None when the source has no angle brackets and an
    empty list for the diamond ``<>``.
    """
    name: str
    type_arguments: Optional[List[TypeNode]] = None
    scope: Optional['ClassType'] = None
    marker: Optional[TypeMarker] = None

    @property
    def qualified_name(self) -> str:
        if self.scope is not None:
            return f'{self.scope.qualified_name}.{self.name}'
        return self.name


@dataclass
class PrimitiveType(TypeNode):
    """A Java primitive type (int, boolean, char, ...)."""
    name: str


@dataclass
class ArrayType(TypeNode):
    """An array of ``element_type`` nested ``dimensions`` deep."""
    element_type: TypeNode
    dimensions: int = 1


@dataclass
class UnionType(TypeNode):
    """Union of reference types, only produced by multi-catch parameters."""
    elements: List[TypeNode] = field(default_factory=list)


@dataclass
class VoidType(TypeNode):
    """The `void` return type."""
    pass


@dataclass
class WildcardType(TypeNode):
    """A `?`, `? extends T` or `? super T` type argument."""
    bound: Optional[TypeNode] = None
    kind: Optional[str] = None  # 'extends' or 'super'


@dataclass
class TypeParameter(ASTNode):
    """A declared type variable with optional bounds."""
    name: str
    bounds: List[TypeNode] = field(default_factory=list)


# =============================================================================
# ANNOTATIONS
# =============================================================================

@dataclass
class AnnotationArgument(ASTNode):
    """A single annotation argument; ``name`` is None for the value shorthand."""
    name: Optional[str]
    value: 'Expression'


@dataclass
class Annotation(ASTNode):
    """Annotation: @Name or @Name(value) or @Name(key=value)."""
    name: str
    arguments: List[AnnotationArgument] = field(default_factory=list)

    @property
    def simple_name(self) -> str:
        return self.name.rsplit('.', 1)[-1]


# =============================================================================
# EXPRESSIONS
# =============================================================================

@dataclass
class Expression(ASTNode):
    """Base class for expressions."""
    pass


@dataclass
class Name(Expression):
    """A simple identifier reference."""
    identifier: str


@dataclass
class Literal(Expression):
    """A literal, stored as its Java source text."""
    value: str


@dataclass
class ThisExpression(Expression):
    """`this`, optionally qualified (`Outer.this`)."""
    qualifier: Optional[str] = None


@dataclass
class SuperExpression(Expression):
    """`super` used as the target of a field access or method call."""
    pass


@dataclass
class FieldAccess(Expression):
    """`target.name`."""
    target: Expression
    name: str


@dataclass
class MethodCall(Expression):
    """`target.name(arguments)`; ``target`` is None for unqualified calls."""
    name: str
    arguments: List[Expression] = field(default_factory=list)
    target: Optional[Expression] = None
    type_arguments: List[TypeNode] = field(default_factory=list)


@dataclass
class ObjectCreation(Expression):
    """`new Type(arguments)`, with ``body`` set for anonymous classes."""
    type: ClassType
    arguments: List[Expression] = field(default_factory=list)
    body: Optional[List['BodyDeclaration']] = None


@dataclass
class ArrayInitializer(Expression):
    """`{a, b, c}`."""
    values: List[Expression] = field(default_factory=list)


@dataclass
class ArrayCreation(Expression):
    """`new T[n][]` or `new T[] {...}`.

    ``dimensions`` holds one entry per bracket pair, None for an empty pair.
    """
    element_type: TypeNode
    dimensions: List[Optional[Expression]] = field(default_factory=list)
    initializer: Optional[ArrayInitializer] = None


@dataclass
class ArrayAccess(Expression):
    """`target[index]`."""
    target: Expression
    index: Expression


@dataclass
class BinaryExpression(Expression):
    """Binary operation: a + b, a == b, etc."""
    operator: str
    left: Expression
    right: Expression


@dataclass
class UnaryExpression(Expression):
    """Unary operation: !a, -a, ++a, a--, etc."""
    operator: str
    operand: Expression
    is_prefix: bool = True


@dataclass
class AssignmentExpression(Expression):
    """Assignment: a = b, a += b, etc."""
    operator: str
    target: Expression
    value: Expression


@dataclass
class ConditionalExpression(Expression):
    """Ternary operator: condition ? a : b."""
    condition: Expression
    then_expression: Expression
    else_expression: Expression


@dataclass
class CastExpression(Expression):
    """`(Type) expression`."""
    type: TypeNode
    expression: Expression


@dataclass
class InstanceOfExpression(Expression):
    """`expression instanceof Type`."""
    expression: Expression
    type: TypeNode


@dataclass
class LambdaExpression(Expression):
    """`(params) -> body`; ``body`` is an expression or a block."""
    parameters: List['Parameter'] = field(default_factory=list)
    body: Union[Expression, 'BlockStatement', None] = None


@dataclass
class MethodReference(Expression):
    """`target::name`."""
    target: Expression
    name: str


@dataclass
class ClassLiteral(Expression):
    """`Type.class`."""
    type: TypeNode


# =============================================================================
# STATEMENTS
# =============================================================================

@dataclass
class Statement(ASTNode):
    """Base class for statements."""
    pass


@dataclass
class BlockStatement(Statement):
    """A braced sequence of statements."""
    statements: List[Statement] = field(default_factory=list)


@dataclass
class VariableDeclarator(ASTNode):
    """One declared variable; ``dimensions`` counts C-style `[]` after the name."""
    name: str
    dimensions: int = 0
    initializer: Optional[Expression] = None


def variable_type(base: TypeNode, declarator: VariableDeclarator) -> TypeNode:
    """The full type of a declarator, folding C-style `int a[]` into the base type."""
    if not declarator.dimensions:
        return base
    if isinstance(base, ArrayType):
        return ArrayType(base.element_type, base.dimensions + declarator.dimensions)
    return ArrayType(base, declarator.dimensions)


@dataclass
class LocalVariableDeclaration(Statement):
    """Local variable declaration, possibly declaring several variables."""
    type: TypeNode
    variables: List[VariableDeclarator] = field(default_factory=list)
    modifiers: List[Modifier] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)


@dataclass
class ExpressionStatement(Statement):
    """An expression evaluated for its side effects."""
    expression: Expression


@dataclass
class IfStatement(Statement):
    """If statement with optional else branch."""
    condition: Expression
    then_statement: Statement
    else_statement: Optional[Statement] = None


@dataclass
class WhileStatement(Statement):
    """While loop."""
    condition: Expression
    body: Statement


@dataclass
class DoStatement(Statement):
    """Do-while loop."""
    condition: Expression
    body: Statement


@dataclass
class ForStatement(Statement):
    """Classic three-clause for loop."""
    init: Union[LocalVariableDeclaration, List[Expression], None] = None
    condition: Optional[Expression] = None
    update: List[Expression] = field(default_factory=list)
    body: Optional[Statement] = None


@dataclass
class ForEachStatement(Statement):
    """`for (T x : iterable)`."""
    variable: LocalVariableDeclaration
    iterable: Expression
    body: Statement


@dataclass
class ReturnStatement(Statement):
    """Return statement."""
    expression: Optional[Expression] = None


@dataclass
class ThrowStatement(Statement):
    """Throw statement."""
    expression: Expression


@dataclass
class BreakStatement(Statement):
    """Break statement."""
    label: Optional[str] = None


@dataclass
class ContinueStatement(Statement):
    """Continue statement."""
    label: Optional[str] = None


@dataclass
class EmptyStatement(Statement):
    """A lone semicolon."""
    pass


@dataclass
class SwitchCase(ASTNode):
    """One `case` group; empty ``labels`` means `default`."""
    labels: List[Expression] = field(default_factory=list)
    statements: List[Statement] = field(default_factory=list)


@dataclass
class SwitchStatement(Statement):
    """Switch statement."""
    selector: Expression
    cases: List[SwitchCase] = field(default_factory=list)


@dataclass
class CatchClause(ASTNode):
    """A catch clause; the parameter type is a UnionType for multi-catch."""
    parameter: 'Parameter'
    body: BlockStatement


@dataclass
class TryStatement(Statement):
    """Try statement, with optional resources, catch clauses and finally block."""
    block: BlockStatement
    resources: List[LocalVariableDeclaration] = field(default_factory=list)
    catches: List[CatchClause] = field(default_factory=list)
    finally_block: Optional[BlockStatement] = None


@dataclass
class SynchronizedStatement(Statement):
    """`synchronized (lock) { ... }`."""
    lock: Expression
    body: BlockStatement


@dataclass
class AssertStatement(Statement):
    """`assert condition : message`."""
    condition: Expression
    message: Optional[Expression] = None


@dataclass
class LabeledStatement(Statement):
    """`label: statement`."""
    label: str
    statement: Statement


@dataclass
class ExplicitConstructorInvocation(Statement):
    """`super(...)` or `this(...)` as the first statement of a constructor."""
    is_this: bool = False
    arguments: List[Expression] = field(default_factory=list)


@dataclass
class LocalClassDeclaration(Statement):
    """A class declared inside a method body."""
    declaration: 'TypeDeclaration'


# =============================================================================
# DECLARATIONS
# =============================================================================

@dataclass
class Parameter(ASTNode):
    """A method, constructor, catch or lambda parameter.

    ``type`` is None for implicitly typed lambda parameters.
    """
    name: str
    type: Optional[TypeNode] = None
    modifiers: List[Modifier] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    is_varargs: bool = False


@dataclass
class BodyDeclaration(ASTNode):
    """Base class for members of a type body."""
    pass


@dataclass
class FieldDeclaration(BodyDeclaration):
    """Field declaration, possibly declaring several variables."""
    type: TypeNode
    variables: List[VariableDeclarator] = field(default_factory=list)
    modifiers: List[Modifier] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)


@dataclass
class MethodDeclaration(BodyDeclaration):
    """Method declaration; ``body`` is None for abstract and interface methods."""
    name: str
    return_type: TypeNode = field(default_factory=VoidType)
    parameters: List[Parameter] = field(default_factory=list)
    throws: List[TypeNode] = field(default_factory=list)
    body: Optional[BlockStatement] = None
    modifiers: List[Modifier] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    type_parameters: List[TypeParameter] = field(default_factory=list)


@dataclass
class ConstructorDeclaration(BodyDeclaration):
    """Constructor declaration."""
    name: str
    parameters: List[Parameter] = field(default_factory=list)
    throws: List[TypeNode] = field(default_factory=list)
    body: BlockStatement = field(default_factory=BlockStatement)
    modifiers: List[Modifier] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    type_parameters: List[TypeParameter] = field(default_factory=list)


@dataclass
class InitializerDeclaration(BodyDeclaration):
    """An instance or static initializer block."""
    body: BlockStatement
    is_static: bool = False


@dataclass
class TypeDeclaration(BodyDeclaration):
    """Base class for class, interface and enum declarations."""
    pass


@dataclass
class ClassDeclaration(TypeDeclaration):
    """Class or interface declaration."""
    name: str
    modifiers: List[Modifier] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    type_parameters: List[TypeParameter] = field(default_factory=list)
    extends: List[ClassType] = field(default_factory=list)
    implements: List[ClassType] = field(default_factory=list)
    members: List[BodyDeclaration] = field(default_factory=list)
    is_interface: bool = False


@dataclass
class EnumConstant(ASTNode):
    """Enum constant, with constructor arguments or a class body."""
    name: str
    arguments: List[Expression] = field(default_factory=list)
    body: Optional[List[BodyDeclaration]] = None
    annotations: List[Annotation] = field(default_factory=list)


@dataclass
class EnumDeclaration(TypeDeclaration):
    """Enum declaration."""
    name: str
    modifiers: List[Modifier] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    implements: List[ClassType] = field(default_factory=list)
    constants: List[EnumConstant] = field(default_factory=list)
    members: List[BodyDeclaration] = field(default_factory=list)


# =============================================================================
# TOP-LEVEL NODES
# =============================================================================

@dataclass
class PackageDeclaration(ASTNode):
    """`package a.b.c;`."""
    name: str
    annotations: List[Annotation] = field(default_factory=list)


@dataclass
class ImportDeclaration(ASTNode):
    """An import declaration.

    ``name`` is a Java qualified name unless ``encoded`` is set, in which case
    it is a module specifier in dotted form (see ``imports.specifier``) that
    only the import renderer decodes.
    """
    name: str
    is_static: bool = False
    is_asterisk: bool = False
    encoded: bool = False

    @property
    def qualifier(self) -> str:
        """Everything before the last dot."""
        return self.name.rpartition('.')[0]

    @property
    def identifier(self) -> str:
        """The last dotted segment."""
        return self.name.rpartition('.')[2]


@dataclass
class CompilationUnit(ASTNode):
    """Root node representing an entire Java source file."""
    package: Optional[PackageDeclaration] = None
    imports: List[ImportDeclaration] = field(default_factory=list)
    types: List[TypeDeclaration] = field(default_factory=list)
