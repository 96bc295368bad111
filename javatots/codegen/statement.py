"""
Statement generation for Java to TypeScript transpilation.

This module handles the generation of TypeScript code from Java statement
AST nodes, including control flow, variable declarations, and the
reshaping of constructs TypeScript lacks (multi-catch, for-each with a
declared type, try-with-resources).
"""

from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext
    from .expression import ExpressionGenerator
    from .type_converter import TypeConverter
    from .declaration import DeclarationGenerator

from .base import BaseGenerator
from .modifiers import ModifierContext, render_modifiers
from ..errors import GeneratorStateError, UnsupportedConstructError
from ..parser.ast_nodes import (
    AssertStatement,
    BlockStatement,
    BreakStatement,
    CatchClause,
    ClassType,
    ContinueStatement,
    DoStatement,
    EmptyStatement,
    ExplicitConstructorInvocation,
    ExpressionStatement,
    ForEachStatement,
    ForStatement,
    IfStatement,
    LabeledStatement,
    LocalClassDeclaration,
    LocalVariableDeclaration,
    Modifier,
    Name,
    ReturnStatement,
    Statement,
    SwitchStatement,
    SynchronizedStatement,
    ThrowStatement,
    TryStatement,
    TypeNode,
    UnionType,
    VariableDeclarator,
    WhileStatement,
    variable_type,
)


# Catch types that match every exception a TypeScript program can throw.
CATCH_ALL_TYPES = frozenset({'Throwable', 'Exception', 'java.lang.Throwable', 'java.lang.Exception'})


@dataclass
class CatchBranch:
    """One `instanceof` arm of a lowered catch chain."""
    type: Optional[TypeNode]  # None matches everything
    name: str
    body: BlockStatement


class StatementGenerator(BaseGenerator):
    """
    Generates TypeScript code from Java statement AST nodes.

    This class handles all statement types including:
    - Blocks (groups of statements)
    - Local variable declarations
    - Control flow (if, for, for-each, while, do-while, switch)
    - Returns, throws, breaks, continues
    - Try/catch/finally, with multi-catch lowered to an instanceof chain
    """

    def __init__(
        self,
        ctx: 'CodeGenerationContext',
        expr_generator: 'ExpressionGenerator',
        type_converter: 'TypeConverter',
    ):
        """
        Initialize the statement generator.

        Args:
            ctx: The code generation context
            expr_generator: The expression generator
            type_converter: The type converter
        """
        super().__init__(ctx)
        self._expr = expr_generator
        self._type_converter = type_converter
        self._declarations: Optional['DeclarationGenerator'] = None

    def set_declaration_generator(self, declarations: 'DeclarationGenerator') -> None:
        """Attach the declaration generator used for local classes."""
        self._declarations = declarations

    # =========================================================================
    # MAIN DISPATCH
    # =========================================================================

    def generate(self, stmt: Statement) -> str:
        """Generate TypeScript code from a statement AST node.

        Args:
            stmt: The statement AST node

        Returns:
            The TypeScript code string, including the statement's comment
        """
        return self.with_comment(stmt, self._generate(stmt))

    def _generate(self, stmt: Statement) -> str:
        if isinstance(stmt, BlockStatement):
            return self.generate_block(stmt)
        elif isinstance(stmt, LocalVariableDeclaration):
            return f'{self.indent()}{self.generate_local_variable_declaration(stmt)};'
        elif isinstance(stmt, ExpressionStatement):
            return f'{self.indent()}{self._expr.generate(stmt.expression)};'
        elif isinstance(stmt, IfStatement):
            return self.generate_if_statement(stmt)
        elif isinstance(stmt, ForStatement):
            return self.generate_for_statement(stmt)
        elif isinstance(stmt, ForEachStatement):
            return self.generate_for_each_statement(stmt)
        elif isinstance(stmt, WhileStatement):
            condition = self._expr.generate(stmt.condition)
            return f'{self.indent()}while ({condition}) {self._generate_body(stmt.body)}'
        elif isinstance(stmt, DoStatement):
            condition = self._expr.generate(stmt.condition)
            return f'{self.indent()}do {self._generate_body(stmt.body)} while ({condition});'
        elif isinstance(stmt, ReturnStatement):
            if stmt.expression is None:
                return f'{self.indent()}return;'
            return f'{self.indent()}return {self._expr.generate(stmt.expression)};'
        elif isinstance(stmt, ThrowStatement):
            return f'{self.indent()}throw {self._expr.generate(stmt.expression)};'
        elif isinstance(stmt, BreakStatement):
            label = f' {stmt.label}' if stmt.label else ''
            return f'{self.indent()}break{label};'
        elif isinstance(stmt, ContinueStatement):
            label = f' {stmt.label}' if stmt.label else ''
            return f'{self.indent()}continue{label};'
        elif isinstance(stmt, EmptyStatement):
            return f'{self.indent()};'
        elif isinstance(stmt, SwitchStatement):
            return self.generate_switch_statement(stmt)
        elif isinstance(stmt, TryStatement):
            return self.generate_try_statement(stmt)
        elif isinstance(stmt, SynchronizedStatement):
            # Single-threaded target: the lock expression has no meaning.
            return self.generate_block(stmt.body)
        elif isinstance(stmt, AssertStatement):
            args = [self._expr.generate(stmt.condition)]
            if stmt.message is not None:
                args.append(self._expr.generate(stmt.message))
            return f'{self.indent()}console.assert({", ".join(args)});'
        elif isinstance(stmt, LabeledStatement):
            inner = self.generate(stmt.statement).lstrip()
            return f'{self.indent()}{stmt.label}: {inner}'
        elif isinstance(stmt, ExplicitConstructorInvocation):
            return self.generate_constructor_invocation(stmt)
        elif isinstance(stmt, LocalClassDeclaration):
            if self._declarations is None:
                raise UnsupportedConstructError('local class', 'no declaration generator attached')
            return self._declarations.generate_type_declaration(stmt.declaration)

        raise UnsupportedConstructError('statement', type(stmt).__name__)

    # =========================================================================
    # BLOCKS
    # =========================================================================

    def generate_block(self, block: BlockStatement, inline: bool = False) -> str:
        """Generate TypeScript code for a block of statements.

        Args:
            block: The block
            inline: If True, the opening brace is not indented, for blocks that
                continue a line (`if (x) {`, `() => {`)
        """
        opener = '{' if inline else f'{self.indent()}{{'
        self.indent_level += 1
        lines = self.render_children(block, block.statements, self.generate)
        self.indent_level -= 1
        if not lines:
            return f'{opener}\n{self.indent()}}}' if block.orphan_comments else f'{opener}}}'
        return '\n'.join([opener] + lines + [f'{self.indent()}}}'])

    def _generate_body(self, body: Statement) -> str:
        """Generate a loop or branch body, wrapping a single statement in braces."""
        if isinstance(body, BlockStatement):
            return self.generate_block(body, inline=True)
        return self.generate_block(BlockStatement([body]), inline=True)

    # =========================================================================
    # VARIABLE DECLARATIONS
    # =========================================================================

    def generate_local_variable_declaration(self, decl: LocalVariableDeclaration) -> str:
        """Generate `let`/`const` declarations, without the trailing semicolon.

        Raises:
            GeneratorStateError: If called outside a method body
        """
        if not self._ctx.in_method:
            raise GeneratorStateError(
                'local variable',
                f'declared outside a method body at line {self._line(decl)}',
            )
        keyword = 'const' if Modifier.FINAL in decl.modifiers else 'let'
        modifiers = render_modifiers(decl.modifiers, ModifierContext.LOCAL)
        # Locals cannot be decorated; annotations survive as a comment.
        annotations = ''.join(
            f'/* {self._expr.generate_annotation(a)} */ ' for a in decl.annotations
        )
        with self._ctx.declaring(decl.type):
            variables = ', '.join(self.generate_variable(var) for var in decl.variables)
        return f'{annotations}{keyword} {modifiers}{variables}'

    def generate_variable(self, var: VariableDeclarator) -> str:
        """Generate `name: type = init` against the ambient declared type."""
        type_str = self._type_converter.convert(variable_type(self._ctx.declared_type, var))
        code = f'{var.name}: {type_str}'
        if var.initializer is not None:
            code += f' = {self._expr.generate(var.initializer)}'
        return code

    # =========================================================================
    # CONTROL FLOW
    # =========================================================================

    def generate_if_statement(self, stmt: IfStatement) -> str:
        """Generate an if statement, keeping `else if` chains flat."""
        code = f'{self.indent()}if ({self._expr.generate(stmt.condition)}) {self._generate_body(stmt.then_statement)}'
        else_stmt = stmt.else_statement
        if else_stmt is None:
            return code
        if isinstance(else_stmt, IfStatement) and else_stmt.comment is None:
            return f'{code} else {self.generate_if_statement(else_stmt).lstrip()}'
        return f'{code} else {self._generate_body(else_stmt)}'

    def generate_for_statement(self, stmt: ForStatement) -> str:
        """Generate a classic for loop."""
        if isinstance(stmt.init, LocalVariableDeclaration):
            init = self.generate_local_variable_declaration(stmt.init)
        elif stmt.init:
            init = ', '.join(self._expr.generate(e) for e in stmt.init)
        else:
            init = ''
        condition = self._expr.generate(stmt.condition) if stmt.condition is not None else ''
        update = ', '.join(self._expr.generate(e) for e in stmt.update)
        body = self._generate_body(stmt.body) if stmt.body is not None else '{}'
        return f'{self.indent()}for ({init}; {condition}; {update}) {body}'

    def generate_for_each_statement(self, stmt: ForEachStatement) -> str:
        """Generate `for (const x of iterable)`.

        Raises:
            UnsupportedConstructError: If the loop declares more than one variable
        """
        variables = stmt.variable.variables
        if len(variables) != 1:
            raise UnsupportedConstructError(
                'for-each',
                f'expected exactly one loop variable, got {len(variables)} at line {self._line(stmt)}',
            )
        iterable = self._expr.generate(stmt.iterable)
        return f'{self.indent()}for (const {variables[0].name} of {iterable}) {self._generate_body(stmt.body)}'

    def generate_switch_statement(self, stmt: SwitchStatement) -> str:
        """Generate a switch statement."""
        lines = [f'{self.indent()}switch ({self._expr.generate(stmt.selector)}) {{']
        self.indent_level += 1
        for case in stmt.cases:
            if case.labels:
                for label in case.labels:
                    lines.append(f'{self.indent()}case {self._expr.generate(label)}:')
            else:
                lines.append(f'{self.indent()}default:')
            self.indent_level += 1
            for inner in case.statements:
                lines.append(self.generate(inner))
            self.indent_level -= 1
        self.indent_level -= 1
        lines.append(f'{self.indent()}}}')
        return '\n'.join(lines)

    def generate_constructor_invocation(self, stmt: ExplicitConstructorInvocation) -> str:
        """Generate `super(...)` or `this(...)`."""
        args = self._expr.generate_arguments(stmt.arguments)
        if stmt.is_this:
            self._ctx.diagnostics.warn_constructor_chaining(self._ctx.current_file_path, self._line(stmt))
            return f'{self.indent()}this({args});'
        return f'{self.indent()}super({args});'

    # =========================================================================
    # TRY / CATCH
    # =========================================================================

    def generate_try_statement(self, stmt: TryStatement) -> str:
        """Generate try/catch/finally.

        TypeScript allows a single untyped catch binding, so every catch clause
        (and every alternative of a multi-catch) becomes one arm of an
        `instanceof` chain inside it. Unmatched exceptions are rethrown.
        """
        block = stmt.block
        if stmt.resources:
            self._ctx.diagnostics.warn_try_with_resources(self._ctx.current_file_path, self._line(stmt))
            resources = []
            for resource in stmt.resources:
                resource = LocalVariableDeclaration(
                    resource.type,
                    resource.variables,
                    modifiers=[Modifier.FINAL],
                    position=resource.position,
                    comment=resource.comment,
                )
                resources.append(resource)
            block = BlockStatement(resources + block.statements, orphan_comments=block.orphan_comments)

        code = f'{self.indent()}try {self.generate_block(block, inline=True)}'
        if stmt.catches:
            code += f' catch ({stmt.catches[0].parameter.name}) {self.generate_catch_chain(stmt.catches)}'
        if stmt.finally_block is not None:
            code += f' finally {self.generate_block(stmt.finally_block, inline=True)}'
        return code

    def catch_branches(self, catches: List[CatchClause]) -> List[CatchBranch]:
        """Flatten catch clauses into ordered arms, one per caught type."""
        branches = []
        for clause in catches:
            param_type = clause.parameter.type
            types = param_type.elements if isinstance(param_type, UnionType) else [param_type]
            for caught in types:
                if isinstance(caught, ClassType) and caught.qualified_name in CATCH_ALL_TYPES:
                    caught = None
                branches.append(CatchBranch(caught, clause.parameter.name, clause.body))
        return branches

    def generate_catch_chain(self, catches: List[CatchClause]) -> str:
        """Generate the body of the single TypeScript catch block."""
        binding = catches[0].parameter.name
        branches = self.catch_branches(catches)

        self.indent_level += 1
        if branches[0].type is None:
            # A catch-all first arm needs no test.
            lines = self._branch_lines(branches[0], binding)
        else:
            lines = []
            chain = ''
            for branch in branches:
                if branch.type is None:
                    chain += f' else {self._branch_block(branch, binding)}'
                    break
                test = self._expr.generate_type_test(Name(binding), branch.type)
                prefix = f'{self.indent()}if' if not chain else ' else if'
                chain += f'{prefix} ({test}) {self._branch_block(branch, binding)}'
            else:
                self.indent_level += 1
                rethrow = f'{self.indent()}throw {binding};'
                self.indent_level -= 1
                chain += f' else {{\n{rethrow}\n{self.indent()}}}'
            lines.append(chain)
        self.indent_level -= 1
        return '\n'.join(['{'] + lines + [f'{self.indent()}}}'])

    def _branch_lines(self, branch: CatchBranch, binding: str) -> List[str]:
        lines = []
        if branch.name != binding:
            lines.append(f'{self.indent()}const {branch.name} = {binding};')
        lines.extend(self.render_children(branch.body, branch.body.statements, self.generate))
        return lines

    def _branch_block(self, branch: CatchBranch, binding: str) -> str:
        self.indent_level += 1
        lines = self._branch_lines(branch, binding)
        self.indent_level -= 1
        return '\n'.join(['{'] + lines + [f'{self.indent()}}}'])
