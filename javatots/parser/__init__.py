"""
Parser module for the Java to TypeScript transpiler.

This module provides AST node definitions, tree walking utilities, comment
recovery and the javalang front-end adapter.
"""

from .ast_nodes import (
    # Metadata and base
    ASTNode,
    Position,
    Comment,
    Modifier,
    TypeMarker,
    # Types
    TypeNode,
    ClassType,
    PrimitiveType,
    ArrayType,
    UnionType,
    VoidType,
    WildcardType,
    TypeParameter,
    # Annotations
    Annotation,
    AnnotationArgument,
    # Declarations
    Parameter,
    FieldDeclaration,
    MethodDeclaration,
    ConstructorDeclaration,
    InitializerDeclaration,
    TypeDeclaration,
    ClassDeclaration,
    EnumConstant,
    EnumDeclaration,
    # Top-level
    PackageDeclaration,
    ImportDeclaration,
    CompilationUnit,
)
from .walker import NodeTransformer, NodeVisitor, iter_child_nodes, iter_fields, walk
from .comments import attach_comments, scan
from .parser import JavaTreeConverter, parse_java

__all__ = [
    'ASTNode',
    'Position',
    'Comment',
    'Modifier',
    'TypeMarker',
    'TypeNode',
    'ClassType',
    'PrimitiveType',
    'ArrayType',
    'UnionType',
    'VoidType',
    'WildcardType',
    'TypeParameter',
    'Annotation',
    'AnnotationArgument',
    'Parameter',
    'FieldDeclaration',
    'MethodDeclaration',
    'ConstructorDeclaration',
    'InitializerDeclaration',
    'TypeDeclaration',
    'ClassDeclaration',
    'EnumConstant',
    'EnumDeclaration',
    'PackageDeclaration',
    'ImportDeclaration',
    'CompilationUnit',
    'NodeTransformer',
    'NodeVisitor',
    'iter_child_nodes',
    'iter_fields',
    'walk',
    'attach_comments',
    'scan',
    'JavaTreeConverter',
    'parse_java',
]
