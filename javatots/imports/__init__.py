"""
Import resolution for the Java to TypeScript transpiler.

- specifier: reversible dotted encoding of TypeScript module specifiers
- resolver: maps Java qualified names onto configured TypeScript modules
"""

from .specifier import encode, decode, import_name, split_import_name
from .resolver import ModuleResolver

__all__ = [
    'encode',
    'decode',
    'import_name',
    'split_import_name',
    'ModuleResolver',
]
