"""
Type and call mappings from Java to TypeScript.

This module contains the tables the transform passes consult: scalar and
boxed type renames, container renames, and the console/stream idioms that
replace `System.out` and `System.err`.
"""

from typing import Dict, Optional


# =============================================================================
# TYPE MAPPING CONSTANTS
# =============================================================================

# Java scalar (primitive and boxed) types -> TypeScript types
JAVA_TO_TS_SCALAR_MAP: Dict[str, str] = {
    # Text
    'String': 'string',
    'CharSequence': 'string',
    'Character': 'string',
    'char': 'string',
    # Numbers
    'Integer': 'number',
    'int': 'number',
    'Long': 'number',
    'long': 'number',
    'Short': 'number',
    'short': 'number',
    'Byte': 'number',
    'byte': 'number',
    'Double': 'number',
    'double': 'number',
    'Float': 'number',
    'float': 'number',
    'Number': 'number',
    # Boolean
    'Boolean': 'boolean',
    'boolean': 'boolean',
}

# Generic containers -> structural TypeScript equivalents
CONTAINER_MAP: Dict[str, str] = {
    'List': 'Array',
    'ArrayList': 'Array',
}

# Stream types replaced when their java.io import is present
FILE_INPUT_STREAM_TYPES: Dict[str, str] = {
    'InputStream': 'Readable',
    'FileInputStream': 'Readable',
}
STRING_WRITER_TYPES: Dict[str, str] = {
    'StringWriter': 'Writable',
}

# System.<handle> -> (console method for println, process stream for print)
SYSTEM_STREAMS: Dict[str, tuple] = {
    'out': ('log', 'stdout'),
    'err': ('error', 'stderr'),
}

# Log levels that exist on both an SLF4J logger and the console
CONSOLE_LOG_LEVELS = frozenset({'trace', 'debug', 'info', 'warn', 'error'})


# =============================================================================
# CONVERSION FUNCTIONS
# =============================================================================

def build_scalar_map(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Build the scalar type map, with configured mappings taking precedence.

    Args:
        extra: Additional Java type name -> TypeScript type name mappings

    Returns:
        The merged mapping
    """
    scalar_map = dict(JAVA_TO_TS_SCALAR_MAP)
    if extra:
        scalar_map.update(extra)
    return scalar_map


def capitalize(name: str) -> str:
    """Capitalize the first letter only, as accessor names do (`fooBar` -> `FooBar`)."""
    return name[:1].upper() + name[1:]
