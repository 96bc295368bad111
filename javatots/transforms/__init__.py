"""
Transform passes for the Java to TypeScript transpiler.

Passes rewrite a compilation unit in place before code generation. The
registry decides which passes a unit needs from its imports.
"""

from .base import TransformContext, TransformPass
from .core_types import CoreTypesPass
from .builtins import BuiltinCallsPass
from .delombok import DelombokPass, delombok, summarize
from .containers import ContainersPass
from .optional import OptionalPass
from .streams import FileInputStreamPass, StringWriterPass
from .lombok_logging import LombokLoggingPass
from .registry import (
    PassId,
    PassRegistration,
    EmittedImport,
    PassSelector,
    REGISTRATIONS,
    MANDATORY_PASSES,
    apply_passes,
    create_pass,
    lookup,
)

__all__ = [
    'TransformContext',
    'TransformPass',
    'CoreTypesPass',
    'BuiltinCallsPass',
    'DelombokPass',
    'delombok',
    'summarize',
    'ContainersPass',
    'OptionalPass',
    'FileInputStreamPass',
    'StringWriterPass',
    'LombokLoggingPass',
    'PassId',
    'PassRegistration',
    'EmittedImport',
    'PassSelector',
    'REGISTRATIONS',
    'MANDATORY_PASSES',
    'apply_passes',
    'create_pass',
    'lookup',
]
