"""
Transform pass registry and selector.

Which passes run on a compilation unit is decided by its imports. A static
table maps a trigger (Java package, optional class) to a pass identity and
the TypeScript imports the pass's output needs. The selector scans the unit's
imports once, enqueues matching passes in order, rewrites the import list
and synthesizes imports for same-directory sibling classes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..errors import ConfigurationError
from ..imports import ModuleResolver, import_name
from ..parser.ast_nodes import ClassType, Comment, CompilationUnit, ImportDeclaration, Name, TypeDeclaration
from ..parser.walker import walk
from .base import TransformContext, TransformPass
from .builtins import BuiltinCallsPass
from .containers import ContainersPass
from .core_types import CoreTypesPass
from .delombok import DelombokPass
from .lombok_logging import LombokLoggingPass
from .optional import OptionalPass
from .streams import FileInputStreamPass, StringWriterPass


class PassId(Enum):
    """Closed set of transform passes."""
    CORE_TYPES = 'core-types'
    BUILTIN_CALLS = 'builtin-calls'
    DELOMBOK = 'delombok'
    LOMBOK_LOGGING = 'lombok-logging'
    CONTAINERS = 'containers'
    OPTIONAL = 'optional'
    FILE_INPUT_STREAM = 'file-input-stream'
    STRING_WRITER = 'string-writer'


PASS_FACTORIES: Dict[PassId, Callable[[TransformContext], TransformPass]] = {
    PassId.CORE_TYPES: CoreTypesPass,
    PassId.BUILTIN_CALLS: BuiltinCallsPass,
    PassId.DELOMBOK: DelombokPass,
    PassId.LOMBOK_LOGGING: LombokLoggingPass,
    PassId.CONTAINERS: ContainersPass,
    PassId.OPTIONAL: OptionalPass,
    PassId.FILE_INPUT_STREAM: FileInputStreamPass,
    PassId.STRING_WRITER: StringWriterPass,
}

_missing = set(PassId) - set(PASS_FACTORIES)
if _missing:
    raise TypeError(f'No factory for passes: {", ".join(sorted(p.value for p in _missing))}')

# Always run, in this order, before any import-triggered pass.
MANDATORY_PASSES: Tuple[PassId, ...] = (PassId.CORE_TYPES, PassId.BUILTIN_CALLS)


@dataclass(frozen=True)
class EmittedImport:
    """A TypeScript import a pass's output depends on."""
    specifier: str
    symbol: str
    is_asterisk: bool = False

    def to_declaration(self) -> ImportDeclaration:
        return ImportDeclaration(
            import_name(self.specifier, self.symbol),
            is_asterisk=self.is_asterisk,
            encoded=True,
        )


@dataclass(frozen=True)
class PassRegistration:
    """Trigger -> pass table entry.

    ``class_name`` None matches any class in ``package``. ``pass_id`` None
    means the import is dropped with no pass, because the target has a
    native equivalent.
    """
    package: str
    class_name: Optional[str]
    pass_id: Optional[PassId]
    emits: Tuple[EmittedImport, ...] = ()


REGISTRATIONS: Tuple[PassRegistration, ...] = (
    PassRegistration('lombok', None, PassId.DELOMBOK),
    PassRegistration('lombok.extern.slf4j', 'Slf4j', PassId.LOMBOK_LOGGING),
    PassRegistration('java.util', 'List', PassId.CONTAINERS),
    PassRegistration('java.util', 'ArrayList', PassId.CONTAINERS),
    PassRegistration('java.util', 'Map', None),
    PassRegistration('java.util', 'HashMap', None),
    PassRegistration('java.util', 'Set', None),
    PassRegistration('java.util', 'HashSet', None),
    PassRegistration('java.util', 'Optional', PassId.OPTIONAL),
    PassRegistration('java.io', 'FileInputStream', PassId.FILE_INPUT_STREAM, (
        EmittedImport('fs', 'Fs', is_asterisk=True),
        EmittedImport('stream', 'Readable'),
    )),
    PassRegistration('java.io', 'InputStream', PassId.FILE_INPUT_STREAM, (
        EmittedImport('fs', 'Fs', is_asterisk=True),
        EmittedImport('stream', 'Readable'),
    )),
    PassRegistration('java.io', 'StringWriter', PassId.STRING_WRITER, (
        EmittedImport('stream', 'Writable'),
    )),
    PassRegistration('java.io', 'IOException', None),
)


def lookup(package: str, class_name: str) -> Optional[PassRegistration]:
    """Find the registration for one imported class.

    A class-specific entry is preferred over a package-wide one.
    """
    wildcard = None
    for registration in REGISTRATIONS:
        if registration.package != package:
            continue
        if registration.class_name == class_name:
            return registration
        if registration.class_name is None and wildcard is None:
            wildcard = registration
    return wildcard


def lookup_package(package: str) -> List[PassRegistration]:
    """All registrations for a package, for `import package.*;`."""
    return [r for r in REGISTRATIONS if r.package == package]


def create_pass(pass_id: PassId, ctx: TransformContext) -> TransformPass:
    """Instantiate a pass by identity."""
    return PASS_FACTORIES[pass_id](ctx)


# =============================================================================
# SELECTION
# =============================================================================

def referenced_names(unit: CompilationUnit) -> FrozenSet[str]:
    """Collect every simple type name and identifier used in the unit's types."""
    names = set()
    for decl in unit.types:
        for node in walk(decl):
            if isinstance(node, ClassType):
                root = node
                while root.scope is not None:
                    root = root.scope
                names.add(root.name)
            elif isinstance(node, Name):
                names.add(node.identifier)
    return frozenset(names)


def declared_type_names(unit: CompilationUnit) -> FrozenSet[str]:
    """Names of the types the unit itself declares, nested ones included."""
    names = set()
    for decl in unit.types:
        for node in walk(decl):
            if isinstance(node, TypeDeclaration):
                names.add(node.name)
    return frozenset(names)


class PassSelector:
    """
    Builds the ordered pass list for one compilation unit and finalizes its
    import list.

    Selection runs in one scan over the declared imports:
    1. The mandatory passes are enqueued first.
    2. An import matching the registration table enqueues its pass (once per
       pass identity) and contributes the table's emitted imports; the Java
       import itself is dropped.
    3. Any other import is resolved against the module maps and rewritten to
       its encoded TypeScript specifier, or kept as a wildcard when nothing
       maps it.
    4. Imports for same-directory sibling classes the unit uses are appended.
    """

    def __init__(
        self,
        resolver: ModuleResolver,
        module_name: str,
        ctx: TransformContext,
        unresolved_imports: str = 'wildcard',
    ):
        """
        Initialize the selector.

        Args:
            resolver: Resolver for the configured module maps
            module_name: Module containing the unit being transformed
            ctx: Transform context (diagnostics, file path)
            unresolved_imports: 'wildcard' to keep unmapped imports as
                wildcard imports, 'fail' to raise
        """
        self._resolver = resolver
        self._module_name = module_name
        self._ctx = ctx
        self._unresolved_imports = unresolved_imports

    def select(self, unit: CompilationUnit, siblings: Iterable[str] = ()) -> List[PassId]:
        """Choose the passes for ``unit`` and replace its import list.

        Args:
            unit: The compilation unit, rewritten in place
            siblings: Type names declared in other files of the same directory

        Returns:
            The passes to run, in order
        """
        package = unit.package.name if unit.package else ''
        passes: List[PassId] = list(MANDATORY_PASSES)
        imports: List[ImportDeclaration] = []
        explicit_names = set()

        # Sibling references are collected before any pass renames types.
        used = referenced_names(unit)

        for decl in unit.imports:
            if decl.is_asterisk and not decl.is_static:
                registrations = lookup_package(decl.name)
            else:
                registration = lookup(decl.qualifier, decl.identifier)
                registrations = [registration] if registration else []

            if registrations:
                for registration in registrations:
                    if registration.pass_id is not None and registration.pass_id not in passes:
                        passes.append(registration.pass_id)
                        imports.extend(e.to_declaration() for e in registration.emits)
                if decl.comment is not None:
                    # The import is consumed; its comment stays where it was.
                    unit.orphan_comments.append(decl.comment)
                continue

            explicit_names.add(decl.identifier)
            imports.append(self._rewrite_import(decl, package))

        own_names = declared_type_names(unit)
        for sibling in sorted(set(siblings)):
            if sibling in used and sibling not in own_names and sibling not in explicit_names:
                imports.append(ImportDeclaration(import_name(f'./{sibling}', sibling), encoded=True))

        unit.imports = _dedupe(imports, unit.orphan_comments)
        return passes

    def _rewrite_import(self, decl: ImportDeclaration, package: str) -> ImportDeclaration:
        if decl.is_static:
            # import static a.b.C.member -> resolve the class a.b.C
            target, symbol = decl.qualifier, decl.identifier
            if decl.is_asterisk:
                target, symbol = decl.name, decl.identifier
            is_package = False
        else:
            target, symbol = decl.name, decl.identifier
            is_package = decl.is_asterisk

        specifier = self._resolver.resolve(target, self._module_name, package, is_package=is_package)
        if specifier is None:
            if self._unresolved_imports == 'fail':
                raise ConfigurationError(f'Import "{decl.name}" matches no configured module')
            line = decl.position.line if decl.position else None
            self._ctx.diagnostics.warn_unresolved_import(decl.name, self._ctx.file_path, line)
            return ImportDeclaration(
                decl.name, is_static=decl.is_static, is_asterisk=True,
                position=decl.position, comment=decl.comment,
            )

        return ImportDeclaration(
            import_name(specifier, symbol),
            is_static=decl.is_static,
            is_asterisk=decl.is_asterisk,
            encoded=True,
            position=decl.position,
            comment=decl.comment,
        )


def _dedupe(imports: List[ImportDeclaration], orphans: List[Comment]) -> List[ImportDeclaration]:
    """Drop repeated imports of the same name and kind; the first one wins.

    Comments of dropped imports are moved to ``orphans``.
    """
    seen = set()
    result = []
    for decl in imports:
        key = (decl.name, decl.is_asterisk, decl.encoded)
        if key in seen:
            if decl.comment is not None:
                orphans.append(decl.comment)
            continue
        seen.add(key)
        result.append(decl)
    return result


def apply_passes(unit: CompilationUnit, passes: Iterable[PassId], ctx: TransformContext) -> CompilationUnit:
    """Run each pass once over ``unit``, in order."""
    for pass_id in passes:
        unit = create_pass(pass_id, ctx).run(unit)
    return unit
