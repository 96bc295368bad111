"""
Configurable rendering hooks for the TypeScript code generator.

The generator hands four decisions to the caller: how the package line is
rendered, how each import declaration is rendered, how a method's thrown
types are represented, and what happens to annotations no transform pass
consumed. ``default_callbacks`` builds the hooks from a JtsConfig.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import JtsConfig

from ..errors import UnsupportedConstructError
from ..imports import split_import_name
from ..parser.ast_nodes import ImportDeclaration


PackageCallback = Callable[[str], Optional[str]]
ImportCallback = Callable[[ImportDeclaration], Optional[str]]
ThrowsCallback = Callable[[List[str]], str]
AnnotationsCallback = Callable[[List[str]], Optional[str]]


@dataclass
class GeneratorCallbacks:
    """
    Hooks consulted by the generator. A hook left as None falls back to the
    built-in behavior:

    - on_package: no package line
    - on_import: `import { S } from 'mod';` / `import * as S from 'mod';`
    - on_throws: thrown types are not represented
    - on_annotations: leftover annotations are an error
    """
    on_package: Optional[PackageCallback] = None
    on_import: Optional[ImportCallback] = None
    on_throws: Optional[ThrowsCallback] = None
    on_annotations: Optional[AnnotationsCallback] = None

    def package_line(self, name: str) -> Optional[str]:
        if self.on_package is None:
            return None
        return self.on_package(name)

    def import_line(self, decl: ImportDeclaration) -> Optional[str]:
        if self.on_import is None:
            return render_import(decl)
        return self.on_import(decl)

    def throws_suffix(self, types: List[str]) -> str:
        if not types or self.on_throws is None:
            return ''
        return self.on_throws(types)

    def annotations_line(self, annotations: List[str]) -> Optional[str]:
        if not annotations:
            return None
        if self.on_annotations is None:
            raise UnsupportedConstructError('annotation', f'unknown method annotations: {", ".join(annotations)}')
        return self.on_annotations(annotations)


# =============================================================================
# IMPORT RENDERING
# =============================================================================

def import_statement(symbol: str, module: str, is_asterisk: bool) -> str:
    """Render one TypeScript import statement."""
    if is_asterisk:
        return f"import * as {symbol} from '{module}';"
    return f"import {{ {symbol} }} from '{module}';"


def unencoded_module(decl: ImportDeclaration) -> str:
    """Module path for an import that was never resolved: its package as a path."""
    return decl.qualifier.replace('.', '/')


def render_import(decl: ImportDeclaration, unknown_template: Optional[str] = None) -> str:
    """Render an import declaration, decoding its specifier if it is encoded.

    Args:
        decl: The import declaration
        unknown_template: `%s` template taking (symbol, module) for imports
            that matched no module map

    Returns:
        The import line
    """
    if decl.encoded:
        specifier, symbol = split_import_name(decl.name)
        return import_statement(symbol, specifier, decl.is_asterisk)

    symbol = decl.identifier
    module = unencoded_module(decl)
    if unknown_template is not None:
        return unknown_template % (symbol, module)
    return import_statement(symbol, module, decl.is_asterisk)


# =============================================================================
# DEFAULTS FROM CONFIGURATION
# =============================================================================

def default_callbacks(config: 'JtsConfig') -> GeneratorCallbacks:
    """Build the generator hooks a configuration asks for."""
    callbacks = GeneratorCallbacks()

    if config.package_template is not None:
        template = config.package_template
        callbacks.on_package = lambda name: template % name

    unknown_template = config.unknown_import_template
    callbacks.on_import = lambda decl: render_import(decl, unknown_template)

    if config.comment_throws:
        callbacks.on_throws = lambda types: f' /* throws {", ".join(types)} */'

    policy = config.unknown_annotations
    if policy == 'comment':
        callbacks.on_annotations = lambda annotations: f'// {", ".join(annotations)}'
    elif policy == 'ignore':
        callbacks.on_annotations = lambda annotations: None

    return callbacks
