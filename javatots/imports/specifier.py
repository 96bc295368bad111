"""
Reversible encoding of TypeScript module specifiers as dotted names.

Import declarations carry a dotted qualified name. To let a TypeScript
specifier such as ``./core/Foo``, ``@scope/pkg`` or ``../util`` ride in that
slot, its syntax is replaced with marker tokens that can never appear in a
Java identifier:

    ./core/Foo   <->  %DOT_SLASH%.core.Foo
    @scope/pkg   <->  %AT_SIGN%.scope.pkg
    ../util/Foo  <->  %DOT_DOT%.util.Foo
    lodash.merge <->  lodash%DOT%merge

Every `/` becomes a `.` so the encoded form splits on dots exactly where the
specifier splits on slashes. The `%` delimiter is reserved: specifiers that
contain it cannot be encoded.
"""

from typing import Tuple

from ..errors import ConfigurationError


MARKER_DELIMITER = '%'
DOT_SLASH = '%DOT_SLASH%'
AT_SIGN = '%AT_SIGN%'
DOT_DOT = '%DOT_DOT%'
DOT = '%DOT%'


def _escape_path(path: str) -> str:
    """Encode the slash-separated part of a specifier."""
    return path.replace('..', DOT_DOT).replace('.', DOT).replace('/', '.')


def _unescape_path(path: str) -> str:
    return path.replace(DOT_DOT, '..').replace(DOT, '.')


def encode(specifier: str) -> str:
    """Encode a module specifier into dotted form.

    Args:
        specifier: A TypeScript module specifier

    Returns:
        The dotted encoding, safe to store in an import name

    Raises:
        ConfigurationError: If the specifier contains the reserved delimiter
    """
    if MARKER_DELIMITER in specifier:
        raise ConfigurationError(
            f'Module specifier "{specifier}" contains the reserved marker '
            f'delimiter "{MARKER_DELIMITER}"'
        )
    if specifier.startswith('./'):
        return f'{DOT_SLASH}.{_escape_path(specifier[2:])}'
    if specifier.startswith('@'):
        return f'{AT_SIGN}.{_escape_path(specifier[1:])}'
    return _escape_path(specifier)


def decode(dotted: str) -> str:
    """Decode a dotted name produced by ``encode`` back into a specifier."""
    path = dotted.replace('.', '/')
    if path.startswith(AT_SIGN + '/'):
        return '@' + _unescape_path(path[len(AT_SIGN) + 1:])
    if path.startswith(DOT_SLASH + '/'):
        return './' + _unescape_path(path[len(DOT_SLASH) + 1:])
    return _unescape_path(path)


def import_name(specifier: str, symbol: str) -> str:
    """Build the dotted import name binding ``symbol`` from ``specifier``."""
    return f'{encode(specifier)}.{symbol}'


def split_import_name(dotted: str) -> Tuple[str, str]:
    """Split an encoded import name into ``(specifier, symbol)``."""
    module, _, symbol = dotted.rpartition('.')
    return decode(module), symbol
