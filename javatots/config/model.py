"""
Configuration model for the Java to TypeScript transpiler.

A configuration maps each Java module (a directory under the input root)
onto a TypeScript output hierarchy. Within a module, an ordered list of
PackageMap entries says where each Java package lands; the first entry whose
package prefix matches wins.
"""

import posixpath
from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, List, Optional, Tuple

from ..errors import ConfigurationError


UNKNOWN_ANNOTATION_POLICIES = ('fail', 'comment', 'ignore')
UNRESOLVED_IMPORT_POLICIES = ('wildcard', 'fail')
TYPESCRIPT_FILE_EXTENSION = 'ts'


def set_extension(filename: str, ext: str) -> str:
    """Replace the extension of ``filename`` with ``ext``."""
    root, _ = posixpath.splitext(filename)
    return f'{root}.{ext}'


@dataclass(frozen=True)
class PackageMap:
    """How to map a Java package prefix onto a TypeScript directory."""
    pkg: str
    dest_path: str = ''

    @cached_property
    def pkg_path(self) -> str:
        """The package prefix as a slash-separated path."""
        return self.pkg.replace('.', '/')

    def matches(self, java_path: str) -> bool:
        """Check whether a slash path lies under this package prefix.

        Matching respects segment boundaries, so ``com/acme`` does not match
        ``com/acmeutil/Foo``.
        """
        prefix = self.pkg_path
        if not prefix:
            return True
        return java_path == prefix or java_path.startswith(prefix + '/')

    def dest_for(self, java_path: str) -> str:
        """Map a slash path under this prefix to its destination path."""
        remainder = java_path[len(self.pkg_path):].lstrip('/')
        if not self.dest_path:
            return remainder
        if not remainder:
            return self.dest_path.rstrip('/')
        return posixpath.join(self.dest_path, remainder)


@dataclass(frozen=True)
class ModuleMap:
    """Configuration for one Java module."""
    name: str
    output_path: str = ''
    src_root: str = 'src/main/java'
    dest_module: Optional[str] = None
    package_maps: Tuple[PackageMap, ...] = ()

    def find_package_map(self, java_path: str) -> Optional[PackageMap]:
        """Return the first PackageMap whose prefix matches ``java_path``."""
        for package_map in self.package_maps:
            if package_map.matches(java_path):
                return package_map
        return None

    def ts_file_name(self, java_file_path: str) -> Tuple[str, bool]:
        """Compute the output file name for a Java file.

        Args:
            java_file_path: Path of the Java file relative to the source root

        Returns:
            Tuple of (TypeScript path relative to the module output directory,
            whether a PackageMap placed it). Unmatched files keep their
            source-relative placement.
        """
        java_file_path = java_file_path.replace('\\', '/')
        package_map = self.find_package_map(posixpath.dirname(java_file_path))
        if package_map is None:
            return set_extension(java_file_path, TYPESCRIPT_FILE_EXTENSION), False
        return set_extension(package_map.dest_for(java_file_path), TYPESCRIPT_FILE_EXTENSION), True


@dataclass(frozen=True)
class JtsConfig:
    """Top-level transpiler configuration."""
    module_maps: Dict[str, ModuleMap] = field(default_factory=dict)
    input_directory: str = '.'
    output_directory: str = 'ts-output'
    package_template: Optional[str] = None
    indentation: int = 2
    unknown_import_template: Optional[str] = None
    unresolved_imports: str = 'wildcard'
    comment_throws: bool = False
    unknown_annotations: str = 'fail'
    comment_final_parameters: bool = False
    type_mappings: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.unknown_annotations not in UNKNOWN_ANNOTATION_POLICIES:
            raise ConfigurationError(
                f'unknownAnnotations must be one of {", ".join(UNKNOWN_ANNOTATION_POLICIES)}, '
                f'got "{self.unknown_annotations}"'
            )
        if self.unresolved_imports not in UNRESOLVED_IMPORT_POLICIES:
            raise ConfigurationError(
                f'unresolvedImports must be one of {", ".join(UNRESOLVED_IMPORT_POLICIES)}, '
                f'got "{self.unresolved_imports}"'
            )
        if self.indentation < 0:
            raise ConfigurationError(f'indentation must not be negative, got {self.indentation}')

    @property
    def indent_str(self) -> str:
        return ' ' * self.indentation

    def module(self, name: str) -> ModuleMap:
        """Look up a module by name."""
        try:
            return self.module_maps[name]
        except KeyError:
            raise ConfigurationError(f'No moduleMaps entry for module "{name}"') from None

    def module_names(self) -> List[str]:
        return list(self.module_maps)
