"""
Module and package resolution for Java imports.

Given a fully qualified Java name and the module/package of the file that
imports it, the resolver finds the configured ModuleMap that owns the name
and computes the TypeScript module specifier to import it from:

- same module: a relative specifier (``./Foo``, ``../core/Foo``)
- other module: ``<destModule>/<destination path>``

A package (wildcard) import names the package's ``index`` module.
"""

import posixpath
from typing import Dict, Optional

from ..config import ModuleMap
from ..errors import ConfigurationError


PACKAGE_INDEX = 'index'


class ModuleResolver:
    """Resolves Java qualified names against the configured module maps."""

    def __init__(self, module_maps: Dict[str, ModuleMap]):
        """
        Initialize the resolver.

        Args:
            module_maps: Module name -> ModuleMap, in lookup order
        """
        self._module_maps = module_maps

    def resolve(
        self,
        qualified_name: str,
        from_module: str,
        from_package: str,
        is_package: bool = False,
    ) -> Optional[str]:
        """Resolve a Java name to a TypeScript module specifier.

        Args:
            qualified_name: Dotted Java name of a class (or package)
            from_module: Name of the module containing the importing file
            from_package: Dotted package of the importing file
            is_package: True when ``qualified_name`` names a package

        Returns:
            The module specifier, or None if no module maps the name

        Raises:
            ConfigurationError: If the importing package has no PackageMap in
                its own module, or the target module has no destModule
        """
        java_path = qualified_name.replace('.', '/')
        for module_name, module_map in self._module_maps.items():
            package_map = module_map.find_package_map(java_path)
            if package_map is None:
                continue
            target = package_map.dest_for(java_path)
            if is_package:
                target = posixpath.join(target, PACKAGE_INDEX) if target else PACKAGE_INDEX
            if module_name == from_module:
                return self._relative_specifier(module_map, from_package, target)
            if not module_map.dest_module:
                raise ConfigurationError(
                    f'"{qualified_name}" maps to module "{module_name}", '
                    f'which has no destModule for cross-module imports'
                )
            if not target:
                return module_map.dest_module
            return f'{module_map.dest_module}/{target}'
        return None

    def _relative_specifier(self, module_map: ModuleMap, from_package: str, target: str) -> str:
        from_path = from_package.replace('.', '/')
        from_map = module_map.find_package_map(from_path)
        if from_map is None:
            raise ConfigurationError(
                f'No packageMaps entry in module "{module_map.name}" '
                f'matches package "{from_package or "(default)"}"'
            )
        from_dir = from_map.dest_for(from_path)
        relative = posixpath.relpath(target or '.', from_dir or '.')
        if not relative.startswith('.'):
            relative = './' + relative
        return relative
