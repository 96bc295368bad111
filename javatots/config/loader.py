"""
YAML configuration loading.

Keys are spelled in camelCase:

    inputDirectory: ..
    outputDirectory: ../ts
    indentation: 2
    unknownAnnotations: comment
    moduleMaps:
      core:
        outputPath: core
        srcRoot: src/main/java
        destModule: "@acme/core"
        packageMaps:
          - pkg: com.acme.core
            destPath: src
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..errors import ConfigurationError
from .model import JtsConfig, ModuleMap, PackageMap


# YAML key -> JtsConfig field
_TOP_LEVEL_KEYS = {
    'inputDirectory': 'input_directory',
    'outputDirectory': 'output_directory',
    'packageTemplate': 'package_template',
    'indentation': 'indentation',
    'unknownImportTemplate': 'unknown_import_template',
    'unresolvedImports': 'unresolved_imports',
    'commentThrows': 'comment_throws',
    'unknownAnnotations': 'unknown_annotations',
    'commentFinalParameters': 'comment_final_parameters',
    'typeMappings': 'type_mappings',
}


def _require_mapping(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f'{where} must be a mapping, got {type(value).__name__}')
    return value


def _package_map_from_dict(data: Any, where: str) -> PackageMap:
    data = _require_mapping(data, where)
    if 'pkg' not in data:
        raise ConfigurationError(f'{where} is missing "pkg"')
    return PackageMap(pkg=str(data['pkg'] or ''), dest_path=str(data.get('destPath') or ''))


def _module_map_from_dict(name: str, data: Any) -> ModuleMap:
    where = f'moduleMaps.{name}'
    data = _require_mapping(data, where)
    package_maps = data.get('packageMaps') or []
    if not isinstance(package_maps, list):
        raise ConfigurationError(f'{where}.packageMaps must be a list')
    return ModuleMap(
        name=name,
        output_path=str(data.get('outputPath') or name),
        src_root=str(data.get('srcRoot') or 'src/main/java'),
        dest_module=data.get('destModule'),
        package_maps=tuple(
            _package_map_from_dict(entry, f'{where}.packageMaps[{i}]')
            for i, entry in enumerate(package_maps)
        ),
    )


def config_from_dict(data: Optional[Dict[str, Any]]) -> JtsConfig:
    """Build a JtsConfig from a parsed YAML document."""
    data = _require_mapping(data, 'configuration')
    unknown = set(data) - set(_TOP_LEVEL_KEYS) - {'moduleMaps'}
    if unknown:
        raise ConfigurationError(f'Unknown configuration keys: {", ".join(sorted(unknown))}')

    kwargs = {field_name: data[key] for key, field_name in _TOP_LEVEL_KEYS.items() if key in data}
    kwargs['type_mappings'] = dict(_require_mapping(kwargs.get('type_mappings'), 'typeMappings'))
    module_maps = _require_mapping(data.get('moduleMaps'), 'moduleMaps')
    kwargs['module_maps'] = {
        str(name): _module_map_from_dict(str(name), entry) for name, entry in module_maps.items()
    }
    try:
        return JtsConfig(**kwargs)
    except TypeError as e:
        raise ConfigurationError(f'Invalid configuration: {e}') from e


def load_config(path: Union[str, Path]) -> JtsConfig:
    """Read a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        The parsed configuration

    Raises:
        ConfigurationError: If the file cannot be read or is malformed
    """
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f'Cannot read configuration {path}: {e}') from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f'Malformed YAML in {path}: {e}') from e
    return config_from_dict(data)
