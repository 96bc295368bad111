"""
Configuration module for the Java to TypeScript transpiler.
"""

from .model import JtsConfig, ModuleMap, PackageMap, set_extension
from .loader import load_config, config_from_dict

__all__ = [
    'JtsConfig',
    'ModuleMap',
    'PackageMap',
    'set_extension',
    'load_config',
    'config_from_dict',
]
