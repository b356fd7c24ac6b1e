"""
Command Catalog
Loads the spreadsheet-backed command table and maps names to records
"""

from .catalog import CommandCatalog
from .config import CatalogConfig, SourceConfig, default_config, load_config, load_source_config
from .loader import CommandTableLoader, TableSource, parse_commands
from .records import CommandRecord, record_from_row
from .registry import Binding, CommandRegistry, RegistryConflict

__all__ = [
    'CommandCatalog',
    'CatalogConfig', 'SourceConfig', 'default_config', 'load_config', 'load_source_config',
    'CommandTableLoader', 'TableSource', 'parse_commands',
    'CommandRecord', 'record_from_row',
    'Binding', 'CommandRegistry', 'RegistryConflict',
]
