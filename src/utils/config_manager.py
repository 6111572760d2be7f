"""
Configuration management for the benchmark matcher.

Handles loading, querying, and persisting configuration including
input/output locations, source column renames, CAS sentinels, and
CSV reading options.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

logger = logging.getLogger(__name__)

TABLE_NAMES = (
    'benchmarks',
    'thresholdless',
    'pollutants',
    'pollutant_synonyms',
    'benchmark_synonyms',
)


class ConfigManager:
    """
    Manages system configuration for a benchmark matching run.

    Provides methods to load, query, and persist configuration. Relative
    paths in the ``inputs`` and ``outputs`` sections resolve against
    ``base_path`` (the current directory when not given).
    """

    DEFAULT_CONFIG = {
        'inputs': {
            'benchmarks': 'input/benchmarks.csv',
            'thresholdless': 'input/ceden-thresholdless.csv',
            'pollutants': 'input/ceden.csv',
            'pollutant_synonyms': 'input/ceden-synonyms.csv',
            'benchmark_synonyms': 'input/benchmarks-synonyms.csv',
        },
        'outputs': {
            'by_cas': 'output/thresholdless_benchmarks_by_cas.csv',
            'by_synonym': 'output/thresholdless_benchmarks_by_synonym.csv',
            'review_workbook': None,
            'pollutant_names': 'input/ceden-names.csv',
            'benchmark_names': 'input/benchmarks-names.csv',
        },
        'columns': {
            'benchmarks': {'Pesticide': 'benchmark_name', 'CAS number': 'cas_number'},
            'thresholdless': {'ANALYTE_NAME': 'ceden_name'},
            'pollutants': {'AnalyteName': 'ceden_name', 'CASNumber': 'cas_number'},
            'pollutant_synonyms': {},
            'benchmark_synonyms': {},
        },
        'sentinels': {
            'pollutant_cas_absent': '0',
            'benchmark_cas_absent': 'NR',
        },
        'reading': {
            'na_values': ['', 'NA'],
            'encoding': 'utf-8',
            'trim_whitespace': True,
        },
    }

    def __init__(self, config_path: Optional[Path] = None, base_path: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to YAML configuration file
            base_path: Directory that relative input/output paths resolve against
        """
        self.config_path = config_path
        self.base_path = Path(base_path) if base_path else Path.cwd()
        self.config: dict[str, Any] = {}

        if config_path and config_path.exists():
            self.load_config(config_path)
        else:
            logger.info("No config file found, using defaults")
            self.config = self._deep_copy_dict(self.DEFAULT_CONFIG)

    def load_config(self, path: Path) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Loaded configuration dictionary

        Raises:
            FileNotFoundError: If config file does not exist
            yaml.YAMLError: If config file is invalid
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded_config = yaml.safe_load(f)

            if not loaded_config:
                logger.warning(f"Empty config file at {path}, using defaults")
                self.config = self._deep_copy_dict(self.DEFAULT_CONFIG)
            else:
                # Merge with defaults to ensure all keys exist
                self.config = self._merge_with_defaults(loaded_config)

            self.config_path = path
            logger.info(f"Loaded configuration from {path}")

            return self.config

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise

    def _resolve(self, value: Union[str, Path]) -> Path:
        path = Path(value)
        if not path.is_absolute():
            path = self.base_path / path
        return path

    def get_input_path(self, table: str) -> Path:
        """
        Get the resolved path of an input table.

        Args:
            table: Table name (e.g., 'benchmarks', 'pollutant_synonyms')

        Returns:
            Absolute or base-relative path to the CSV file

        Raises:
            KeyError: If table name not found
        """
        inputs = self.config.get('inputs', {})
        if table not in inputs or not inputs[table]:
            raise KeyError(f"Input '{table}' not found in configuration")

        return self._resolve(inputs[table])

    def get_output_path(self, name: str) -> Optional[Path]:
        """
        Get the resolved path of an output file.

        Args:
            name: Output name ('by_cas', 'by_synonym', 'review_workbook', ...)

        Returns:
            Resolved path, or None for optional outputs that are switched off

        Raises:
            KeyError: If output name not found
        """
        outputs = self.config.get('outputs', {})
        if name not in outputs:
            raise KeyError(f"Output '{name}' not found in configuration")

        value = outputs[name]
        return self._resolve(value) if value else None

    def set_input_dir(self, directory: Path) -> None:
        """Point every input at the same file name inside ``directory``."""
        for table, value in self.config.get('inputs', {}).items():
            self.config['inputs'][table] = str(Path(directory) / Path(value).name)
        logger.debug(f"Input directory set to {directory}")

    def set_output_dir(self, directory: Path) -> None:
        """Point the two match tables (and the workbook, if set) into ``directory``."""
        outputs = self.config.get('outputs', {})
        for name in ('by_cas', 'by_synonym', 'review_workbook'):
            if outputs.get(name):
                outputs[name] = str(Path(directory) / Path(outputs[name]).name)
        logger.debug(f"Output directory set to {directory}")

    def set_output(self, name: str, value: Optional[Union[str, Path]]) -> None:
        """Set or clear a single output path."""
        self.config.setdefault('outputs', {})[name] = str(value) if value else None

    def get_column_map(self, table: str) -> dict[str, str]:
        """
        Get the source -> canonical column rename map for a table.

        Args:
            table: Table name

        Returns:
            Rename mapping (may be empty)

        Raises:
            KeyError: If table name not found
        """
        columns = self.config.get('columns', {})
        if table not in columns:
            raise KeyError(f"Column map for '{table}' not found in configuration")

        return dict(columns[table] or {})

    def get_sentinel(self, name: str) -> str:
        """
        Get an absent-CAS sentinel value by name.

        Args:
            name: 'pollutant_cas_absent' or 'benchmark_cas_absent'

        Returns:
            Sentinel string

        Raises:
            KeyError: If sentinel not found
        """
        if name not in self.config.get('sentinels', {}):
            raise KeyError(f"Sentinel '{name}' not found in configuration")

        return str(self.config['sentinels'][name])

    def get_reading_param(self, name: str) -> Any:
        """
        Get a CSV reading parameter by name.

        Args:
            name: Parameter name

        Returns:
            Parameter value

        Raises:
            KeyError: If parameter not found
        """
        if name not in self.config.get('reading', {}):
            raise KeyError(f"Reading parameter '{name}' not found in configuration")

        return self.config['reading'][name]

    def save_config(self, path: Optional[Path] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save to (uses self.config_path if not provided)

        Raises:
            ValueError: If no path provided and no config_path set
        """
        save_path = path or self.config_path

        if not save_path:
            raise ValueError("No path provided and no config_path set")

        try:
            # Ensure parent directory exists
            save_path.parent.mkdir(parents=True, exist_ok=True)

            with open(save_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(
                    self.config,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    indent=2
                )

            logger.info(f"Saved configuration to {save_path}")

        except Exception as e:
            logger.error(f"Failed to save configuration: {e}")
            raise

    def get_all_config(self) -> dict[str, Any]:
        """
        Get the complete configuration dictionary.

        Returns:
            Full configuration dictionary
        """
        return self._deep_copy_dict(self.config)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = self._deep_copy_dict(self.DEFAULT_CONFIG)
        logger.info("Configuration reset to defaults")

    def _merge_with_defaults(self, loaded_config: dict) -> dict:
        """Merge loaded config with defaults to ensure all keys exist."""
        merged = self._deep_copy_dict(self.DEFAULT_CONFIG)

        for section, values in loaded_config.items():
            if section in merged and isinstance(values, dict):
                merged[section].update(values)
            else:
                merged[section] = values

        return merged

    def _deep_copy_dict(self, d: dict) -> dict:
        """Deep copy a dictionary."""
        return copy.deepcopy(d)

    def validate_config(self) -> list[str]:
        """
        Validate the current configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        inputs = self.config.get('inputs', {})
        for table in TABLE_NAMES:
            if not inputs.get(table):
                errors.append(f"Input path for '{table}' is missing")

        outputs = self.config.get('outputs', {})
        for name in ('by_cas', 'by_synonym'):
            if not outputs.get(name):
                errors.append(f"Output path for '{name}' is missing")
        if outputs.get('by_cas') and outputs.get('by_cas') == outputs.get('by_synonym'):
            errors.append("Outputs 'by_cas' and 'by_synonym' must be different files")

        columns = self.config.get('columns', {})
        for table, mapping in columns.items():
            if mapping is not None and not isinstance(mapping, dict):
                errors.append(f"Column map for '{table}' must be a mapping, got {type(mapping)}")

        sentinels = self.config.get('sentinels', {})
        for name in ('pollutant_cas_absent', 'benchmark_cas_absent'):
            value = sentinels.get(name)
            if value is None or str(value) == '':
                errors.append(f"Sentinel '{name}' must be a non-empty string")

        na_values = self.config.get('reading', {}).get('na_values')
        if na_values is not None and not isinstance(na_values, list):
            errors.append("reading.na_values must be a list")

        return errors
