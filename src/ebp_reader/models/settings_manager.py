"""
EBP Reader Settings

Settings live in a JSON or YAML file; environment variables override the
built-in defaults for logging.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("text", "json", "yaml")
SECTIONS = ("all", "metadata", "units", "alarms", "components", "memory", "schemas", "bom", "stats")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ReaderSettings:
    """EBP Reader configuration"""

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("EBP_READER_LOG_LEVEL", "INFO"))
    # None -> ~/.ebp_reader/logs
    log_dir: Optional[str] = field(default_factory=lambda: os.getenv("EBP_READER_LOG_DIR"))
    max_log_size_mb: int = 10
    log_backup_count: int = 5

    # Output
    output_format: str = "text"
    section: str = "all"
    validate_before_parse: bool = True


class SettingsManager:
    """Loads, validates and exports ReaderSettings"""

    def __init__(self):
        self.settings = ReaderSettings()
        self.current_file: Optional[Path] = None

    def get_settings(self) -> ReaderSettings:
        return self.settings

    def load_from_file(self, filepath: str) -> Tuple[bool, Optional[str]]:
        """
        Load settings from a JSON or YAML file.

        Unknown keys are ignored with a warning. The current settings are
        left untouched if the file can't be loaded or is invalid.

        Args:
            filepath: Path to .json, .yaml or .yml file

        Returns:
            Tuple[bool, Optional[str]]: (success, error_message)
        """
        path = Path(filepath)
        if not path.exists():
            error_msg = f"Settings file not found: {filepath}"
            logger.error(error_msg)
            return False, error_msg

        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            error_msg = f"Invalid settings file {filepath}: {e}"
            logger.error(error_msg)
            return False, error_msg
        except OSError as e:
            error_msg = f"Failed to read settings file {filepath}: {e}"
            logger.error(error_msg)
            return False, error_msg

        if data is None:
            data = {}
        if not isinstance(data, dict):
            error_msg = "Settings file must contain a mapping at top level"
            logger.error(error_msg)
            return False, error_msg

        known = {f.name for f in fields(ReaderSettings)}
        for key in sorted(set(data) - known):
            logger.warning(f"Ignoring unknown setting '{key}'")

        candidate = ReaderSettings(**{k: v for k, v in data.items() if k in known})
        errors = self.validate(candidate)
        if errors:
            error_msg = "; ".join(errors)
            logger.error(f"Invalid settings in {filepath}: {error_msg}")
            return False, error_msg

        self.settings = candidate
        self.current_file = path
        logger.info(f"Loaded settings from {filepath}")
        return True, None

    @staticmethod
    def validate(settings: ReaderSettings) -> List[str]:
        """Validate settings values, return list of errors"""
        errors = []

        if str(settings.log_level).upper() not in LOG_LEVELS:
            errors.append(f"log_level: '{settings.log_level}' is not one of {list(LOG_LEVELS)}")
        if not isinstance(settings.max_log_size_mb, int) or settings.max_log_size_mb < 1:
            errors.append("max_log_size_mb must be a positive integer")
        if not isinstance(settings.log_backup_count, int) or settings.log_backup_count < 0:
            errors.append("log_backup_count must be a non-negative integer")
        if settings.output_format not in OUTPUT_FORMATS:
            errors.append(f"output_format: '{settings.output_format}' is not one of {list(OUTPUT_FORMATS)}")
        if settings.section not in SECTIONS:
            errors.append(f"section: '{settings.section}' is not one of {list(SECTIONS)}")
        if not isinstance(settings.validate_before_parse, bool):
            errors.append("validate_before_parse must be true or false")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self.settings)

    def export_to_yaml(self, filepath: str) -> bool:
        """Export current settings to YAML format"""
        try:
            path = Path(filepath)
            path.parent.mkdir(parents=True, exist_ok=True)

            with open(path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, allow_unicode=True)

            logger.info(f"Exported settings to YAML: {filepath}")
            return True

        except OSError as e:
            logger.error(f"Failed to export settings to YAML: {e}")
            return False
