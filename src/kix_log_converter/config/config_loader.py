"""
YAML configuration loader.

Config file layout:

    logging:
      level: INFO
    conversion:
      log_format: auto
      delimiter: auto
      timestamp_column_index: 0
      timezone_policy: offset
      timezone_offset: "+02:00"
      header_names: [time, host, message]
"""

from pathlib import Path
from typing import Any, Union

import yaml

from ..ingestion.exceptions import OptionsError


def load_yaml_config(file_path: Union[str, Path]) -> dict[str, Any]:
    """
    Load a YAML config file.

    Args:
        file_path: Path to the config file

    Returns:
        Configuration as dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        OptionsError: If the file is not valid YAML or not a mapping
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise OptionsError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise OptionsError(
            f"Expected a mapping at the top of {path}, got {type(data).__name__}"
        )
    return data
