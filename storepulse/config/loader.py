import copy
from pathlib import Path
from typing import Optional

import yaml

from .defaults import DEFAULT_CONFIG


def load_config(path: Optional[str]) -> dict:
    """
    Load and merge a user YAML config with the defaults.

    Rules:
    - defaults fill every section the user omits
    - section dicts are merged key by key, scalars are replaced
    - an empty section keeps its defaults, any other non-mapping
      section value is rejected
    - output_dir always exists
    """

    # -------------------------------------------------
    # 1. Load user config (if provided)
    # -------------------------------------------------
    user_config = {}

    if path:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}

        if not isinstance(user_config, dict):
            raise ValueError("Config file must contain a YAML dictionary")

    # -------------------------------------------------
    # 2. Merge with defaults
    # -------------------------------------------------
    config = copy.deepcopy(DEFAULT_CONFIG)

    for key, value in user_config.items():
        default = config.get(key)
        if isinstance(default, dict):
            # an empty section (`store:`) keeps its defaults
            if isinstance(value, dict):
                default.update(value)
            elif value is not None:
                raise ValueError(f"Config section '{key}' must be a mapping")
        else:
            config[key] = value

    # -------------------------------------------------
    # 3. Required keys
    # -------------------------------------------------
    if not config.get("output_dir"):
        config["output_dir"] = "runs"

    return config
