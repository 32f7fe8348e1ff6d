from pathlib import Path
from typing import Optional

import yaml

from prqueue_core.mergeable import DEFAULT_MAX_ATTEMPTS, DEFAULT_RETRY_INTERVAL

DEFAULT_CONFIG: dict = {
    "repo": None,  # owner/name; the --repo flag takes precedence
    "ignore_authors": [],  # logins whose PRs never appear in the queue
    "sort": "updated",
    "direction": "asc",
    "per_page": 100,
    "mergeable_retry_interval": DEFAULT_RETRY_INTERVAL,
    "mergeable_max_attempts": DEFAULT_MAX_ATTEMPTS,  # null = poll until GitHub answers
}


def load_config(config_path: str = ".prqueue.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prqueue.yml in the current directory
      3. CLI argument overrides

    Raises ValueError when a numeric setting cannot be read as a number.
    """
    config = {**DEFAULT_CONFIG, "ignore_authors": list(DEFAULT_CONFIG["ignore_authors"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    return apply_overrides(config, cli_overrides)


def apply_overrides(config: dict, cli_overrides: Optional[dict] = None) -> dict:
    """Return a copy of ``config`` with every non-None override applied and values normalised."""
    config = dict(config)
    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value
    return _normalise(config)


def _normalise(config: dict) -> dict:
    # A single string in YAML is treated as a one-item list.
    if isinstance(config.get("ignore_authors"), str):
        config["ignore_authors"] = [config["ignore_authors"]]
    config["ignore_authors"] = list(config.get("ignore_authors") or [])

    config["per_page"] = _as_number(config, "per_page", int)
    config["mergeable_retry_interval"] = _as_number(config, "mergeable_retry_interval", float)
    if config.get("mergeable_max_attempts") is not None:
        config["mergeable_max_attempts"] = _as_number(config, "mergeable_max_attempts", int)
    return config


def _as_number(config: dict, key: str, kind: type):
    value = config.get(key, DEFAULT_CONFIG[key])
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a number, got {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number, got {value!r}") from None
