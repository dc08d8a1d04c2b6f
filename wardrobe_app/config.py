"""Configuration helpers for the wardrobe recommender."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_WARDROBE_DB_PATH = "data/wardrobe.db"
DEFAULT_RECOMMENDATION_DB_PATH = "data/recommendations.db"
DEFAULT_PERSIST_LIMIT = 3


@dataclass
class AppConfig:
    """Configuration values for the recommender.

    Only storage locations and presentation limits are configurable. The
    scoring weights and the acceptance threshold are fixed policy and live
    with the engine.
    """

    wardrobe_db_path: str = DEFAULT_WARDROBE_DB_PATH
    recommendation_db_path: str = DEFAULT_RECOMMENDATION_DB_PATH
    rules_path: Optional[str] = None
    persist_limit: int = DEFAULT_PERSIST_LIMIT
    log_level: str = "INFO"
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables, which take
        precedence.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("WARDROBE_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        wardrobe_db_path = get_value("wardrobe_db_path", DEFAULT_WARDROBE_DB_PATH)
        recommendation_db_path = get_value("recommendation_db_path", DEFAULT_RECOMMENDATION_DB_PATH)
        rules_path = get_value("compatibility_rules_path")
        persist_limit = get_value("recommendation_persist_limit", str(DEFAULT_PERSIST_LIMIT))
        log_level = get_value("log_level", "INFO")

        try:
            parsed_limit = int(str(persist_limit))
        except ValueError as exc:
            raise ValueError(f"recommendation_persist_limit must be an integer, got {persist_limit!r}") from exc
        if parsed_limit < 1:
            raise ValueError("recommendation_persist_limit must be at least 1")

        return cls(
            wardrobe_db_path=str(wardrobe_db_path or DEFAULT_WARDROBE_DB_PATH),
            recommendation_db_path=str(recommendation_db_path or DEFAULT_RECOMMENDATION_DB_PATH),
            rules_path=rules_path or None,
            persist_limit=parsed_limit,
            log_level=str(log_level or "INFO").upper(),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a flat ``key: value`` YAML-style file."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
