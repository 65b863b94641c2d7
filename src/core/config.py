"""
Configuration: default.yaml + .env + 환경변수.

우선순위 (높은 순):
1. 환경변수 (DOCGEN_TEMPLATE_PATH, DOCGEN_LOG_LEVEL, DOCGEN_SEED_SAMPLES)
2. default.yaml (DOCGEN_CONFIG로 경로 변경 가능)
3. 코드 기본값 (DEFAULT_CONFIG)
"""

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "default.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "server": {
        "host": "127.0.0.1",
        "port": 8081,
    },
    "docgen": {
        "template_path": "./templates",
        "seed_samples": True,
        "lock_timeout": 10.0,
    },
    "render": {
        "autoescape": True,
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
}

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """dict 재귀 병합 (override 우선)."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    설정 로드.

    Args:
        config_path: YAML 경로 (None이면 DOCGEN_CONFIG 또는 default.yaml)

    Returns:
        기본값 + YAML + 환경변수가 병합된 설정 dict
    """
    load_dotenv()

    if config_path is None:
        env_path = os.getenv("DOCGEN_CONFIG")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    file_config: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            file_config = yaml.safe_load(f) or {}

    config = _deep_merge(DEFAULT_CONFIG, file_config)
    _apply_env_overrides(config)
    return config


def _apply_env_overrides(config: dict[str, Any]) -> None:
    """환경변수 override 적용 (in-place)."""
    template_path = os.getenv("DOCGEN_TEMPLATE_PATH")
    if template_path:
        config["docgen"]["template_path"] = template_path

    log_level = os.getenv("DOCGEN_LOG_LEVEL")
    if log_level:
        config["logging"]["level"] = log_level.upper()

    seed_samples = os.getenv("DOCGEN_SEED_SAMPLES")
    if seed_samples is not None:
        config["docgen"]["seed_samples"] = seed_samples.strip().lower() in _TRUE_VALUES


@dataclass
class Settings:
    """서비스 실행 설정."""
    template_root: Path
    seed_samples: bool = True
    lock_timeout: float = 10.0
    autoescape: bool = True
    log_level: str = "INFO"
    log_format: str = DEFAULT_CONFIG["logging"]["format"]
    log_datefmt: str = DEFAULT_CONFIG["logging"]["datefmt"]
    host: str = "127.0.0.1"
    port: int = 8081

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Settings":
        """
        설정 dict → Settings.

        template_path가 상대경로면 프로젝트 루트 기준으로 해석.
        """
        docgen = config.get("docgen", {})
        render = config.get("render", {})
        logging_cfg = config.get("logging", {})
        server = config.get("server", {})

        template_root = Path(docgen.get("template_path", "./templates"))
        if not template_root.is_absolute():
            template_root = (PROJECT_ROOT / template_root).resolve()

        return cls(
            template_root=template_root,
            seed_samples=bool(docgen.get("seed_samples", True)),
            lock_timeout=float(docgen.get("lock_timeout", 10.0)),
            autoescape=bool(render.get("autoescape", True)),
            log_level=str(logging_cfg.get("level", "INFO")).upper(),
            log_format=logging_cfg.get("format", DEFAULT_CONFIG["logging"]["format"]),
            log_datefmt=logging_cfg.get("datefmt", DEFAULT_CONFIG["logging"]["datefmt"]),
            host=server.get("host", "127.0.0.1"),
            port=int(server.get("port", 8081)),
        )


def get_settings(config_path: Path | None = None) -> Settings:
    """load_config + Settings.from_config."""
    return Settings.from_config(load_config(config_path))
