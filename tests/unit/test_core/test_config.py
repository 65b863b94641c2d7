"""
test_config.py - 설정 로드 테스트

우선순위: 환경변수 > YAML > 코드 기본값
"""

from pathlib import Path

import pytest
import yaml

from src.core.config import DEFAULT_CONFIG, PROJECT_ROOT, Settings, get_settings, load_config

# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """테스트 환경의 DOCGEN_* 환경변수 제거."""
    for name in (
        "DOCGEN_TEMPLATE_PATH",
        "DOCGEN_LOG_LEVEL",
        "DOCGEN_SEED_SAMPLES",
        "DOCGEN_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """부분 설정 YAML."""
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump({
            "docgen": {"template_path": str(tmp_path / "tpl"), "seed_samples": False},
            "logging": {"level": "DEBUG"},
        }),
        encoding="utf-8",
    )
    return path


# =============================================================================
# load_config 테스트
# =============================================================================

class TestLoadConfig:
    """load_config 함수 테스트."""

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        """설정 파일 없음 → 코드 기본값."""
        config = load_config(tmp_path / "missing.yaml")

        assert config["docgen"]["template_path"] == DEFAULT_CONFIG["docgen"]["template_path"]
        assert config["server"]["port"] == 8081

    def test_yaml_merged_over_defaults(self, config_file: Path):
        """YAML 값이 기본값을 덮어쓰고 나머지 기본값은 유지."""
        config = load_config(config_file)

        assert config["docgen"]["seed_samples"] is False
        assert config["logging"]["level"] == "DEBUG"
        assert config["docgen"]["lock_timeout"] == 10.0
        assert config["render"]["autoescape"] is True

    def test_env_overrides_yaml(self, config_file: Path, monkeypatch: pytest.MonkeyPatch):
        """환경변수가 YAML보다 우선."""
        monkeypatch.setenv("DOCGEN_TEMPLATE_PATH", "/srv/templates")
        monkeypatch.setenv("DOCGEN_LOG_LEVEL", "warning")
        monkeypatch.setenv("DOCGEN_SEED_SAMPLES", "yes")

        config = load_config(config_file)

        assert config["docgen"]["template_path"] == "/srv/templates"
        assert config["logging"]["level"] == "WARNING"
        assert config["docgen"]["seed_samples"] is True

    def test_docgen_config_env_selects_file(
        self, config_file: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """DOCGEN_CONFIG로 설정 파일 경로 지정."""
        monkeypatch.setenv("DOCGEN_CONFIG", str(config_file))

        config = load_config()

        assert config["logging"]["level"] == "DEBUG"

    def test_defaults_not_mutated(self, config_file: Path):
        """병합이 DEFAULT_CONFIG를 변경하지 않음."""
        load_config(config_file)

        assert DEFAULT_CONFIG["logging"]["level"] == "INFO"
        assert DEFAULT_CONFIG["docgen"]["seed_samples"] is True


# =============================================================================
# Settings 테스트
# =============================================================================

class TestSettings:
    """Settings.from_config 테스트."""

    def test_relative_template_path_resolved_from_project_root(self):
        """상대 template_path → 프로젝트 루트 기준."""
        settings = Settings.from_config(DEFAULT_CONFIG)

        assert settings.template_root == (PROJECT_ROOT / "templates").resolve()

    def test_absolute_template_path_kept(self, tmp_path: Path):
        """절대 template_path는 그대로."""
        settings = Settings.from_config({"docgen": {"template_path": str(tmp_path)}})

        assert settings.template_root == tmp_path

    def test_get_settings(self, config_file: Path, tmp_path: Path):
        """get_settings = load_config + from_config."""
        settings = get_settings(config_file)

        assert settings.template_root == tmp_path / "tpl"
        assert settings.seed_samples is False
        assert settings.log_level == "DEBUG"
        assert settings.autoescape is True
        assert settings.port == 8081
