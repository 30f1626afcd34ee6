"""Tests for configuration loading and provider resolution."""

from pathlib import Path

import pytest
import yaml

from docsync.utils.config import (
    APIConfig,
    AppConfig,
    Backend,
    FileSetConfig,
    LoaderConfig,
    LoggingConfig,
    ModelConfig,
    PromptConfig,
    ProviderSettings,
    load_config,
    resolve_models,
    resolve_provider,
)


class TestAPIConfig:
    """Tests for APIConfig defaults."""

    def test_defaults(self) -> None:
        config = APIConfig()
        assert config.openai_default_model == "gpt-3.5-turbo"
        assert config.openrouter_default_model == "qwen/qwen3-235b-a22b:free"
        assert config.openrouter_base_url == "https://openrouter.ai/api/v1"
        assert config.temperature is None
        assert config.timeout is None


class TestAppConfigDefaults:
    """Tests for AppConfig with all defaults."""

    def test_default_construction(self) -> None:
        config = AppConfig()
        assert isinstance(config.api, APIConfig)
        assert isinstance(config.loader, LoaderConfig)
        assert isinstance(config.prompts, PromptConfig)
        assert isinstance(config.logging, LoggingConfig)

    def test_default_code_filter(self) -> None:
        config = AppConfig()
        assert config.loader.code.extensions == [".js"]
        assert config.loader.code.case_sensitive is True
        assert "node_modules" in config.loader.code.exclude_dirs
        assert ".git" in config.loader.code.exclude_dirs

    def test_default_doc_filter(self) -> None:
        config = AppConfig()
        assert config.loader.docs.extensions == [".md"]
        assert config.loader.docs.case_sensitive is False
        assert config.loader.docs.exclude_dirs == []

    def test_default_logging_level(self) -> None:
        assert AppConfig().logging.level == "INFO"


class TestLoadConfig:
    """Tests for the load_config function."""

    def test_load_default_config(self) -> None:
        config = load_config()
        assert isinstance(config, AppConfig)
        assert config.loader.code.extensions == [".js"]
        assert config.prompts.oversize_policy == "reject"

    def test_load_from_explicit_path(self, tmp_path: Path) -> None:
        config_data = {
            "api": {"openai_default_model": "gpt-4o-mini", "temperature": 0.3},
            "loader": {"code": {"extensions": [".js", ".ts"]}},
            "prompts": {"max_input_chars": 500, "oversize_policy": "truncate"},
            "logging": {"level": "DEBUG"},
        }
        config_file = tmp_path / "test_config.yaml"
        with open(config_file, "w") as f:
            yaml.dump(config_data, f)

        config = load_config(str(config_file))
        assert config.api.openai_default_model == "gpt-4o-mini"
        assert config.api.temperature == 0.3
        assert config.loader.code.extensions == [".js", ".ts"]
        # Unspecified keys keep their defaults
        assert config.loader.code.exclude_dirs == ["node_modules", ".git"]
        assert config.loader.docs.extensions == [".md"]
        assert config.prompts.max_input_chars == 500
        assert config.prompts.oversize_policy == "truncate"
        assert config.logging.level == "DEBUG"

    def test_load_nonexistent_returns_defaults(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "nonexistent.yaml"))
        assert isinstance(config, AppConfig)
        assert config.api.openai_default_model == "gpt-3.5-turbo"

    def test_load_empty_file_returns_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        config = load_config(str(config_file))
        assert isinstance(config, AppConfig)

    def test_invalid_oversize_policy(self, tmp_path: Path) -> None:
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("prompts:\n  oversize_policy: split\n")
        with pytest.raises(ValueError, match="oversize_policy"):
            load_config(str(config_file))

    def test_empty_sections_use_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "sparse.yaml"
        config_file.write_text("api:\nloader:\n  code:\n  docs:\nprompts:\nlogging:\n")
        config = load_config(str(config_file))
        assert config.api.openai_default_model == "gpt-3.5-turbo"
        assert config.loader.code.extensions == [".js"]
        assert config.loader.docs.extensions == [".md"]
        assert config.prompts.oversize_policy == "reject"
        assert config.logging.level == "INFO"

    def test_non_mapping_document_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- api\n- loader\n")
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_config(str(config_file))

    def test_non_mapping_section_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "scalar.yaml"
        config_file.write_text("loader: everything\n")
        with pytest.raises(ValueError, match="loader must be a mapping"):
            load_config(str(config_file))

    def test_scalar_extensions_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "scalar_ext.yaml"
        config_file.write_text("loader:\n  code:\n    extensions: .js\n")
        with pytest.raises(ValueError, match="extensions must be a list"):
            load_config(str(config_file))

    def test_scalar_exclude_dirs_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "scalar_dirs.yaml"
        config_file.write_text("loader:\n  docs:\n    exclude_dirs: build\n")
        with pytest.raises(ValueError, match="exclude_dirs must be a list"):
            load_config(str(config_file))


class TestFileSetConfig:
    """Tests for FileSetConfig."""

    def test_defaults(self) -> None:
        config = FileSetConfig()
        assert config.extensions == []
        assert config.exclude_dirs == []
        assert config.case_sensitive is True


class TestResolveProvider:
    """Tests for backend selection from credentials."""

    def test_openai_selected(self) -> None:
        settings = resolve_provider(APIConfig(), {"OPENAI_API_KEY": "sk-test"})
        assert settings.backend is Backend.OPENAI
        assert settings.api_key == "sk-test"
        assert settings.base_url is None
        assert settings.default_model == "gpt-3.5-turbo"
        assert settings.default_headers == {}
        assert settings.configured

    def test_openrouter_selected(self) -> None:
        settings = resolve_provider(APIConfig(), {"OPENROUTER_API_KEY": "or-test"})
        assert settings.backend is Backend.OPENROUTER
        assert settings.api_key == "or-test"
        assert settings.base_url == "https://openrouter.ai/api/v1"
        assert settings.default_model == "qwen/qwen3-235b-a22b:free"

    def test_openrouter_identification_headers(self) -> None:
        settings = resolve_provider(
            APIConfig(),
            {
                "OPENROUTER_API_KEY": "or-test",
                "OPENROUTER_SITE_URL": "https://example.com",
                "OPENROUTER_APP_NAME": "docsync",
            },
        )
        assert settings.default_headers == {
            "HTTP-Referer": "https://example.com",
            "X-Title": "docsync",
        }

    def test_openai_checked_first(self) -> None:
        settings = resolve_provider(
            APIConfig(),
            {"OPENAI_API_KEY": "sk-test", "OPENROUTER_API_KEY": "or-test"},
        )
        assert settings.backend is Backend.OPENAI

    def test_no_credentials(self) -> None:
        settings = resolve_provider(APIConfig(), {})
        assert settings.backend is Backend.NONE
        assert settings.api_key is None
        assert not settings.configured

    def test_empty_key_treated_as_missing(self) -> None:
        settings = resolve_provider(APIConfig(), {"OPENAI_API_KEY": ""})
        assert settings.backend is Backend.NONE

    def test_api_options_carried(self) -> None:
        api = APIConfig(temperature=0.1, timeout=30.0)
        settings = resolve_provider(api, {"OPENAI_API_KEY": "sk-test"})
        assert settings.temperature == 0.1
        assert settings.timeout == 30.0


class TestResolveModels:
    """Tests for per-stage model overrides."""

    def test_defaults_follow_provider(self) -> None:
        provider = ProviderSettings(
            backend=Backend.OPENROUTER, default_model="qwen/qwen3-235b-a22b:free"
        )
        models = resolve_models(provider, {})
        assert models.for_stage("code_analysis") == "qwen/qwen3-235b-a22b:free"
        assert models.for_stage("update_generation") == "qwen/qwen3-235b-a22b:free"

    def test_overrides(self) -> None:
        provider = ProviderSettings(
            backend=Backend.OPENAI, default_model="gpt-3.5-turbo"
        )
        models = resolve_models(
            provider,
            {
                "CODE_ANALYSIS_MODEL": "gpt-4o",
                "DOC_ANALYSIS_MODEL": "gpt-4o-mini",
                "COMPARISON_MODEL": "o3-mini",
                "UPDATE_GENERATOR_MODEL": "gpt-4.1",
            },
        )
        assert models.for_stage("code_analysis") == "gpt-4o"
        assert models.for_stage("doc_analysis") == "gpt-4o-mini"
        assert models.for_stage("comparison") == "o3-mini"
        assert models.for_stage("update_generation") == "gpt-4.1"

    def test_unknown_stage(self) -> None:
        with pytest.raises(ValueError, match="Unknown pipeline stage"):
            ModelConfig(default="m").for_stage("summarize")
