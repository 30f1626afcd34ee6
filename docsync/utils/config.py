"""Configuration loader and validator for the documentation synchronizer.

Loads settings from configs/config.yaml and provides typed access
to all configuration sections via dataclasses. Credentials and model
overrides come from the environment and are resolved once here, so
that downstream components never consult os.environ themselves.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "configs" / "config.yaml"

OPENAI_KEY_VAR = "OPENAI_API_KEY"
OPENROUTER_KEY_VAR = "OPENROUTER_API_KEY"
OPENROUTER_SITE_URL_VAR = "OPENROUTER_SITE_URL"
OPENROUTER_APP_NAME_VAR = "OPENROUTER_APP_NAME"

_MODEL_OVERRIDE_VARS = {
    "code_analysis": "CODE_ANALYSIS_MODEL",
    "doc_analysis": "DOC_ANALYSIS_MODEL",
    "comparison": "COMPARISON_MODEL",
    "update_generation": "UPDATE_GENERATOR_MODEL",
}

_OVERSIZE_POLICIES = ("reject", "truncate")


class Backend(str, Enum):
    """LLM backends the client can be bound to."""

    OPENAI = "openai"
    OPENROUTER = "openrouter"
    NONE = "none"


@dataclass
class APIConfig:
    """Configuration for the chat-completion backends."""

    openai_base_url: Optional[str] = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openai_default_model: str = "gpt-3.5-turbo"
    openrouter_default_model: str = "qwen/qwen3-235b-a22b:free"
    temperature: Optional[float] = None
    timeout: Optional[float] = None


@dataclass
class FileSetConfig:
    """Which files a loader picks up and which directories it skips."""

    extensions: list[str] = field(default_factory=list)
    exclude_dirs: list[str] = field(default_factory=list)
    case_sensitive: bool = True


@dataclass
class LoaderConfig:
    """Configuration for the code and documentation loaders."""

    code: FileSetConfig = field(
        default_factory=lambda: FileSetConfig(
            extensions=[".js"],
            exclude_dirs=["node_modules", ".git"],
            case_sensitive=True,
        )
    )
    docs: FileSetConfig = field(
        default_factory=lambda: FileSetConfig(
            extensions=[".md"],
            exclude_dirs=[],
            case_sensitive=False,
        )
    )


@dataclass
class PromptConfig:
    """Configuration for prompt rendering and input size limits.

    Attributes:
        templates_dir: Directory holding the Jinja2 prompt templates.
            None selects the templates shipped with the package.
        max_input_chars: Largest file body embedded into a prompt.
            Zero disables the check.
        oversize_policy: Either "reject" or "truncate".
    """

    templates_dir: Optional[str] = None
    max_input_chars: int = 100_000
    oversize_policy: str = "reject"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    api: APIConfig = field(default_factory=APIConfig)
    loader: LoaderConfig = field(default_factory=LoaderConfig)
    prompts: PromptConfig = field(default_factory=PromptConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


@dataclass(frozen=True)
class ProviderSettings:
    """The backend the process talks to, fixed at startup.

    Attributes:
        backend: Which backend was selected.
        api_key: Credential for that backend.
        base_url: Endpoint override, or None for the SDK default.
        default_headers: Extra headers sent with every request.
        default_model: Model used when a stage has no override.
        temperature: Sampling temperature, or None for the backend default.
        timeout: Request timeout in seconds, or None for the SDK default.
    """

    backend: Backend = Backend.NONE
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    default_headers: dict[str, str] = field(default_factory=dict)
    default_model: str = "gpt-3.5-turbo"
    temperature: Optional[float] = None
    timeout: Optional[float] = None

    @property
    def configured(self) -> bool:
        return self.backend is not Backend.NONE


@dataclass(frozen=True)
class ModelConfig:
    """Model names for each pipeline stage.

    Attributes:
        default: Provider default used when a stage has no override.
        code_analysis: Override for code analysis.
        doc_analysis: Override for documentation analysis.
        comparison: Override for the comparison step.
        update_generation: Override for update generation.
    """

    default: str
    code_analysis: Optional[str] = None
    doc_analysis: Optional[str] = None
    comparison: Optional[str] = None
    update_generation: Optional[str] = None

    def for_stage(self, stage: str) -> str:
        """Return the model to use for a pipeline stage.

        Args:
            stage: One of code_analysis, doc_analysis, comparison,
                update_generation.

        Returns:
            The stage override if set, otherwise the provider default.

        Raises:
            ValueError: If the stage name is unknown.
        """
        if stage not in _MODEL_OVERRIDE_VARS:
            raise ValueError(f"Unknown pipeline stage: {stage}")
        return getattr(self, stage) or self.default


def resolve_provider(
    api: Optional[APIConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ProviderSettings:
    """Select the LLM backend from the credentials in the environment.

    OPENAI_API_KEY is checked first, then OPENROUTER_API_KEY; the first
    one present wins. With neither, the returned settings are
    unconfigured and every completion call will fail softly.

    Args:
        api: API configuration with endpoints and default models.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        The resolved ProviderSettings.
    """
    api = api or APIConfig()
    env = os.environ if environ is None else environ

    openai_key = env.get(OPENAI_KEY_VAR)
    if openai_key:
        logger.info("Using OpenAI backend")
        return ProviderSettings(
            backend=Backend.OPENAI,
            api_key=openai_key,
            base_url=api.openai_base_url,
            default_model=api.openai_default_model,
            temperature=api.temperature,
            timeout=api.timeout,
        )

    openrouter_key = env.get(OPENROUTER_KEY_VAR)
    if openrouter_key:
        headers = {}
        site_url = env.get(OPENROUTER_SITE_URL_VAR)
        if site_url:
            headers["HTTP-Referer"] = site_url
        app_name = env.get(OPENROUTER_APP_NAME_VAR)
        if app_name:
            headers["X-Title"] = app_name
        logger.info("Using OpenRouter backend at %s", api.openrouter_base_url)
        return ProviderSettings(
            backend=Backend.OPENROUTER,
            api_key=openrouter_key,
            base_url=api.openrouter_base_url,
            default_headers=headers,
            default_model=api.openrouter_default_model,
            temperature=api.temperature,
            timeout=api.timeout,
        )

    logger.warning(
        "Neither %s nor %s is set; LLM calls are disabled",
        OPENAI_KEY_VAR,
        OPENROUTER_KEY_VAR,
    )
    return ProviderSettings(
        backend=Backend.NONE,
        default_model=api.openai_default_model,
        temperature=api.temperature,
        timeout=api.timeout,
    )


def resolve_models(
    provider: ProviderSettings,
    environ: Optional[Mapping[str, str]] = None,
) -> ModelConfig:
    """Build the per-stage model table from environment overrides.

    Args:
        provider: The selected provider, which supplies the default model.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        A ModelConfig with overrides for every stage that has one.
    """
    env = os.environ if environ is None else environ
    overrides = {
        stage: env.get(var) or None for stage, var in _MODEL_OVERRIDE_VARS.items()
    }
    return ModelConfig(default=provider.default_model, **overrides)


def _section(data: dict, key: str) -> dict:
    """Return a mapping section, treating an empty ``key:`` as absent.

    Raises:
        ValueError: If the section is present but not a mapping.
    """
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{key} must be a mapping, got {type(value).__name__}")
    return value


def _string_list(data: dict, key: str, default: list[str]) -> list[str]:
    """Return a list-of-strings setting.

    Raises:
        ValueError: If the value is a scalar or holds non-string items.
    """
    value = data.get(key)
    if value is None:
        return list(default)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{key} must be a list of strings, got {value!r}")
    return value


def _build_file_set(data: dict, defaults: FileSetConfig) -> FileSetConfig:
    """Build a FileSetConfig from a dictionary.

    Args:
        data: Dictionary with loader settings.
        defaults: Values to use for missing keys.

    Returns:
        A configured FileSetConfig instance.

    Raises:
        ValueError: If ``extensions`` or ``exclude_dirs`` is not a list.
    """
    return FileSetConfig(
        extensions=_string_list(data, "extensions", defaults.extensions),
        exclude_dirs=_string_list(data, "exclude_dirs", defaults.exclude_dirs),
        case_sensitive=data.get("case_sensitive", defaults.case_sensitive),
    )


def _build_prompt_config(data: dict) -> PromptConfig:
    """Build a PromptConfig from a dictionary.

    Args:
        data: Dictionary with prompt settings.

    Returns:
        A configured PromptConfig instance.

    Raises:
        ValueError: If the oversize policy is not recognized.
    """
    policy = data.get("oversize_policy", "reject")
    if policy not in _OVERSIZE_POLICIES:
        raise ValueError(
            f"oversize_policy must be one of {', '.join(_OVERSIZE_POLICIES)}, "
            f"got {policy!r}"
        )
    return PromptConfig(
        templates_dir=data.get("templates_dir"),
        max_input_chars=int(data.get("max_input_chars", 100_000)),
        oversize_policy=policy,
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values. API keys
    and model overrides are never read from the file; see
    resolve_provider and resolve_models.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            default path at configs/config.yaml.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
        ValueError: If a setting has an invalid value.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig()

    with open(path) as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(
            f"config file {path} must contain a mapping, got {type(raw).__name__}"
        )

    logger.info("Loaded configuration from %s", path)

    api_data = _section(raw, "api")
    api_config = APIConfig(
        openai_base_url=api_data.get("openai_base_url"),
        openrouter_base_url=api_data.get(
            "openrouter_base_url", "https://openrouter.ai/api/v1"
        ),
        openai_default_model=api_data.get("openai_default_model", "gpt-3.5-turbo"),
        openrouter_default_model=api_data.get(
            "openrouter_default_model", "qwen/qwen3-235b-a22b:free"
        ),
        temperature=api_data.get("temperature"),
        timeout=api_data.get("timeout"),
    )

    loader_data = _section(raw, "loader")
    default_loader = LoaderConfig()
    loader_config = LoaderConfig(
        code=_build_file_set(_section(loader_data, "code"), default_loader.code),
        docs=_build_file_set(_section(loader_data, "docs"), default_loader.docs),
    )

    logging_data = _section(raw, "logging")
    logging_config = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        format=logging_data.get(
            "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ),
        file=logging_data.get("file"),
    )

    return AppConfig(
        api=api_config,
        loader=loader_config,
        prompts=_build_prompt_config(_section(raw, "prompts")),
        logging=logging_config,
    )
