"""Configuration loading for easydoc (.easydoc.yml)."""

from __future__ import annotations

import getpass
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".easydoc.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LLMConfig:
    """AI generation settings."""

    runner: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    request_timeout: Optional[float] = None


@dataclass
class TemplateConfig:
    """Comment template overrides, inline text or a directory of ``*.j2`` files."""

    directory: Optional[Path] = None
    class_template: Optional[str] = None
    method_template: Optional[str] = None
    field_template: Optional[str] = None

    def inline(self, kind: str) -> Optional[str]:
        return {
            "class": self.class_template,
            "method": self.method_template,
            "field": self.field_template,
        }.get(kind)


@dataclass
class PromptConfig:
    """AI prompt overrides per symbol kind."""

    class_prompt: Optional[str] = None
    method_prompt: Optional[str] = None
    field_prompt: Optional[str] = None

    def for_kind(self, kind: str) -> Optional[str]:
        return {
            "class": self.class_prompt,
            "method": self.method_prompt,
            "field": self.field_prompt,
        }.get(kind)


@dataclass
class EasyDocConfig:
    """Represents the settings defined in .easydoc.yml."""

    root: Path
    author: str = field(default_factory=lambda: _default_author())
    date_format: str = "%Y-%m-%d %H:%M:%S"
    version: Optional[str] = None
    custom_variables: Dict[str, Any] = field(default_factory=dict)
    templates: TemplateConfig = field(default_factory=TemplateConfig)
    prompts: PromptConfig = field(default_factory=PromptConfig)
    llm: Optional[LLMConfig] = None
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> EasyDocConfig:
    """Load configuration from a directory or an explicit .easydoc.yml path."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return EasyDocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = EasyDocConfig(root=root)
    author = _as_str(data.get("author"))
    if author:
        config.author = author
    date_format = _as_str(data.get("date_format"))
    if date_format:
        config.date_format = date_format
    config.version = _as_str(data.get("version"))

    custom = data.get("custom_variables")
    if custom is not None:
        if not isinstance(custom, dict):
            raise ConfigError("custom_variables must be a mapping of name to value")
        config.custom_variables = {str(key): value for key, value in custom.items()}

    templates_data = _as_dict(data.get("templates"))
    if templates_data:
        directory = _as_str(templates_data.get("dir"))
        config.templates = TemplateConfig(
            directory=root / directory if directory else None,
            class_template=_as_str(templates_data.get("class")),
            method_template=_as_str(templates_data.get("method")),
            field_template=_as_str(templates_data.get("field")),
        )

    prompts_data = _as_dict(data.get("prompts"))
    if prompts_data:
        config.prompts = PromptConfig(
            class_prompt=_as_str(prompts_data.get("class")),
            method_prompt=_as_str(prompts_data.get("method")),
            field_prompt=_as_str(prompts_data.get("field")),
        )

    llm_data = _as_dict(data.get("llm"))
    if llm_data:
        llm = LLMConfig(
            runner=_as_str(llm_data.get("runner")),
            model=_as_str(llm_data.get("model")),
            base_url=_as_str(llm_data.get("base_url")),
            api_key=_as_str(llm_data.get("api_key")),
            temperature=_as_float(llm_data.get("temperature")),
            top_p=_as_float(llm_data.get("top_p")),
            max_tokens=_as_int(llm_data.get("max_tokens")),
            request_timeout=_as_float(llm_data.get("request_timeout")),
        )
        if any(value is not None for value in vars(llm).values()):
            config.llm = llm

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    return config


def _default_author() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "EasyDocConfig",
    "LLMConfig",
    "PromptConfig",
    "TemplateConfig",
    "load_config",
]
