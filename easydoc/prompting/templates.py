"""Renders comment templates for documented symbols with Jinja2."""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, Template

from ..config import EasyDocConfig
from ..logging import get_logger
from ..models import DocumentedSymbol, ParameterInfo
from .constants import DEFAULT_TEMPLATES, DEFAULT_VERSION
from .naming import convert_class_name, first_upper_converter, lower_first, split_name

_POM_PARENT = re.compile(r"<parent>.*?</parent>", re.DOTALL)
_POM_VERSION = re.compile(r"<version>\s*([^<]+?)\s*</version>")
_GENERIC_TYPE = "parameter"


@dataclass
class TemplateParameter:
    """A parameter, generic ``<T>`` or return value as exposed to templates."""

    name: str
    original_name: str
    short_name: str
    lower_first_name: str
    split_name: str
    simple_type_name: str
    qualified_type_name: str
    description: str

    def __str__(self) -> str:
        return self.simple_type_name


class TemplateRenderer:
    """Builds template contexts and renders the class, method and field templates.

    Template lookup order for a symbol kind: inline text from the config, then
    ``<kind>.j2`` in the configured templates directory, then the built-in
    default.
    """

    def __init__(self, config: EasyDocConfig) -> None:
        self.config = config
        self._logger = get_logger("templates")
        self._env = self._create_env(config.templates.directory)
        self._version_cache: Dict[Path, str] = {}

    def render(
        self,
        symbol: DocumentedSymbol,
        path: Path | None = None,
        *,
        now: datetime | None = None,
    ) -> str:
        context = self.build_context(symbol, path, now=now)
        rendered = self.template_for(symbol.kind).render(**context)
        return rendered.strip()

    def template_source(self, kind: str) -> str:
        """Raw template text for ``kind``; the AI prompt embeds it."""
        inline = self.config.templates.inline(kind)
        if inline:
            return inline
        loader = self._env.loader
        assert loader is not None
        source, _, _ = loader.get_source(self._env, f"{kind}.j2")
        return source

    def template_for(self, kind: str) -> Template:
        inline = self.config.templates.inline(kind)
        if inline:
            return self._env.from_string(inline)
        if kind not in DEFAULT_TEMPLATES:
            raise ValueError(f"Unknown symbol kind '{kind}'")
        return self._env.get_template(f"{kind}.j2")

    def build_context(
        self,
        symbol: DocumentedSymbol,
        path: Path | None = None,
        *,
        now: datetime | None = None,
    ) -> Dict[str, Any]:
        moment = now or datetime.now()
        version = self.config.version or self.project_version(path)
        context: Dict[str, Any] = {
            "author": self.config.author,
            "date": moment.strftime(self.config.date_format),
            "version": version,
            "since": version,
            "description": first_upper_converter(symbol.name),
            "parameters": [],
            "return_type": "",
            "return_type_simple": "",
            "exceptions": [],
            "field_name": "",
            "field_type": "",
        }
        if symbol.kind == "field":
            context["field_name"] = symbol.name
            if symbol.parameters:
                context["field_type"] = symbol.parameters[0].type_name
        else:
            context["parameters"] = [_template_parameter(item) for item in symbol.parameters]
            context["exceptions"] = list(symbol.exceptions)
            if symbol.return_type:
                context["return_type"] = _return_parameter(symbol.return_type)
                context["return_type_simple"] = symbol.return_type
        context.update(self.config.custom_variables)
        return context

    def describe_context(self, context: Dict[str, Any]) -> str:
        """JSON rendering of a template context for AI prompts."""
        return json.dumps(context, indent=2, ensure_ascii=False, default=_json_default)

    def project_version(self, path: Path | None) -> str:
        """Version from the nearest ``pom.xml`` above ``path``, else the default."""
        if path is None:
            return DEFAULT_VERSION
        start = path if path.is_dir() else path.parent
        start = start.resolve()
        if start in self._version_cache:
            return self._version_cache[start]
        version = DEFAULT_VERSION
        for directory in [start, *start.parents]:
            pom = directory / "pom.xml"
            if pom.is_file():
                version = _version_from_pom(pom) or DEFAULT_VERSION
                break
        self._version_cache[start] = version
        return version

    def _create_env(self, templates_dir: Path | None) -> Environment:
        loaders: List[Any] = []
        if templates_dir is not None:
            if templates_dir.is_dir():
                loaders.append(FileSystemLoader(str(templates_dir)))
            else:
                self._logger.warning("Templates directory %s does not exist; using defaults", templates_dir)
        loaders.append(DictLoader({f"{kind}.j2": text for kind, text in DEFAULT_TEMPLATES.items()}))
        return Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )


def _template_parameter(info: ParameterInfo) -> TemplateParameter:
    generic = info.name.startswith("<")
    words = split_name(info.name)
    return TemplateParameter(
        name=info.name,
        original_name=info.name,
        short_name=info.name,
        lower_first_name=lower_first(info.name),
        split_name=words,
        simple_type_name=_GENERIC_TYPE if generic else info.type_name,
        qualified_type_name=_GENERIC_TYPE if generic else info.qualified_type_name,
        description="type parameter" if generic else words,
    )


def _return_parameter(return_type: str) -> TemplateParameter:
    class_name = return_type.split("<", 1)[0].strip().rsplit(".", 1)[-1]
    words = convert_class_name(class_name)
    return TemplateParameter(
        name=return_type,
        original_name=return_type,
        short_name=class_name,
        lower_first_name=lower_first(class_name),
        split_name=words,
        simple_type_name=class_name,
        qualified_type_name=return_type,
        description=words,
    )


def _version_from_pom(pom: Path) -> Optional[str]:
    try:
        text = pom.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    match = _POM_VERSION.search(_POM_PARENT.sub("", text, count=1))
    return match.group(1) if match else None


def _json_default(value: Any) -> Any:
    if isinstance(value, TemplateParameter):
        return asdict(value)
    return str(value)


__all__ = ["TemplateParameter", "TemplateRenderer"]
