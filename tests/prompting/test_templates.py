"""Tests for template rendering."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from easydoc.config import EasyDocConfig, TemplateConfig
from easydoc.models import DocumentedSymbol, ParameterInfo
from easydoc.prompting.templates import TemplateRenderer

NOW = datetime(2024, 1, 2, 3, 4, 5)


def _method() -> DocumentedSymbol:
    return DocumentedSymbol(
        kind="method",
        name="findUser",
        qualified_name="Repo.findUser",
        language="java",
        start=0,
        indent="    ",
        text="public <T> User findUser(String id) throws IOException { }",
        parameters=[
            ParameterInfo(name="<T>"),
            ParameterInfo(name="userId", type_name="String", qualified_type_name="java.lang.String"),
        ],
        type_parameters=["T"],
        return_type="User",
        exceptions=["IOException"],
    )


def _field() -> DocumentedSymbol:
    return DocumentedSymbol(
        kind="field",
        name="maxSize",
        qualified_name="Repo.maxSize",
        language="java",
        start=0,
        indent="    ",
        text="private int maxSize;",
        parameters=[ParameterInfo(name="maxSize", type_name="int", qualified_type_name="int")],
    )


@pytest.fixture
def config(tmp_path: Path) -> EasyDocConfig:
    return EasyDocConfig(root=tmp_path, author="alice", version="2.0.0")


def test_render_method_with_default_template(config: EasyDocConfig) -> None:
    rendered = TemplateRenderer(config).render(_method(), now=NOW)

    assert rendered.splitlines() == [
        "/**",
        " * Find User",
        " *",
        " * @param <T> type parameter",
        " * @param userId user id",
        " * @return User",
        " * @throws IOException",
        " * @author alice",
        " * @date 2024-01-02 03:04:05",
        " * @version 2.0.0",
        " */",
    ]


def test_render_field_with_default_template(config: EasyDocConfig) -> None:
    rendered = TemplateRenderer(config).render(_field(), now=NOW)

    assert rendered == "/**\n * The maxSize.\n */"


def test_inline_template_overrides_default(config: EasyDocConfig) -> None:
    config.templates = TemplateConfig(field_template="/** {{ field_type }} {{ field_name }} by {{ team }} */")
    config.custom_variables = {"team": "core"}

    rendered = TemplateRenderer(config).render(_field(), now=NOW)

    assert rendered == "/** int maxSize by core */"


def test_templates_directory_overrides_default(tmp_path: Path) -> None:
    templates_dir = tmp_path / "templates"
    templates_dir.mkdir()
    (templates_dir / "field.j2").write_text("/** Field {{ field_name }}. */\n", encoding="utf-8")
    config = EasyDocConfig(root=tmp_path, templates=TemplateConfig(directory=templates_dir))

    renderer = TemplateRenderer(config)

    assert renderer.render(_field(), now=NOW) == "/** Field maxSize. */"
    assert renderer.render(_method(), now=NOW).startswith("/**\n * Find User")


def test_return_type_context_splits_class_name(config: EasyDocConfig) -> None:
    symbol = _method()
    symbol.return_type = "IPage<UserDTO>"

    context = TemplateRenderer(config).build_context(symbol, now=NOW)

    assert context["return_type_simple"] == "IPage<UserDTO>"
    assert context["return_type"].short_name == "IPage"
    assert context["return_type"].split_name == "page"


def test_project_version_reads_nearest_pom(tmp_path: Path) -> None:
    (tmp_path / "pom.xml").write_text(
        "<project><parent><version>9.9.9</version></parent>"
        "<artifactId>demo</artifactId><version>3.1.4</version></project>",
        encoding="utf-8",
    )
    source_dir = tmp_path / "src" / "main" / "java"
    source_dir.mkdir(parents=True)
    java_file = source_dir / "Demo.java"
    java_file.write_text("class Demo {}", encoding="utf-8")
    config = EasyDocConfig(root=tmp_path, author="alice")

    renderer = TemplateRenderer(config)

    assert renderer.project_version(java_file) == "3.1.4"
    context = renderer.build_context(_field(), java_file, now=NOW)
    assert context["version"] == context["since"] == "3.1.4"


def test_project_version_defaults_without_pom(tmp_path: Path) -> None:
    config = EasyDocConfig(root=tmp_path)
    assert TemplateRenderer(config).project_version(tmp_path / "Missing.java") == "1.0.0"


def test_describe_context_serialises_parameters(config: EasyDocConfig) -> None:
    renderer = TemplateRenderer(config)
    context = renderer.build_context(_method(), now=NOW)

    described = renderer.describe_context(context)

    assert '"author": "alice"' in described
    assert '"split_name": "user id"' in described
