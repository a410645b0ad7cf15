from __future__ import annotations

from pathlib import Path

import pytest

CALCULATOR = """package demo;

public class Calculator {

    /**
     * Adds two numbers carefully.
     *
     * @param a first operand
     * @param c removed operand
     * @return String
     * @author alice
     */
    public void add(int a, int b) {
    }

    public int size;
}
"""


@pytest.fixture
def java_project(tmp_path: Path) -> Path:
    """A tiny Maven-style project with one Java source file and a config."""
    (tmp_path / ".easydoc.yml").write_text(
        'author: "bob"\nversion: "1.0.0"\ndate_format: "%Y"\n',
        encoding="utf-8",
    )
    source_dir = tmp_path / "src" / "main" / "java" / "demo"
    source_dir.mkdir(parents=True)
    (source_dir / "Calculator.java").write_text(CALCULATOR, encoding="utf-8")
    return tmp_path


@pytest.fixture
def calculator_path(java_project: Path) -> Path:
    return java_project / "src" / "main" / "java" / "demo" / "Calculator.java"
