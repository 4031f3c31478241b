"""Unit tests for utility functions (phpdock.utils).

Tests cover:
- load_json / load_yaml / load_data_file (use tmp_path)
- normalize_relative / path_segments
- Rich output helpers
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from phpdock.utils import (
    load_data_file,
    load_json,
    load_yaml,
    normalize_relative,
    path_segments,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


class TestLoaders:
    @pytest.mark.unit
    def test_load_json(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"a": 1}), encoding="utf-8")
        assert load_json(path) == {"a": 1}

    @pytest.mark.unit
    def test_load_json_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")

    @pytest.mark.unit
    def test_load_yaml(self, tmp_path: Path):
        path = tmp_path / "data.yaml"
        path.write_text("a: 1\nb: [x, y]\n", encoding="utf-8")
        assert load_yaml(path) == {"a": 1, "b": ["x", "y"]}

    @pytest.mark.unit
    @pytest.mark.parametrize("suffix", [".yaml", ".yml", ".YML"])
    def test_data_file_yaml_by_suffix(self, tmp_path: Path, suffix):
        path = tmp_path / f"data{suffix}"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        assert load_data_file(path) == [1, 2]

    @pytest.mark.unit
    def test_data_file_defaults_to_json(self, tmp_path: Path):
        path = tmp_path / "data.txt"
        path.write_text("[1, 2]", encoding="utf-8")
        assert load_data_file(path) == [1, 2]


class TestPathHelpers:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("", "."),
            (".", "."),
            ("./", "."),
            ("src//app1/", "src/app1"),
            ("./public", "public"),
            ("src\\app", "src/app"),
        ],
    )
    def test_normalize_relative(self, path, expected):
        assert normalize_relative(path) == expected

    @pytest.mark.unit
    def test_path_segments(self):
        assert path_segments("a//b\\c/") == ["a", "b", "c"]
        assert path_segments("") == []


class TestRichHelpers:
    @pytest.mark.unit
    def test_print_helpers_use_console(self):
        with patch("phpdock.utils.console") as mock_console:
            print_success("ok")
            print_error("bad")
            print_warning("hmm")
        printed = [call.args[0] for call in mock_console.print.call_args_list]
        assert printed == [
            "[bold green]ok[/bold green]",
            "[bold red]bad[/bold red]",
            "[bold yellow]hmm[/bold yellow]",
        ]

    @pytest.mark.unit
    def test_print_summary_table(self):
        with patch("phpdock.utils.console") as mock_console:
            print_summary_table({"a": "1", "b": "2"}, title="T")
        table = mock_console.print.call_args_list[0].args[0]
        assert table.title == "T"
        assert table.row_count == 2
