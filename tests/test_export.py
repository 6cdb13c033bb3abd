"""
Tests for exporting analysis results.

Feature: ghanalyzer
"""

import csv
import io
import json
from datetime import date

import pytest

from ghanalyzer.export import (
    ANALYZER_VERSION,
    export_to_file,
    prepare_commit_activity_for_export,
    prepare_contributors_for_export,
    prepare_languages_for_export,
    prepare_repo_data_for_export,
    to_csv,
    to_json,
)
from ghanalyzer.testing import create_mock_contributor


def read_csv(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


def test_to_json_is_indented() -> None:
    assert to_json({"a": [1, 2]}) == '{\n  "a": [\n    1,\n    2\n  ]\n}'


def test_to_csv_list_of_rows() -> None:
    rows = [
        {"language": "Python", "bytes": 7000, "note": None},
        {"language": "C, the language", "bytes": 2000, "note": "quoted"},
    ]

    assert read_csv(to_csv(rows)) == [
        ["language", "bytes", "note"],
        ["Python", "7000", ""],
        ["C, the language", "2000", "quoted"],
    ]


def test_to_csv_single_object() -> None:
    data = {"name": "Hello-World", "topics": ["octocat", "api"], "license": None}

    assert read_csv(to_csv(data)) == [
        ["Property", "Value"],
        ["name", "Hello-World"],
        ["topics", '["octocat", "api"]'],
        ["license", ""],
    ]


def test_to_csv_empty_list() -> None:
    assert to_csv([]) == ""


def test_prepare_repo_data(sample_repository) -> None:
    export = prepare_repo_data_for_export(sample_repository, languages={"C": 1})

    repository = export["repository"]
    assert repository["full_name"] == "octocat/Hello-World"
    assert repository["url"] == "https://github.com/octocat/Hello-World"
    assert repository["owner"] == "octocat"
    assert repository["license"] == "MIT License"
    assert repository["is_private"] is False
    assert repository["is_fork"] is False
    assert export["languages"] == {"C": 1}
    assert export["analysis_metadata"]["analyzer_version"] == ANALYZER_VERSION


def test_prepare_repo_data_without_license(sample_repository) -> None:
    sample_repository["license"] = None

    assert prepare_repo_data_for_export(sample_repository)["repository"]["license"] is None


def test_prepare_contributors() -> None:
    rows = prepare_contributors_for_export([create_mock_contributor("hubot", 7, 2)])

    assert rows == [
        {
            "login": "hubot",
            "id": 2,
            "type": "User",
            "contributions": 7,
            "avatar_url": "https://avatars.githubusercontent.com/u/2?v=4",
            "html_url": "https://github.com/hubot",
            "site_admin": False,
        }
    ]


def test_prepare_languages(sample_languages) -> None:
    rows = prepare_languages_for_export(sample_languages)

    assert rows == [
        {"language": "Python", "bytes": 7000, "percentage": "70.00"},
        {"language": "C", "bytes": 2000, "percentage": "20.00"},
        {"language": "Shell", "bytes": 1000, "percentage": "10.00"},
    ]


def test_prepare_commit_activity(sample_commit_activity) -> None:
    rows = prepare_commit_activity_for_export(sample_commit_activity)

    assert rows[0] == {
        "week_timestamp": 1_704_585_600,
        "week_date": "2024-01-07",
        "total_commits": 3,
        "daily_commits": [0, 1, 2, 0, 0, 0, 0],
    }


def test_export_to_file_json(tmp_path, sample_languages) -> None:
    path = export_to_file(
        sample_languages, "languages", "json", tmp_path, today=date(2024, 1, 20)
    )

    assert path == tmp_path / "languages_2024-01-20.json"
    assert json.loads(path.read_text(encoding="utf-8")) == sample_languages


def test_export_to_file_csv(tmp_path, sample_languages) -> None:
    rows = prepare_languages_for_export(sample_languages)

    path = export_to_file(rows, "languages", "csv", tmp_path / "out", today=date(2024, 1, 20))

    assert path.name == "languages_2024-01-20.csv"
    assert read_csv(path.read_text(encoding="utf-8"))[1] == ["Python", "7000", "70.00"]


def test_export_to_file_rejects_unknown_format(tmp_path) -> None:
    with pytest.raises(ValueError, match="Unsupported export format"):
        export_to_file({}, fmt="xml", directory=tmp_path)

    assert list(tmp_path.iterdir()) == []
