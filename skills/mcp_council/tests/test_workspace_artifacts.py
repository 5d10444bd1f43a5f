"""
Tests for workspace resolution and artifact reading.
"""

import json
import sys
from pathlib import Path

import pytest

# Ensure mcp_council package is importable
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from mcp_council.core.artifacts import (
    UNKNOWN_QUERY,
    extract_user_query,
    is_stage1_file,
    is_stage2_file,
    load_stage1_answers,
    load_stage2_reviews,
    read_stage1_answer,
    read_stage2_review,
)
from mcp_council.core.errors import ArtifactNotFoundError, InvalidArgumentError, WorkspaceNotFoundError
from mcp_council.core.parsing import extract_content
from mcp_council.core.workspace import find_council_dir, resolve_workspace


class TestWorkspaceResolution:

    def test_finds_council_dir_in_cwd(self, tmp_path):
        (tmp_path / ".council" / "topic").mkdir(parents=True)
        assert resolve_workspace("topic", cwd=tmp_path) == tmp_path / ".council" / "topic"

    def test_walks_up_parent_directories(self, tmp_path):
        (tmp_path / ".council" / "topic").mkdir(parents=True)
        nested = tmp_path / "a" / "b" / "c"
        nested.mkdir(parents=True)

        assert resolve_workspace("topic", cwd=nested) == tmp_path / ".council" / "topic"

    def test_parent_walk_is_bounded(self, tmp_path):
        (tmp_path / ".council").mkdir()
        deep = tmp_path / "1" / "2" / "3" / "4" / "5" / "6"
        deep.mkdir(parents=True)

        # Six levels up is out of reach; falls back to <cwd>/.council
        assert find_council_dir(deep) == deep / ".council"

    def test_nearest_council_dir_wins(self, tmp_path):
        (tmp_path / ".council").mkdir()
        inner = tmp_path / "project"
        (inner / ".council").mkdir(parents=True)

        assert find_council_dir(inner) == inner / ".council"

    def test_council_file_is_not_a_directory(self, tmp_path):
        (tmp_path / ".council").mkdir()
        inner = tmp_path / "project"
        inner.mkdir()
        (inner / ".council").write_text("not a dir", encoding="utf-8")

        assert find_council_dir(inner) == tmp_path / ".council"

    def test_missing_title_dir_reports_paths(self, tmp_path):
        (tmp_path / ".council").mkdir()

        with pytest.raises(WorkspaceNotFoundError) as exc:
            resolve_workspace("absent", cwd=tmp_path)

        assert "Directory not found" in str(exc.value)
        assert str(tmp_path) in str(exc.value)

    def test_missing_council_dir_reports_paths(self, tmp_path):
        with pytest.raises(WorkspaceNotFoundError):
            resolve_workspace("absent", cwd=tmp_path)

    @pytest.mark.parametrize("title", ["../escape", "a/../../b", "/etc", ""])
    def test_unsafe_titles_rejected(self, tmp_path, title):
        (tmp_path / ".council").mkdir()
        with pytest.raises(InvalidArgumentError):
            resolve_workspace(title, cwd=tmp_path)

    def test_nested_title_allowed(self, tmp_path):
        (tmp_path / ".council" / "2024" / "capital").mkdir(parents=True)
        assert resolve_workspace("2024/capital", cwd=tmp_path).name == "capital"


class TestFileClassification:

    @pytest.mark.parametrize("name", ["claude-answer.md", "gpt-answer.json", "answer.md", "my-answer.json.bak"])
    def test_stage1_names(self, name):
        assert is_stage1_file(name)

    @pytest.mark.parametrize("name", ["query.txt", "peer-review-by-claude.md", "final-answer-by-claude.md"])
    def test_non_stage1_names(self, name):
        assert not is_stage1_file(name)

    @pytest.mark.parametrize("name", ["peer-review.md", "peer-review-gemini.md", "peer-review-by-claude.md"])
    def test_stage2_names(self, name):
        assert is_stage2_file(name)


class TestExtractContent:

    def test_response_field_first(self):
        assert extract_content({"response": "r", "content": "c"}) == "r"

    def test_content_field_second(self):
        assert extract_content({"response": 5, "content": "c"}) == "c"

    def test_plain_string(self):
        assert extract_content("just text") == "just text"

    def test_pretty_printed_json_fallback(self):
        value = {"answer": "x"}
        assert extract_content(value) == json.dumps(value, indent=2)


class TestStage1Reading:

    def test_json_answer_with_model(self, tmp_path):
        path = tmp_path / "gpt-answer.json"
        path.write_text(json.dumps({"model": "gpt-4o", "response": "Paris"}), encoding="utf-8")

        answer = read_stage1_answer(path)

        assert answer.model == "gpt-4o"
        assert answer.response == "Paris"
        assert answer.raw == {"model": "gpt-4o", "response": "Paris"}

    def test_json_answer_model_from_filename(self, tmp_path):
        path = tmp_path / "gemini-answer.json"
        path.write_text(json.dumps({"content": "Lyon?"}), encoding="utf-8")

        answer = read_stage1_answer(path)

        assert answer.model == "gemini"
        assert answer.response == "Lyon?"

    def test_markdown_answer_taken_verbatim(self, tmp_path):
        path = tmp_path / "claude-answer.md"
        path.write_text("# Answer\n\nParis", encoding="utf-8")

        answer = read_stage1_answer(path)

        assert answer.model == "claude"
        assert answer.response == "# Answer\n\nParis"

    def test_load_sorted_by_filename(self, tmp_path):
        for name in ["zeta-answer.md", "alpha-answer.md", "mid-answer.json"]:
            (tmp_path / name).write_text(json.dumps({"response": name}) if name.endswith("json") else name,
                                         encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

        answers = load_stage1_answers(tmp_path)

        assert [a.model for a in answers] == ["alpha", "mid", "zeta"]

    def test_no_answers_raises(self, tmp_path):
        (tmp_path / "query.txt").write_text("q", encoding="utf-8")
        with pytest.raises(ArtifactNotFoundError):
            load_stage1_answers(tmp_path)

    def test_directories_are_skipped(self, tmp_path):
        (tmp_path / "old-answer.md").mkdir()
        (tmp_path / "claude-answer.md").write_text("x", encoding="utf-8")

        assert [a.model for a in load_stage1_answers(tmp_path)] == ["claude"]


class TestStage2Reading:

    def test_markdown_review_engine_from_filename(self, tmp_path):
        path = tmp_path / "peer-review-by-gemini.md"
        path.write_text("FINAL RANKING:\n1. Response A", encoding="utf-8")

        review = read_stage2_review(path)

        assert review.engine == "gemini"
        assert review.review.startswith("FINAL RANKING")

    def test_json_review_fields(self, tmp_path):
        path = tmp_path / "peer-review-by-x.json"
        path.write_text(json.dumps({"engine": "codex", "review": "B > A"}), encoding="utf-8")

        review = read_stage2_review(path)

        assert review.engine == "codex"
        assert review.review == "B > A"

    def test_json_review_without_review_field(self, tmp_path):
        path = tmp_path / "peer-review-by-x.json"
        path.write_text(json.dumps({"response": "A wins"}), encoding="utf-8")

        assert read_stage2_review(path).review == "A wins"

    def test_no_reviews_is_empty(self, tmp_path):
        assert load_stage2_reviews(tmp_path) == []


class TestUserQuery:

    def test_query_file_order(self, tmp_path):
        (tmp_path / "question.txt").write_text("third", encoding="utf-8")
        (tmp_path / "user_query.txt").write_text("  second  \n", encoding="utf-8")

        assert extract_user_query(tmp_path) == "second"

    def test_falls_back_to_answer_json(self, tmp_path):
        (tmp_path / "a-answer.md").write_text("no query here", encoding="utf-8")
        (tmp_path / "b-answer.json").write_text(json.dumps({"response": "x"}), encoding="utf-8")
        (tmp_path / "c-answer.json").write_text(json.dumps({"user_query": "From JSON"}), encoding="utf-8")

        assert extract_user_query(tmp_path) == "From JSON"

    def test_query_field_preferred_over_user_query(self, tmp_path):
        (tmp_path / "a-answer.json").write_text(
            json.dumps({"query": "primary", "user_query": "secondary"}), encoding="utf-8"
        )
        assert extract_user_query(tmp_path) == "primary"

    def test_unknown_query(self, tmp_path):
        (tmp_path / "a-answer.json").write_text("{broken", encoding="utf-8")
        assert extract_user_query(tmp_path) == UNKNOWN_QUERY

    def test_missing_directory_never_raises(self, tmp_path):
        assert extract_user_query(tmp_path / "gone") == UNKNOWN_QUERY
