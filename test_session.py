"""Tests for the checker session, loading, reports and the runner."""

import json

import pytest
from balancecheck import (
    BalanceChecker,
    BalanceCheckRunner,
    CheckerConfig,
    ConfigError,
    DocumentNotFoundError,
    ParseError,
    enumerate_paths,
    load_config,
    load_files,
    parse_document,
)

import run_balance_check


def write_json(folder, name, data):
    path = folder / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestParsing:
    """Test turning text into documents."""

    def test_parse_valid(self):
        document = parse_document('{"name": "John"}', "a.json")
        assert document.data == {"name": "John"}
        assert document.source_name == "a.json"

    def test_parse_invalid_text(self):
        with pytest.raises(ParseError) as exc:
            parse_document('{"name": }')
        assert exc.value.message.startswith("Invalid JSON: ")
        assert exc.value.source_name is None
        assert exc.value.line == 1
        assert exc.value.column == 10

    def test_parse_invalid_file(self):
        with pytest.raises(ParseError) as exc:
            parse_document("[1, 2", "broken.json")
        assert exc.value.message.startswith("Error parsing broken.json: ")
        assert exc.value.source_name == "broken.json"

    def test_parse_deep_document(self):
        """Test that deep nesting the parser accepts loads without copying."""
        text = '{"a":' * 500 + "1" + "}" * 500
        document = parse_document(text)
        assert enumerate_paths(document.data) == {".".join(["a"] * 500)}

    def test_parse_too_deep(self):
        with pytest.raises(ParseError) as exc:
            parse_document("[" * 100000 + "]" * 100000, "deep.json")
        assert exc.value.message == "Error parsing deep.json: nesting too deep"
        assert exc.value.source_name == "deep.json"


class TestLoadFiles:
    """Test batch loading."""

    def test_batch_continues_after_too_deep_file(self, tmp_path):
        first = write_json(tmp_path, "a.json", {"x": 1})
        deep = tmp_path / "b.json"
        deep.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
        last = write_json(tmp_path, "c.json", {"x": 2})

        result = load_files([first, deep, last])
        assert [d.source_name for d in result.documents] == ["a.json", "c.json"]
        assert [e.source_name for e in result.errors] == ["b.json"]

    def test_batch_continues_after_failure(self, tmp_path):
        first = write_json(tmp_path, "a.json", {"bal": 1})
        broken = tmp_path / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        last = write_json(tmp_path, "c.json", {"bal": 2})

        result = load_files([first, broken, last])
        assert [d.source_name for d in result.documents] == ["a.json", "c.json"]
        assert len(result.errors) == 1
        assert result.errors[0].source_name == "broken.json"
        assert result.ok is False

    def test_missing_file(self, tmp_path):
        result = load_files([tmp_path / "nope.json"])
        assert result.documents == []
        assert result.errors[0].message.startswith("Error parsing nope.json: ")

    def test_extension_filter(self, tmp_path):
        data = write_json(tmp_path, "a.json", {"x": 1})
        notes = tmp_path / "notes.txt"
        notes.write_text("{}", encoding="utf-8")

        result = load_files([data, notes], extensions=[".json"])
        assert len(result.documents) == 1
        assert result.skipped == [str(notes)]

        result = load_files([data, notes])
        assert len(result.documents) == 2


class TestBalanceChecker:
    """Test the stateful checker session."""

    def setup_method(self):
        self.checker = BalanceChecker()

    def test_add_and_compare(self):
        self.checker.add_text('{"name": "John", "age": 30}')
        self.checker.add_text('{"name": "John", "age": 31}')

        assert self.checker.fields() == ["age", "name"]
        results = {r.path: r for r in self.checker.compare()}
        assert results["age"].is_consistent is False
        assert results["name"].is_consistent is True

    def test_invalid_text_recorded(self):
        self.checker.add_value({"a": 1})
        with pytest.raises(ParseError):
            self.checker.add_text("{")
        assert self.checker.last_error.startswith("Invalid JSON: ")
        assert len(self.checker.documents) == 1

        self.checker.add_text("{}")
        assert self.checker.last_error is None

    def test_remove(self):
        first = self.checker.add_value({"a": 1})
        second = self.checker.add_value({"b": 2})

        assert self.checker.remove(first.id) is first
        assert self.checker.documents == (second,)
        assert self.checker.fields() == ["b"]

    def test_remove_unknown(self):
        with pytest.raises(DocumentNotFoundError):
            self.checker.remove("missing")
        with pytest.raises(KeyError):
            self.checker.remove("missing")

    def test_expanded_flags(self):
        document = self.checker.add_value({"a": 1})
        assert self.checker.is_expanded(document.id) is False
        assert self.checker.toggle_expanded(document.id) is True
        assert self.checker.is_expanded(document.id) is True
        assert self.checker.toggle_expanded(document.id) is False

    def test_ignored_fields(self):
        self.checker.add_value({"a": 1, "b": 1})
        self.checker.add_value({"a": 1, "b": 2})

        assert self.checker.toggle_ignored("b") is True
        assert self.checker.fields() == ["a", "b"]
        assert self.checker.active_fields() == ["a"]
        assert [(s.path, s.ignored) for s in self.checker.field_states()] == [("a", False), ("b", True)]
        assert all(r.is_consistent for r in self.checker.compare())

        assert self.checker.toggle_ignored("b") is False
        assert self.checker.active_fields() == ["a", "b"]

    def test_ignore_and_unignore(self):
        self.checker.add_value({"a": 1, "b": 1})
        self.checker.ignore("b")
        self.checker.ignore("b")
        assert self.checker.active_fields() == ["a"]

        self.checker.unignore("b")
        self.checker.unignore("not.a.field")
        assert self.checker.ignored_fields == frozenset()
        assert self.checker.active_fields() == ["a", "b"]

    def test_ignored_fields_from_config(self):
        checker = BalanceChecker(CheckerConfig(ignored_fields=["generatedAt"]))
        checker.add_value({"generatedAt": "2025-01-01", "bal": 1})
        checker.add_value({"generatedAt": "2025-02-01", "bal": 1})
        assert checker.ignored_fields == frozenset({"generatedAt"})
        assert checker.report().is_consistent is True

    def test_load_files_uses_config_extensions(self, tmp_path):
        write_json(tmp_path, "a.json", {"x": 1})
        (tmp_path / "b.txt").write_text("{}", encoding="utf-8")
        broken = tmp_path / "c.json"
        broken.write_text("{", encoding="utf-8")

        result = self.checker.load_files(sorted(tmp_path.iterdir()))
        assert len(self.checker.documents) == 1
        assert len(result.skipped) == 1
        assert self.checker.errors == [result.errors[0].message]

    def test_clear(self):
        self.checker.add_value({"a": 1})
        self.checker.clear()
        assert self.checker.documents == ()
        assert self.checker.fields() == []


class TestReport:
    """Test the comparison report."""

    def setup_method(self):
        self.checker = BalanceChecker()
        self.checker.add_value({"bal": 10, "id": "A"}, "jan.json")
        self.checker.add_value({"bal": 20, "id": "A"}, "feb.json")

    def test_to_dict(self):
        self.checker.ignore("id")
        data = self.checker.report().to_dict()
        assert data["summary"] == {
            "documents": 2,
            "total_fields": 2,
            "ignored_fields": 1,
            "checked_fields": 1,
            "consistent": 0,
            "inconsistent": 1,
        }
        assert data["ignored_fields"] == ["id"]
        assert data["results"][0]["path"] == "bal"
        assert data["timestamp"].endswith("Z")

    def test_print_summary(self, capsys):
        report = self.checker.report()
        report.print_summary()
        out = capsys.readouterr().out
        assert "Balance Files (2)" in out
        assert "DIFF  bal" in out
        assert "[x] feb.json: 20" in out
        assert 'OK    id: "A"' in out

    def test_print_summary_shows_expanded_documents(self, capsys):
        january = self.checker.documents[0]
        self.checker.toggle_expanded(january.id)
        report = self.checker.report()
        assert report.expanded == [january.id]

        report.print_summary()
        out = capsys.readouterr().out
        assert '       "bal": 10,' in out
        assert '"bal": 20' not in out

    def test_print_summary_hides_consistent(self, capsys):
        self.checker.report().print_summary(show_consistent=False)
        out = capsys.readouterr().out
        assert "OK    id" not in out


class TestRunner:
    """Test config loading and the runner."""

    def test_load_config(self, tmp_path):
        config_path = tmp_path / "balance.yaml"
        config_path.write_text(
            "missing_as_null: true\n"
            "ignored_fields:\n"
            "  - generatedAt\n",
            encoding="utf-8"
        )
        config = load_config(config_path)
        assert config.missing_as_null is True
        assert config.ignored_fields == ["generatedAt"]

    def test_load_config_errors(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.yaml")

        bad = tmp_path / "bad.yaml"
        bad.write_text("ignored_fields: [a, b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(bad)

    def test_run(self, tmp_path):
        config_path = tmp_path / "balance.yaml"
        config_path.write_text("ignored_fields: [generatedAt]\n", encoding="utf-8")
        a = write_json(tmp_path, "a.json", {"bal": 1, "generatedAt": "x"})
        b = write_json(tmp_path, "b.json", {"bal": 1, "generatedAt": "y"})

        report = BalanceCheckRunner([a, b], config_path).run(print_report=False)
        assert report.is_consistent is True
        assert [r.path for r in report.results] == ["bal"]
        assert report.ignored_fields == ["generatedAt"]


class TestCommandLine:
    """Test the run_balance_check script."""

    def test_consistent_files(self, tmp_path):
        a = write_json(tmp_path, "a.json", {"bal": 1})
        b = write_json(tmp_path, "b.json", {"bal": 1})
        assert run_balance_check.main(["-q", str(a), str(b)]) == 0

    def test_inconsistent_files_with_report(self, tmp_path):
        a = write_json(tmp_path, "a.json", {"bal": 1, "meta": None})
        b = write_json(tmp_path, "b.json", {"bal": 2})
        report_path = tmp_path / "report.json"

        code = run_balance_check.main(["-q", "-r", str(report_path), str(a), str(b)])
        assert code == 1
        data = json.loads(report_path.read_text(encoding="utf-8"))
        assert data["summary"]["inconsistent"] == 2

    def test_ignore_and_missing_as_null(self, tmp_path):
        a = write_json(tmp_path, "a.json", {"bal": 1, "meta": None})
        b = write_json(tmp_path, "b.json", {"bal": 2})
        args = ["-q", "-i", "bal", "--missing-as-null", str(a), str(b)]
        assert run_balance_check.main(args) == 0

    def test_nothing_loaded(self, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text("{", encoding="utf-8")
        assert run_balance_check.main(["-q", str(broken)]) == 2

    def test_bad_config(self, tmp_path, capsys):
        a = write_json(tmp_path, "a.json", {})
        code = run_balance_check.main(["-c", str(tmp_path / "absent.yaml"), str(a)])
        assert code == 2
        assert "Config file not found" in capsys.readouterr().err
