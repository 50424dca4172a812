"""Tests for batch binding generation"""

from lua2bind.core.config import BinderConfig
from lua2bind.core.diagnostics import Diagnostic, DiagnosticCode, Severity
from lua2bind.core.types import LuaGlobal, ParseResult, ValueType
from lua2bind.generators import binding_generator
from lua2bind.generators.binding_generator import BindingGenerator
from lua2bind.module_system.script_collector import LuaScript


def codes(batch):
    return [d.code for d in batch.diagnostics]


class TestBindingGenerator:
    """Test suite for BindingGenerator.execute"""

    def test_generates_source(self):
        batch = BindingGenerator(BinderConfig(namespace="Game")).execute([
            LuaScript("scripts/game.lua", "score = 0\nfunction reset() end"),
        ])

        assert len(batch.sources) == 1
        source = batch.sources[0]
        assert source.hint_name == "GameScript.g.hpp"
        assert source.type_name == "GameScript"
        assert source.source_path == "scripts/game.lua"
        assert "namespace Game {" in source.text

    def test_summary_diagnostic(self):
        batch = BindingGenerator(BinderConfig(namespace="Game")).execute([
            LuaScript("a.lua", "x = 1"),
            LuaScript("b.lua", "y = 2"),
        ])

        summary = batch.diagnostics[-1]
        assert summary.code == DiagnosticCode.GENERATION_COMPLETE
        assert summary.severity == Severity.INFO
        assert "Generated 2 type(s) in namespace 'Game': AScript, BScript" in summary.message
        assert not batch.has_errors

    def test_default_config(self):
        batch = BindingGenerator().execute([LuaScript("a.lua", "x = 1")])
        assert "namespace GeneratedLua {" in batch.sources[0].text

    def test_no_lua_files(self):
        batch = BindingGenerator().execute([LuaScript("readme.txt", "hello")])

        assert codes(batch) == [DiagnosticCode.NO_LUA_FILES]
        assert batch.sources == []

    def test_no_inputs(self):
        batch = BindingGenerator().execute([])
        assert codes(batch) == [DiagnosticCode.NO_LUA_FILES]

    def test_outside_lua_directory(self):
        config = BinderConfig(lua_directory="Content/scripts")
        batch = BindingGenerator(config).execute([LuaScript("other/game.lua", "x = 1")])

        assert codes(batch) == [DiagnosticCode.OUTSIDE_LUA_DIRECTORY]
        assert "Found 1 .lua file(s)" in batch.diagnostics[0].message

    def test_lua_directory_match(self):
        config = BinderConfig(lua_directory="Content/scripts")
        batch = BindingGenerator(config).execute([
            LuaScript("project\\content\\Scripts\\game.lua", "x = 1"),
            LuaScript("other/ignored.lua", "y = 1"),
        ])

        assert [s.type_name for s in batch.sources] == ["GameScript"]

    def test_nothing_exposed(self):
        batch = BindingGenerator().execute([LuaScript("utils.lua", "local x = 1")])

        assert codes(batch) == [DiagnosticCode.NOTHING_EXPOSED, DiagnosticCode.NO_TYPES_GENERATED]
        assert "'utils.lua'" in batch.diagnostics[0].message

    def test_empty_file_skipped_silently(self):
        batch = BindingGenerator().execute([
            LuaScript("empty.lua", ""),
            LuaScript("game.lua", "x = 1"),
        ])

        assert codes(batch) == [DiagnosticCode.GENERATION_COMPLETE]

    def test_unreadable_file(self):
        batch = BindingGenerator().execute([
            LuaScript("bad.lua", None, read_error="invalid utf-8"),
            LuaScript("game.lua", "x = 1"),
        ])

        failures = [d for d in batch.diagnostics if d.code == DiagnosticCode.FILE_FAILED]
        assert len(failures) == 1
        assert failures[0].severity == Severity.WARNING
        assert failures[0].message == "Error processing bad.lua: invalid utf-8"
        assert [s.type_name for s in batch.sources] == ["GameScript"]

    def test_per_file_failure_isolated(self, monkeypatch):
        original = binding_generator.parse

        def failing_parse(source, file_name):
            if file_name == "broken":
                raise RuntimeError("kaboom")
            return original(source, file_name)

        monkeypatch.setattr(binding_generator, "parse", failing_parse)
        batch = BindingGenerator().execute([
            LuaScript("broken.lua", "x = 1"),
            LuaScript("good.lua", "y = 1"),
        ])

        assert codes(batch) == [DiagnosticCode.FILE_FAILED, DiagnosticCode.GENERATION_COMPLETE]
        assert "Error processing broken.lua: kaboom" == batch.diagnostics[0].message
        assert [s.type_name for s in batch.sources] == ["GoodScript"]

    def test_parse_errors_surfaced(self, monkeypatch):
        def parse_with_error(source, file_name):
            return ParseResult(
                file_name=file_name,
                globals=(LuaGlobal("x", ValueType.NUMBER),),
                errors=(Diagnostic(DiagnosticCode.PARSE_ERROR, Severity.WARNING,
                                   "Lua parse warning", "Parse error at line 3: bad"),),
            )

        monkeypatch.setattr(binding_generator, "parse", parse_with_error)
        batch = BindingGenerator().execute([LuaScript("game.lua", "x = 1")])

        assert codes(batch) == [DiagnosticCode.PARSE_ERROR, DiagnosticCode.GENERATION_COMPLETE]
        assert batch.diagnostics[0].message == "Error parsing game.lua: Parse error at line 3: bad"
        assert len(batch.sources) == 1

    def test_skipped_member_reported(self):
        batch = BindingGenerator().execute([
            LuaScript("game.lua", "config = { a = 1 }\nfunction config_table() end"),
        ])

        assert codes(batch) == [DiagnosticCode.MEMBER_SKIPPED, DiagnosticCode.GENERATION_COMPLETE]
        skipped = batch.diagnostics[0]
        assert skipped.severity == Severity.WARNING
        assert "'config' in 'game.lua' was not generated" in skipped.message
        assert len(batch.sources) == 1

    def test_syntax_check(self):
        config = BinderConfig(check_syntax=True)
        batch = BindingGenerator(config).execute([LuaScript("game.lua", "x = = 1\nscore = 1")])

        assert codes(batch)[0] == DiagnosticCode.SYNTAX_ERROR
        assert len(batch.sources) == 1

    def test_syntax_check_disabled_by_default(self):
        batch = BindingGenerator().execute([LuaScript("game.lua", "x = = 1\nscore = 1")])
        assert DiagnosticCode.SYNTAX_ERROR not in codes(batch)

    def test_internal_error(self, monkeypatch):
        def broken_filter(path, lua_directory):
            raise ValueError("unexpected")

        monkeypatch.setattr(binding_generator, "is_in_lua_directory", broken_filter)
        batch = BindingGenerator().execute([LuaScript("game.lua", "x = 1")])

        assert codes(batch) == [DiagnosticCode.INTERNAL_ERROR]
        assert batch.diagnostics[0].severity == Severity.ERROR
        assert batch.has_errors
