"""Batch binding generation

Runs the extractor and emitter over a set of scripts and reports what
happened as diagnostics. A failure in one file is recorded and the rest
of the batch continues; an unexpected failure outside the per-file
boundary is recorded as an error and the batch still returns.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from lua2bind.analyzers.lua_parser import parse
from lua2bind.analyzers.syntax_checker import check_syntax
from lua2bind.core.config import BinderConfig
from lua2bind.core.diagnostics import Diagnostic, DiagnosticCode, DiagnosticLog, Severity
from lua2bind.generators.binding_emitter import BindingEmitter
from lua2bind.generators.naming import NamingScheme
from lua2bind.module_system.script_collector import LuaScript, is_in_lua_directory


@dataclass(frozen=True)
class GeneratedSource:
    """One generated header

    Attributes:
        hint_name: Output file name (e.g., "GameScript.g.hpp")
        type_name: Generated class name (e.g., "GameScript")
        source_path: Path of the Lua script it was generated from
        text: Header content
    """
    hint_name: str
    type_name: str
    source_path: str
    text: str


@dataclass
class BindingBatch:
    """Result of one generation run"""
    sources: List[GeneratedSource] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)


class BindingGenerator:
    """Generates wrapper headers for a batch of Lua scripts

    Usage:
        generator = BindingGenerator(BinderConfig(namespace="Game"))
        batch = generator.execute(collect_scripts([Path("scripts")]))
        for source in batch.sources:
            ...
    """

    def __init__(self, config: Optional[BinderConfig] = None) -> None:
        self.config = config if config is not None else BinderConfig()
        self._emitter = BindingEmitter(self.config.namespace)

    def execute(self, scripts: Iterable[LuaScript]) -> BindingBatch:
        """Generate bindings for every eligible script

        Args:
            scripts: Candidate scripts (non-.lua inputs are ignored)

        Returns:
            BindingBatch with generated sources and diagnostics
        """
        batch = BindingBatch()
        log = DiagnosticLog()

        try:
            self._execute(list(scripts), batch, log)
        except Exception as e:
            log.report(DiagnosticCode.INTERNAL_ERROR, "Generator exception",
                       f"lua2bind threw an exception: {e!r}", Severity.ERROR)

        batch.diagnostics = log.diagnostics
        return batch

    def _execute(self, scripts: List[LuaScript], batch: BindingBatch, log: DiagnosticLog) -> None:
        lua_directory = self.config.lua_directory
        all_lua = [s for s in scripts if s.is_lua]
        lua_scripts = [s for s in all_lua if is_in_lua_directory(s.path, lua_directory)]

        if not all_lua:
            log.report(DiagnosticCode.NO_LUA_FILES, "No Lua files found",
                       "lua2bind: No .lua files found among the inputs.")
        elif not lua_scripts:
            log.report(DiagnosticCode.OUTSIDE_LUA_DIRECTORY, "No Lua files in configured directory",
                       f"lua2bind: Found {len(all_lua)} .lua file(s), but none match the "
                       f"configured directory '{lua_directory}'. Check the lua_directory setting.")

        for script in lua_scripts:
            try:
                source = self._process_script(script, log)
            except Exception as e:
                log.report(DiagnosticCode.FILE_FAILED, "Error generating bindings",
                           f"Error processing {script.path}: {e}")
                continue
            if source is not None:
                batch.sources.append(source)

        if batch.sources:
            type_names = ", ".join(s.type_name for s in batch.sources)
            log.report(DiagnosticCode.GENERATION_COMPLETE, "lua2bind generation complete",
                       f"lua2bind: Generated {len(batch.sources)} type(s) in namespace "
                       f"'{self.config.namespace}': {type_names}", Severity.INFO)
        elif lua_scripts:
            log.report(DiagnosticCode.NO_TYPES_GENERATED, "No types generated",
                       f"lua2bind: Processed {len(lua_scripts)} Lua file(s) but generated no types. "
                       "Check that files contain global (non-local) functions or variables.")

    def _process_script(self, script: LuaScript, log: DiagnosticLog) -> Optional[GeneratedSource]:
        """Parse one script and emit its header

        Args:
            script: Script to process
            log: Diagnostics for this run

        Returns:
            GeneratedSource, or None when the file is empty or exposes nothing

        Raises:
            OSError: If the script text could not be read
        """
        if script.read_error is not None:
            raise OSError(script.read_error)
        if not script.text:
            return None

        if self.config.check_syntax:
            syntax_error = check_syntax(script.text, script.path)
            if syntax_error is not None:
                log.extend([syntax_error])

        result = parse(script.text, script.stem)

        for error in result.errors:
            log.report(DiagnosticCode.PARSE_ERROR, error.title,
                       f"Error parsing {script.path}: {error.message}")

        if not result.has_exposed_members:
            log.report(DiagnosticCode.NOTHING_EXPOSED, "No exportable members",
                       f"lua2bind: '{script.stem}.lua' has no global functions or variables "
                       "to export. Only non-local members are generated.")
            return None

        skipped: List[str] = []
        text = self._emitter.generate_binding_class(result, skipped)
        for name in skipped:
            log.report(DiagnosticCode.MEMBER_SKIPPED, "Member not generated",
                       f"lua2bind: '{name}' in '{script.stem}.lua' was not generated because "
                       "its C++ name is invalid or already in use.")

        return GeneratedSource(
            hint_name=NamingScheme.output_file_name(result.file_name),
            type_name=NamingScheme.script_class_name(result.file_name),
            source_path=script.path,
            text=text,
        )
