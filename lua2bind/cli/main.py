"""Main CLI entry point for lua2bind"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from lua2bind.core.config import BinderConfig, ConfigError
from lua2bind.core.diagnostics import DiagnosticLog
from lua2bind.generators.binding_generator import BindingBatch, BindingGenerator, GeneratedSource
from lua2bind.module_system.script_collector import collect_scripts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lua2bind',
        description='lua2bind - Generate typed C++ accessors for Lua scripts',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # All scripts under a directory
  lua2bind scripts/

  # Custom namespace and output directory
  lua2bind scripts/ --namespace Game --output-dir include/generated

  # Settings from a YAML file, only scripts under Content/scripts
  lua2bind assets/ --config lua2bind.yaml --lua-dir Content/scripts
        """
    )

    parser.add_argument('inputs', type=Path, nargs='+', help='Lua files or directories')
    parser.add_argument(
        '--config', type=Path,
        help='YAML config file (keys: namespace, lua_directory, output_dir, check_syntax)'
    )
    parser.add_argument('--namespace', type=str, help='C++ namespace for generated classes')
    parser.add_argument(
        '--lua-dir', dest='lua_directory', type=str,
        help='Only process .lua files under this directory'
    )
    parser.add_argument(
        '--output-dir', type=str,
        help='Output directory (default: current directory)'
    )
    parser.add_argument(
        '--check-syntax', action='store_true', default=None,
        help='Report Lua syntax errors found by luaparser'
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true',
        help='Enable verbose output'
    )
    return parser


def write_sources(sources: List[GeneratedSource], output_dir: Path, verbose: bool = False) -> List[Path]:
    """Write generated headers, leaving unchanged files untouched

    Args:
        sources: Generated headers
        output_dir: Target directory (must exist)
        verbose: Report skipped files

    Returns:
        Paths that were written
    """
    written = []
    for source in sources:
        target = output_dir / source.hint_name
        if target.exists() and target.read_text(encoding='utf-8') == source.text:
            if verbose:
                print(f"Unchanged: {target}")
            continue
        target.write_text(source.text, encoding='utf-8')
        print(f"Generated: {target}")
        written.append(target)
    return written


def report_diagnostics(batch: BindingBatch, verbose: bool = False) -> None:
    for diagnostic in batch.diagnostics:
        print(diagnostic.format(), file=sys.stderr)

    if verbose:
        log = DiagnosticLog()
        log.extend(batch.diagnostics)
        print(log.format_summary(), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)

    overrides = {
        'namespace': args.namespace,
        'lua_directory': args.lua_directory,
        'output_dir': args.output_dir,
        'check_syntax': args.check_syntax,
    }
    try:
        config = BinderConfig.from_sources(args.config, overrides)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        scripts = collect_scripts(args.inputs)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Collected {len(scripts)} input file(s)")
        print(f"Namespace: {config.namespace}")

    batch = BindingGenerator(config).execute(scripts)
    report_diagnostics(batch, args.verbose)

    output_dir = Path(config.output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Error: Cannot create output directory {output_dir}: {e}", file=sys.stderr)
        return 1

    write_sources(batch.sources, output_dir, args.verbose)

    return 1 if batch.has_errors else 0


if __name__ == '__main__':
    sys.exit(main())
