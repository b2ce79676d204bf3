"""CLI entry point for the Douro interpreter.

Usage:
    python -m douro [-v|-vv|-vvv] [--dump] <program_file>
    python -m douro [-v...] --emit-ast <program_file>
    python -m douro [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --dump        Echo the source and its AST before running it
  --emit-ast    Parse the given .douro file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from .ast_dump import dump_tree
from .ast_json import ast_to_obj, ast_from_obj
from .errors import DouroError
from .interpreter import Interpreter
from .parser import parse_program


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str):
    try:
        return parse_program(source)
    except DouroError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        sys.exit(1)


def execute(ast_program, debug_level: int) -> None:
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.run(ast_program)
    except DouroError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        interpreter.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='douro', description="Douro language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--dump', action='store_true', help='print the source and its AST before running')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='DOURO_FILE', help='emit AST JSON for the given .douro file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Douro program file (.douro) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_or_exit(read_source(program_file))
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        ast_program = ast_from_obj(data)
        if args.dump:
            print(dump_tree(ast_program))
            print("============")
        execute(ast_program, args.v)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    source = read_source(Path(args.program))
    ast_program = parse_or_exit(source)
    if args.dump:
        print(source)
        print(dump_tree(ast_program))
        print("============")
    execute(ast_program, args.v)


if __name__ == '__main__':
    main()
