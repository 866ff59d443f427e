"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [program_file]
    python -m lox --tokens <program_file>
    python -m lox --print-ast <program_file>
    python -m lox --emit-ast <program_file>
    python -m lox [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --tokens      Print the token stream of the given file
  --print-ast   Print each parsed statement in parenthesized form
  --emit-ast    Parse the given file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file the interactive shell starts. Debug information is
written to `debug.txt` in the current directory when verbosity is greater
than zero.

Exit status: 0 on success, 65 when the source has lex or parse errors,
66 when the input file does not exist, 70 on a runtime error.
"""

import argparse
import json
import os
import sys
from pathlib import Path

from .ast_json import program_from_obj, program_to_obj, to_sexpr
from .interpreter import Interpreter
from .parser import parse_program
from .scanner import scan
from .session import Session
from .shell import Shell

EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(EX_NOINPUT)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def use_color() -> bool:
    return sys.stderr.isatty() and 'NO_COLOR' not in os.environ


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', metavar='LOX_FILE', help='print the tokens of the given file')
    group.add_argument('--print-ast', metavar='LOX_FILE', help='print the parsed statements of the given file')
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Lox program file to execute (omit for interactive mode)')
    args = parser.parse_args(argv)

    # Token dump mode
    if args.tokens:
        tokens, errors = scan(read_source(Path(args.tokens)))
        for token in tokens:
            print(token)
        for error in errors:
            print(error, file=sys.stderr)
        if errors:
            sys.exit(EX_DATAERR)
        return

    # Parse-only modes
    if args.print_ast or args.emit_ast:
        program_file = Path(args.print_ast or args.emit_ast)
        statements, errors = parse_program(read_source(program_file))
        for error in errors:
            print(error, file=sys.stderr)
        if errors:
            sys.exit(EX_DATAERR)
        if args.print_ast:
            for stmt in statements:
                print(to_sexpr(stmt))
            return
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    with Interpreter(debug_level=args.v) as interpreter:
        session = Session(interpreter, color=use_color())

        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(EX_NOINPUT)
            with open(ast_path, 'r', encoding='utf-8') as f:
                statements = program_from_obj(json.load(f))
            if interpreter.interpret(statements, on_error=session.runtime_error) is not None:
                sys.exit(EX_SOFTWARE)
            return

        # Interactive mode
        if not args.program:
            Shell(session).cmdloop()
            return

        result = session.run(read_source(Path(args.program)))
        if result.had_error:
            sys.exit(EX_DATAERR)
        if result.had_runtime_error:
            sys.exit(EX_SOFTWARE)


if __name__ == '__main__':
    main()
