"""
Brainrot command line.

    brvm compile INPUT [-o OUTPUT]   compile source to a .brbc file
    brvm exec INPUT                  run a .brbc file
    brvm run INPUT                   compile and run source without writing a file
    brvm disasm INPUT                show the instructions of a source or .brbc file
    brvm ast INPUT                   show the syntax tree of a source file
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import brainrot
from brainrot import Lexer, Parser, read_source
from brainrot.ast import ASTPrinter
from brainrot.errors import BrainrotError

from .context import Context, Script

logger = logging.getLogger(__name__)

BYTECODE_SUFFIX = ".brbc"


def default_output_path(source_path: str) -> Path:
    """The source path with its extension replaced by .brbc."""
    return Path(source_path).with_suffix(BYTECODE_SUFFIX)


def _load_script(ctx: Context, path: str) -> Script:
    if path.endswith(BYTECODE_SUFFIX):
        return ctx.load(path)
    return ctx.compile_file(path)


def cmd_compile(args: argparse.Namespace, ctx: Context) -> None:
    script = ctx.compile_file(args.input)
    output = Path(args.output) if args.output else default_output_path(args.input)
    script.save(str(output))
    logger.info("compiled %s -> %s", args.input, output)


def cmd_exec(args: argparse.Namespace, ctx: Context) -> None:
    ctx.execute(ctx.load(args.input))


def cmd_run(args: argparse.Namespace, ctx: Context) -> None:
    ctx.execute(ctx.compile_file(args.input))


def cmd_disasm(args: argparse.Namespace, ctx: Context) -> None:
    print(_load_script(ctx, args.input).disassemble())


def cmd_ast(args: argparse.Namespace, ctx: Context) -> None:
    try:
        program = Parser(Lexer(read_source(args.input)).tokenize()).parse()
    except BrainrotError as e:
        raise e.with_filename(args.input)
    print(ASTPrinter().print(program))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="brvm", description="Brainrot compiler and virtual machine")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {brainrot.__version__}")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log pipeline details to stderr")
    parser.add_argument("--trace", action="store_true",
                        help="Log every executed instruction (implies --verbose)")
    subparsers = parser.add_subparsers(dest="command", required=True)
    
    p = subparsers.add_parser("compile", help="Compile source to bytecode")
    p.add_argument("input", help="Source file")
    p.add_argument("-o", "--output", default=None,
                   help=f"Output file (default: input with {BYTECODE_SUFFIX} suffix)")
    p.set_defaults(func=cmd_compile)
    
    p = subparsers.add_parser("exec", help="Execute a bytecode file")
    p.add_argument("input", help="Bytecode file")
    p.set_defaults(func=cmd_exec)
    
    p = subparsers.add_parser("run", help="Compile and execute a source file")
    p.add_argument("input", help="Source file")
    p.set_defaults(func=cmd_run)
    
    p = subparsers.add_parser("disasm", help="Disassemble a source or bytecode file")
    p.add_argument("input", help="Source or bytecode file")
    p.set_defaults(func=cmd_disasm)
    
    p = subparsers.add_parser("ast", help="Print the syntax tree of a source file")
    p.add_argument("input", help="Source file")
    p.set_defaults(func=cmd_ast)
    
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    
    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or args.trace) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    
    ctx = Context(debug=args.trace)
    try:
        args.func(args, ctx)
    except BrainrotError as e:
        print(e, file=sys.stderr)
        return 1
    except OSError as e:
        print(f"{args.input}: {e.strerror or e}", file=sys.stderr)
        return 1
    finally:
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
