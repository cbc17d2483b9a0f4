import argparse
import os
import shlex
import subprocess
import sys

from errors import LoopMismatch, format_loop_error
from generator import TAPE_SIZE, assembly
from lexer import instructions, tokenize
from parser import build_program


def compile_source(data, tape_size=TAPE_SIZE):
    tokens = list(tokenize(data))
    try:
        program = build_program(instructions(tokens))
    except LoopMismatch as e:
        # the command index is also the token index
        e.lineno = tokens[e.index].lineno
        raise
    return assembly(program, tape_size)


def tape_size_arg(value):
    size = int(value)
    if size < 1:
        raise argparse.ArgumentTypeError(f"tape size must be at least 1, got {size}")
    return size


def cmd_call_echoed(cmd):
    print("[CMD] %s" % " ".join(map(shlex.quote, cmd)))
    return subprocess.call(cmd)


def write_asm(asm_lines, path):
    with open(path, 'w') as f:
        f.write("\n".join(asm_lines) + "\n")


def build_executable(asm_lines, output, keep=False):
    asm_path = output + ".asm"
    obj_path = output + ".o"

    write_asm(asm_lines, asm_path)

    try:
        status = cmd_call_echoed(["nasm", "-felf64", asm_path, "-o", obj_path])
        if status != 0:
            return status
        return cmd_call_echoed(["ld", obj_path, "-o", output])
    finally:
        if not keep:
            for path in (asm_path, obj_path):
                if os.path.exists(path):
                    os.remove(path)


def main(argv=None):
    ap = argparse.ArgumentParser(prog="bfc", description="Brainfuck -> x86-64 Linux executable (nasm + ld)")
    ap.add_argument("source", help="input .bf file")
    ap.add_argument("output", help="output executable")
    ap.add_argument("-S", dest="asm_only", action="store_true", help="only write <output>.asm")
    ap.add_argument("--keep", action="store_true", help="keep the intermediate .asm and .o files")
    ap.add_argument("--tape-size", type=tape_size_arg, default=TAPE_SIZE, help=f"tape size in bytes (default {TAPE_SIZE})")
    args = ap.parse_args(argv)

    try:
        # undecodable bytes become U+FFFD, which the lexer treats as a comment
        with open(args.source, 'r', encoding='utf-8', errors='replace') as f:
            data = f.read()
    except FileNotFoundError:
        print(f"Error: could not find file {args.source}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: could not read {args.source}: {e.strerror}", file=sys.stderr)
        return 1

    try:
        asm_lines = compile_source(data, args.tape_size)
    except LoopMismatch as e:
        print(format_loop_error(e, source=data, line=e.lineno), file=sys.stderr)
        return 1

    if args.asm_only:
        write_asm(asm_lines, args.output + ".asm")
        print(f"Assembly written -> {args.output}.asm")
        return 0

    status = build_executable(asm_lines, args.output, keep=args.keep)
    if status != 0:
        print(f"Error: external tool failed with status {status}", file=sys.stderr)
        return status

    print(f"Compilation successful -> {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
