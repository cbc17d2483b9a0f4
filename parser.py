from dataclasses import dataclass
from typing import Tuple

from errors import UnmatchedClose, UnmatchedOpen
from lexer import Instruction


@dataclass(frozen=True)
class Command:
    inst: Instruction
    jump_to: int = 0  # only meaningful for LOOP and JMP


Program = Tuple[Command, ...]


def build_program(insts):
    """Pairs every LOOP with its JMP in a single forward pass.

    A JMP gets the index of its LOOP, and the LOOP placeholder is replaced
    in place with one pointing back at the JMP, so both directions are set
    when the closing bracket is seen. Raises UnmatchedClose on a JMP with no
    open loop and UnmatchedOpen if loops are still open at the end.
    """
    assert len(Instruction) == 8, "Exhaustive instruction handling in build_program"
    loopstack = []
    cmds = []

    for i, inst in enumerate(insts):
        if inst == Instruction.LOOP:
            loopstack.append(i)
            cmds.append(Command(inst, 0))
        elif inst == Instruction.JMP:
            if not loopstack:
                raise UnmatchedClose(f"unmatched ']' at command {i}", i)
            start = loopstack.pop()
            cmds.append(Command(inst, start))
            cmds[start] = Command(Instruction.LOOP, i)
        elif inst in (Instruction.RIGHT, Instruction.LEFT,
                      Instruction.PLUS, Instruction.MINUS,
                      Instruction.PUT, Instruction.GET):
            cmds.append(Command(inst, 0))
        else:
            raise AssertionError(f"unreachable: unknown instruction {inst!r}")

    if loopstack:
        start = loopstack[0]
        raise UnmatchedOpen(f"unmatched '[' at command {start}", start)

    return tuple(cmds)
