from lexer import Instruction

TAPE_SIZE = 30000
LABEL_PREFIX = "LP"

# r8 holds the tape base, r9 the pointer offset; syscall preserves both
CELL = "byte [r8 + r9]"

SYS_READ = 0
SYS_WRITE = 1
SYS_MMAP = 9
SYS_MUNMAP = 11
SYS_EXIT = 60


def int_to_label(n):
    return f"{LABEL_PREFIX}{n}"


class CodeGenerator:
    def __init__(self, tape_size=TAPE_SIZE):
      if tape_size < 1:
          raise ValueError(f"tape size must be at least 1, got {tape_size}")
      self.tape_size = tape_size
      self.instructions = []

    def emit(self, instr):
      self.instructions.append(f"    {instr}")

    def emit_label(self, label):
      self.instructions.append(f"{label}:")

    def generate(self, program):
        """Returns the assembly lines for a resolved program.

        Every call starts from an empty buffer, so the same program always
        yields the same lines.
        """
        assert len(Instruction) == 8, "Exhaustive instruction handling in CodeGenerator.generate"
        self.instructions = []
        self.prologue()
        for i, cmd in enumerate(program):
            self.walk(i, cmd)
        self.epilogue()
        return list(self.instructions)

    def prologue(self):
        self.instructions.append("BITS 64")
        self.instructions.append("section .bss")
        self.emit_label("iobuf")
        self.emit("resb 1")
        self.instructions.append("section .text")
        self.instructions.append("global _start")
        self.emit_label("_start")

        # mmap(NULL, tape_size, PROT_READ|PROT_WRITE, MAP_PRIVATE|MAP_ANONYMOUS, -1, 0)
        self.emit(f"mov rax, {SYS_MMAP}")
        self.emit("xor rdi, rdi")
        self.emit(f"mov rsi, {self.tape_size}")
        self.emit("mov rdx, 3")
        self.emit("mov r10, 34")
        self.emit("mov r8, -1")
        self.emit("xor r9, r9")
        self.emit("syscall")
        self.emit("mov r8, rax")
        self.emit("xor r9, r9")

    def epilogue(self):
        self.emit(f"mov rax, {SYS_MUNMAP}")
        self.emit("mov rdi, r8")
        self.emit(f"mov rsi, {self.tape_size}")
        self.emit("syscall")

        self.emit(f"mov rax, {SYS_EXIT}")
        self.emit("xor rdi, rdi")
        self.emit("syscall")

    def walk(self, index, cmd):
        inst = cmd.inst

        if inst == Instruction.RIGHT:
            self.emit("inc r9")

        elif inst == Instruction.LEFT:
            self.emit("dec r9")

        elif inst == Instruction.PLUS:
            self.emit(f"inc {CELL}")

        elif inst == Instruction.MINUS:
            self.emit(f"dec {CELL}")

        elif inst == Instruction.PUT:
            self.emit(f"mov al, {CELL}")
            self.emit("mov [iobuf], al")
            self.emit(f"mov rax, {SYS_WRITE}")
            self.emit("mov rdi, 1")
            self.emit("mov rsi, iobuf")
            self.emit("mov rdx, 1")
            self.emit("syscall")

        elif inst == Instruction.GET:
            # EOF leaves iobuf at 0
            self.emit("mov byte [iobuf], 0")
            self.emit(f"mov rax, {SYS_READ}")
            self.emit("xor rdi, rdi")
            self.emit("mov rsi, iobuf")
            self.emit("mov rdx, 1")
            self.emit("syscall")
            self.emit("mov al, [iobuf]")
            self.emit(f"mov {CELL}, al")

        elif inst == Instruction.LOOP:
            self.emit_label(int_to_label(index))
            self.emit(f"cmp {CELL}, 0")
            self.emit(f"je {int_to_label(cmd.jump_to)}")

        elif inst == Instruction.JMP:
            self.emit(f"jmp {int_to_label(cmd.jump_to)}")
            self.emit_label(int_to_label(index))

        else:
            raise AssertionError(f"unreachable: unknown instruction {inst!r}")


def assembly(program, tape_size=TAPE_SIZE):
    return CodeGenerator(tape_size).generate(program)
