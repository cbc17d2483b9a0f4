from lexer import Instruction, instructions, tokenize

VALID = set('<>+-.,[]')


def lex(source):
    return list(instructions(tokenize(source)))


def test_each_symbol_maps_to_its_instruction():
    assert lex('><+-.,[]') == [
        Instruction.RIGHT, Instruction.LEFT,
        Instruction.PLUS, Instruction.MINUS,
        Instruction.PUT, Instruction.GET,
        Instruction.LOOP, Instruction.JMP,
    ]


def test_comments_and_whitespace_are_skipped():
    source = "add two: ++\n\tthen print it . # done\n"
    assert lex(source) == [Instruction.PLUS, Instruction.PLUS, Instruction.PUT]


def test_filtering_keeps_count_and_order():
    samples = [
        "",
        "hello world",
        "++[>+++<-]>.",
        "a+b-c>d<e.f,g[h]i\n\n[]",
        "żółw ++ → -- ∑ [.]",
        "+�.",
    ]
    for source in samples:
        expected = [c for c in source if c in VALID]
        assert [str(i) for i in lex(source)] == expected


def test_tokenize_is_lazy():
    it = tokenize("+" * 5)
    assert next(it).type == 'PLUS'
    assert next(instructions(it)) == Instruction.PLUS


def test_line_numbers_are_tracked():
    tokens = list(tokenize("+\n\ncomment\n[\n"))
    assert [t.type for t in tokens] == ['PLUS', 'LOOP']
    assert [t.lineno for t in tokens] == [1, 4]
