# twopassasm

A two-pass assembler for a small 24-bit teaching machine, with a macro
pre-assembler stage. It has no dependencies outside the standard library.

For every base name given, the assembler:

1. reads `<base>.as`, expands `mcro` ... `mcroend` blocks and writes the
   result to `<base>.am` (empty lines are dropped);
2. runs a first pass over `<base>.am`, collecting labels, `.data` and
   `.string` contents and `.extern` symbols, and working out the length of
   the code image;
3. runs a second pass that encodes every instruction, marks `.entry`
   symbols and, if no errors were reported, writes:
   - `<base>.ob` — the machine words, one per line as `address \t 0xWORD`,
     the code image from address 100 followed by the data image;
   - `<base>.ent` — the `.entry` symbols and their addresses;
   - `<base>.ext` — each use of an external symbol and where it occurs.

Errors and progress messages are printed to standard output, tagged with the
file name and line number. A file with errors produces no `.ob`, `.ent` or
`.ext` files.

## Installation

```
pip install .
```

## Usage

Pass base names, without the `.as` extension:

```
twopassasm prog1 prog2
```

Files are processed from the last argument to the first. The exit status is
0 when every file assembled without errors and 1 otherwise.

## Source language

```
; a comment
mcro twice
inc r1
inc r1
mcroend
MAIN: mov r3, LENGTH
twice
jmp &LOOP
LOOP: prn #-5
lea W, r2
STR: .string "abcd"
LENGTH: .data 6, -9, 15
.entry MAIN
.extern W
```

- Instructions: `mov cmp add sub lea clr not inc dec jmp bne jsr red prn rts stop`.
- Directives: `.data`, `.string`, `.entry`, `.extern`.
- Operand forms: `#n` (immediate), `LABEL` (direct), `&LABEL` (relative) and
  `r0`–`r7` (register).
- A label is letters and digits followed by `:` as the first word of a line.
- A macro starts with `mcro NAME` at the first column and ends with a line
  holding only `mcroend`. A macro is called by writing its name at the first
  column of a line. A macro name may not be an instruction name.

## Library use

```python
import sys
from twopassasm.cli import assemble_file

ok = assemble_file("prog1", sys.stdout)
```

`assemble_file` runs all three stages and returns `True` when no error was
reported. The stages are also available on their own:
`twopassasm.preassembler.pre_assemble`, `twopassasm.first_pass.first_pass`
and `twopassasm.second_pass.second_pass`, which share a
`twopassasm.textutils.Reporter` that collects diagnostics and records whether
any error was seen. `DataTable` (in `twopassasm.data`) and `SymbolTable`
(in `twopassasm.symbols`) hold the data image and the symbols between the
passes.

## Behaviour to be aware of

- The lines of a macro body are written out in the reverse of the order in
  which they were defined.
- Register operands set the addressing mode to 3, but the register number
  itself is not placed in the instruction word; the register fields are
  always 0.
- The funct field of an instruction word holds the instruction's op code.
- Labels, macro names and macro calls are separated from what follows by
  spaces; a tab directly after them is taken as part of the word.
- The address counter used for relative operands and for entries in the
  `.ext` file advances by one per line of `<base>.am`, not by the number of
  words each instruction occupies.