# asmcore

Building blocks for a customizable assembler. It is written in pure Python
and uses only the standard library.

## What is inside

### `asmcore.util`

- `bigint.BigInt` holds an integer value and an optional size in bits.
  It offers checked arithmetic (`checked_add`, `checked_sub`, `checked_mul`,
  `checked_div`, `checked_mod`, `checked_shl`, `checked_shr`), bit access
  (`get_bit`, `set_bit`), `slice` / `checked_slice`, `concat`, `convert_le`
  (byte-order reversal), `min_size` and `from_bytes_be`. Division rounds
  toward zero and the remainder takes the sign of the dividend. Equality and
  ordering compare values only and ignore sizes.
- `bitvec.BitVec` is a growable bit vector. Bit 0 is the first output bit.
  `write_bigint` writes a sized integer most significant bit first, and
  `mark_span` / `write_bigint_with_span` record `BitVecSpan` entries that
  tie output ranges to source spans.
- `bitvec_format` renders a `BitVec` with `format_binary` (bytes),
  `format_binstr`, `format_hexstr`, `format_str`, `format_bindump`,
  `format_hexdump`, `format_dump`, `format_mif`,
  `format_intelhex(bitvec, address_unit)`,
  `format_separator(bitvec, radix, separator)`,
  `format_c_array(bitvec, radix)` and
  `format_logisim(bitvec, bits_per_chunk)`.
- `fileserver` provides `FileServerMock` and `FileServerReal`.
  `FileServerMock` keeps files in memory, and its `write_bytes` stores data
  under the name with `_written` appended. `FileServerReal` reads from and
  writes to disk, and serves built-in files added with `add` /
  `add_std_files` from memory. Both hand out integer handles through
  `get_handle`.
- `symbol_manager.SymbolManager` declares symbols in a tree, each with a
  `SymbolKind` and a `SymbolContext`. It finds them by name, including
  names relative to an enclosing level (`.sub`), and rejects duplicates and
  declarations that skip a nesting level.
- `filename` offers `filename_navigate`, which resolves a path relative to
  the current file and refuses to leave the project directory. It also has
  `filename_validate` and `is_std_path` for the `<std>/` prefix.
- `char_counter.CharCounter` answers line and column questions about a text
  and cuts excerpts out of it.
- `string_styler.StringStyler` builds strings and adds ANSI colour codes
  only when `use_colors` is set.
- `overlap_checker.OverlapChecker` records output ranges and raises
  `OverlapError` when a new range overlaps one already recorded.

### `asmcore.syntax`

- `token.decide_next_token(src)` classifies the token at the start of a
  string. It returns a `TokenKind` and the token's length in UTF-8 bytes.
- `excerpt` decodes literals:
  - `excerpt_as_bigint` handles numbers with `0b`, `0o`, `0x`, `%` and `$`
    prefixes and `_` separators. Binary, octal and hex literals get a size
    from their digit count.
  - `excerpt_as_usize` parses a number that must fit an unsigned 64-bit
    integer.
  - `excerpt_as_string_contents` resolves escapes: `\n`, `\x41`, `\u{1F600}`
    and others.

### `asmcore.expr`

- `expression` defines `Value` and the expression nodes (`ExprLiteral`,
  `ExprVariable`, `ExprUnary`, `ExprBinary`, `ExprTernary`, `ExprSlice`,
  `ExprSliceShort`, `ExprBlock`, `ExprCall`, `ExprAsm`). `Value` has the
  kinds unknown, failed constraint, void, integer, string, boolean and
  function. `ExprString.to_bigint` encodes strings as `utf8`, `utf16be`,
  `utf16le`, `utf32be`, `utf32le` or `ascii`.
- `context` holds `EvalContext`, which stores locals, token substitutions
  and recursion depth. It also defines the query classes
  (`EvalVariableQuery`, `EvalFunctionQuery`, `EvalAsmBlockQuery`) that are
  passed to a provider callable, and `dummy_eval_query`, a provider that
  rejects every query.
- `evaluate` contains `evaluate(expr, provider, ctx)`, `eval_bigint`,
  `eval_nonzero_usize` and `try_eval_usize`. An unknown or failed-constraint
  value stops evaluation and is returned as it is.
- `builtins` implements the built-in functions `assert`, `le`, `ascii`,
  `utf8`, `utf16be`, `utf16le`, `utf32be`, `utf32le` and `strlen`.
- `inspect` has `get_static_size`, `is_value_statically_known` and
  `returned_value_span`. They work from a `StaticallyKnownProvider` and do
  not evaluate.

## Installation

From a checkout of the project:

```
pip install .
```

## Examples

Recognizing a token and decoding a number literal:

```python
from asmcore.syntax.token import TokenKind, decide_next_token
from asmcore.syntax.excerpt import excerpt_as_bigint

kind, length = decide_next_token("0x1f + 2")
assert kind is TokenKind.NUMBER and length == 4

value = excerpt_as_bigint("0x1f")
print(value.value, value.size)   # 31 8
```

Building output and formatting it:

```python
from asmcore.util.bigint import BigInt
from asmcore.util.bitvec import BitVec
from asmcore.util.bitvec_format import format_hexstr, format_intelhex

bits = BitVec()
bits.write_bigint(0, BigInt(0xABCD, 16))
print(format_hexstr(bits))          # abcd
print(format_intelhex(bits, 8))
```

Evaluating an expression tree:

```python
from asmcore.expr.expression import BinaryOp, ExprBinary, ExprLiteral, Value
from asmcore.expr.evaluate import evaluate

tree = ExprBinary(
    None, None, BinaryOp.ADD,
    ExprLiteral(None, Value.integer(2)),
    ExprLiteral(None, Value.integer(3)),
)
print(evaluate(tree).payload.value)   # 5
```

## Errors

Errors are raised as exceptions:

- `BigIntError`
- `ExcerptError`
- `FileServerError`
- `SymbolError`
- `OverlapError`
- `ExprError`
- `FilenameError`

Each one carries its message and, where one is known, the source span.

## What this package does not do

- There is no assembler command and no driver that takes a source file and
  produces output.
- There is no parser that turns text into expression trees. Trees are built
  directly from the `Expr*` classes, and `decide_next_token` recognizes only
  one token at a time.
- There are no instruction-set definitions and no handling of `asm` blocks.
  An `ExprAsm` node is passed to the provider you supply.
- There are no annotated listings and no symbol-file output. The formats in
  `bitvec_format` are the ones listed above.

## Running the tests

```
pip install -e .[test]
pytest
```