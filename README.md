# fzcore

This library holds the building blocks of an interactive fuzzy finder. It is
plain Python and has no runtime dependencies. It can:

- score how well a short query matches a line of text,
- remove ANSI escape sequences from input lines and record which ranges were
  coloured,
- keep incoming lines in fixed-size chunks and take snapshots of them,
- cache query results for each chunk,
- merge partial result lists that are each sorted into one ordered view,
- keep a query history in a file.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

### `fzcore.algo.scheme`

- `scheme_for(name)` returns a `Scheme` for `"default"`, `"path"` or
  `"history"`. Any other name raises `ValueError`.
- A `Scheme` sorts characters into a `CharClass` with `char_class_of`. It
  gives positional bonuses with `bonus_for` and `bonus_at`.
- `MatchResult` holds `start`, `end` and `score`. A result that did not match
  has `-1` offsets and `matched` set to false.

### `fzcore.algo.fuzzy`

- `fuzzy_match_v1` is a greedy matcher. It finds the first fuzzy occurrence
  scanning forward (or backward), then shortens it with a scan in the other
  direction.
- `fuzzy_match_v2` finds the alignment with the highest score. If you pass
  `max_cells` and the score matrix would be larger than that, it uses
  `fuzzy_match_v1` instead. When you ask for positions, it returns them from
  the last matched character back to the first.
- `calculate_score` scores a match that is already known.
- `ascii_fuzzy_index` narrows the range of text to search when both the text
  and the pattern are ASCII.

### `fzcore.algo.exact`

This module has `exact_match_naive`, `exact_match_boundary`, `prefix_match`,
`suffix_match` and `equal_match`. The prefix, suffix and equal matchers skip
whitespace at the ends of the text, unless the pattern itself begins or ends
with whitespace.

All matchers take the same arguments, in this order:

1. `case_sensitive`
2. `normalize`
3. `forward`
4. `text`
5. `pattern`
6. `with_pos`
7. `scheme`

They return a `(MatchResult, positions)` pair. The `positions` value is
`None` unless positions were requested from a fuzzy matcher.

If matching is not case sensitive, the pattern must already be lower case. If
`normalize` is set, the pattern must already be normalised.

### `fzcore.algo.normalize`

`normalize_rune` and `normalize_runes` turn accented and variant Latin letters
into their plain letters. Case is kept.

### `fzcore.ansi`

- `extract_color(text, state, proc=None)` returns three things: the text with
  escape sequences removed, the list of `AnsiOffset` ranges (or `None`), and
  the `AnsiState` in effect at the end of the text. Offsets count characters.
- `interpret_code` applies one escape sequence to a state.
- `next_ansi_escape_sequence` finds the next escape sequence in a string.
- `parse_ansi_code` splits off the first numeric parameter.
- `AnsiState.to_string()` writes a state back out as an escape sequence.
- `Attr` holds the text attributes.
- `Url` holds an OSC 8 hyperlink.

### `fzcore.item`

`Item` is one input line. It holds the matchable `text` and its `index`. It
may also hold `orig_text` and `colors`. `as_string(strip_ansi)` returns the
original line.

### `fzcore.cache`

- `Chunk` holds at most `CHUNK_SIZE` items (100).
- `ChunkCache` stores query results for full chunks only. It skips result
  lists longer than `QUERY_CACHE_MAX` (20). `search` looks for the longest
  prefix or suffix of a query that has already been cached.

### `fzcore.chunklist`

`ChunkList(cache, trans)` builds items from incoming data with `trans`. The
`trans` function returns an `Item`, or `None` to reject the data.

`snapshot(tail)` returns three things: the chunks, their item count, and
whether items were dropped so that only the last `tail` remain. A `tail` of
`0` keeps everything. `count_items` adds up the items in a list of chunks.

### `fzcore.merger`

`Merger` presents several result lists as one list. When `sorted` is set,
each list must already be ordered (by `key`, if one is given), and the merge
happens lazily as items are requested. Otherwise the lists are joined end to
end. `tac` reverses the order of a merger that is not sorted.

- `pass_merger` goes through the items of chunks in input order.
- `empty_merger` holds nothing.
- `get` raises `IndexError` when the index is out of range.
- `Revision` tracks input generations. Two revisions are `compatible` when
  they share the same major number.

### `fzcore.history`

`History(path, max_size)` reads a history file, creating it if it is
missing. It keeps at most `max_size` entries and moves through them with
`previous` and `next`. `append` saves the file after each addition.
`override` changes the current entry in memory only. Errors with the file
raise `HistoryError`.

### `fzcore.tempfiles`

`write_temporary_file(data, print_sep)` writes the lines to a new temporary
file. Each line ends with `print_sep`. It returns the file's path, or `None`
if the file cannot be created. `remove_files` deletes files and ignores any
it cannot delete.

### `fzcore.constants`

This module holds tuning values such as chunk and cache sizes, history and
timing defaults, and jump labels. It also defines the `Event` and `ExitCode`
enumerations.

## Examples

```python
from fzcore.algo.scheme import scheme_for
from fzcore.algo.fuzzy import fuzzy_match_v2

scheme = scheme_for("default")
result, positions = fuzzy_match_v2(
    False, False, True, "foo bar baz", "fbb", True, scheme, None
)
print(result.start, result.end, result.score, sorted(positions))
```

```python
from fzcore.ansi import extract_color

text, offsets, state = extract_color("\x1b[31mred\x1b[0m plain", None)
# text == "red plain"; offsets holds one range, 0 to 3, with fg == 1
```

```python
from fzcore.merger import Merger

merger = Merger(None, [[1, 4], [2, 3]], sorted=True)
print(list(merger))  # [1, 2, 3, 4]
```

## What it does not do

This package is a library only. It does not include:

- a command-line program,
- an interactive terminal interface,
- a preview window,
- a parser for query syntax,
- background search workers,
- a reader that collects input from standard input, files or commands.

Programs that use it must read their own input, split queries into patterns,
call the matchers, and display the results themselves.