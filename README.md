# erdkit

`erdkit` is a library of building blocks for a filesystem and disk usage tree viewer. It depends only on the standard library. It provides:

- `erdkit.ansi`: truncates ANSI-coloured text without breaking its escape sequences.
- `erdkit.units`: binary (`BinPrefix`) and SI (`SiPrefix`) unit prefixes.
- `erdkit.file_size`: file size as logical bytes, physical bytes, blocks, lines or words.
- `erdkit.permissions`: Unix file modes in symbolic and octal notation.
- `erdkit.fsinfo`: inode identity, symlink targets, owner and group names, and extended attributes.
- `erdkit.icons`: icons for files, plain or with 256-colour styling.
- `erdkit.options`: option enums, column widths and the errors raised while setting up a run.
- `erdkit.config`: locating and tokenising an `.erdtreerc` file.
- `erdkit.context`: the command-line parser and the `Context` built from it.

## Examples

### Truncating coloured text

`truncate` counts only visible characters. If the cut leaves a style sequence open, it appends a reset:

```python
from erdkit.ansi import truncate

text = "\x1b[1;31mHello World\x1b[0m!!!"
assert truncate(text, 5) == "\x1b[1;31mHello\x1b[0m"
```

### Unit prefixes

```python
from erdkit.units import BinPrefix, SiPrefix

assert BinPrefix.from_value(1024).as_str() == "KiB"
assert SiPrefix.from_value(1000).as_str() == "KB"
assert BinPrefix.from_value(1000).as_str() == "B"
assert BinPrefix.MEBI.base_value() == 2**20
```

### File sizes

`erdkit.file_size` has one class for each measure:

| Class | Built with | Measures |
|-------|------------|----------|
| `ByteMetric` | `logical` | logical bytes, from a stat result |
| `ByteMetric` | `physical` | bytes on disk: `st_blocks` × 512, or `st_size` where there is no block count |
| `BlockMetric` | `from_stat` | allocated blocks |
| `LineCountMetric` | `from_path` | lines in a UTF-8 file |
| `WordCountMetric` | `from_path` | words in a UTF-8 file |

`LineCountMetric.from_path` and `WordCountMetric.from_path` return `None` for a file that cannot be read as UTF-8.

`FileSize.for_usage(disk_usage, human, prefix_kind)` returns an empty accumulator for the chosen `DiskUsage`. Sizes are added together with `+=`.

How a `ByteMetric` is shown depends on whether it is human-readable:

- A human-readable value has one decimal place and the nearest prefix, for example `1.0 KiB` or `1.0 KB`.
- A value below the first prefix is shown as a whole number, for example `1000 B`.
- A value that is not human-readable is always shown in bytes, for example `100 B`.

```python
from erdkit.file_size import ByteMetric
from erdkit.units import PrefixKind

metric = ByteMetric.empty_logical(True, PrefixKind.BIN)
metric.value = 1024
assert str(metric) == "1.0 KiB"
```

### Permissions

```python
from erdkit.permissions import FileMode

mode = FileMode.from_mode(0o100644)
assert str(mode) == ".rw-r--r--"
assert format(mode, "o") == "644"
assert mode.with_xattrs() == ".rw-r--r--@"

assert str(FileMode.from_mode(0o101644)) == ".rw-r--r-T"
assert str(FileMode.from_mode(0o107777)) == ".rwsrwsrwt"
```

A mode with an unknown file type raises `PermissionsError`.

### Filesystem information

`erdkit.fsinfo` provides:

- `Inode.from_stat`: the inode identity of a file.
- `symlink_target`: the target of a symlink.
- `try_get_owner` and `try_get_owner_and_group`: owner and group names. They raise `UserGroupError` when a name cannot be resolved.
- `has_xattrs`: whether a file has extended attributes. It returns `False` on platforms without `os.listxattr`.

### Icons

`compute(path, link_target=None)` picks the first icon it finds, in this order:

1. the file type (directory or symlink)
2. the file extension
3. a special file name
4. a default icon

When `link_target` is given for a symlink, the target decides the type and the extension.

`compute_with_color(path, link_target=None, foreground=None)` colours the icon depending on what chose it:

- Type and name icons are painted bold with `foreground`, if one is given. `foreground` is an 8-bit colour number or an SGR parameter string.
- Extension icons and the default icon use their own fixed colours, through `col`.

### Configuration

`erdkit.config.read_config_to_string()` returns the rc file's contents prefixed with `"--\n"`, or `None` if no file is found.

On Unix it searches these places, in order:

1. `$ERDTREE_CONFIG_PATH`
2. `$XDG_CONFIG_HOME/erdtree/.erdtreerc`
3. `$XDG_CONFIG_HOME/.erdtreerc`
4. `$HOME/.config/erdtree/.erdtreerc`
5. `$HOME/.erdtreerc`

On Windows it searches these places, in order:

1. `$ERDTREE_CONFIG_PATH`
2. `%APPDATA%/erdtree/.erdtreerc`

`erdkit.config.parse(text)` splits the text into argument tokens and drops lines that start with `#`.

```python
from erdkit.config import parse

assert parse("--\n# comment\n--human --level 2") == ["--", "--human", "--level", "2"]
```

### Context

`Context.from_argv(argv)` parses command-line arguments with the parser from `build_parser()`. It raises `ArgParseError` in two cases:

- the arguments are invalid
- an option that needs another is missing it, for example `--octal` without `--long`

The resulting `Context` answers these questions:

- `no_color()`: whether to colour the output. A set `NO_COLOR` decides first, then `--color` and whether stdout is a terminal.
- `dir()` and `dir_canonical()`: the root directory.
- `level()`: the maximum depth.
- `time()` and `time_format()`: which timestamp to show in long view, and how to format it.
- `file_type()`: the file type a search is restricted to.
- `regex_predicate()` and `glob_predicate()`: predicates over paths. A glob with a leading `!` is negated. `--iglob` makes the glob case-insensitive.
- `byte_metric()`: whether sizes are reported in bytes.

```python
from erdkit.context import Context

ctx = Context.from_argv(["--pattern", r"\.py$", "some/dir"])
keep = ctx.regex_predicate()
```

## What the package does not do

- It has no command-line program of its own. `Context.from_argv` only parses arguments.
- It does not walk a directory, build a tree, sort entries or render output.
- It does not merge settings from `.erdtreerc` or `.erdtree.toml` with the command line. `erdkit.config` only finds and tokenises the rc file; nothing reads TOML configuration.
- It shows no progress indicator and does not generate shell completions.