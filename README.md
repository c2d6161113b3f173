# rededr-ppl

The decision logic of an EDR telemetry service, as a plain Python library:
which processes to watch, which trace events to pass on and under what name,
how to react to control commands, and a small JSON library.

## Modules

- `rededr_ppl.objcache`: `ObjectCache` maps process ids to a `CacheEntry`
  (`pid`, `observe`). On the first lookup of a pid, `get()` decides whether
  the process is observed. It is observed when `target_name` is set and
  occurs in the executable path. The decision is cached from then on.
  `add()`, `find()` and `clear()` work on the cache directly, and `len()`
  gives the number of entries. All access is guarded by a lock. The path
  lookup can be passed in. The default, `process_path(pid)`, reads it with
  psutil and returns `None` when the path cannot be read.
- `rededr_ppl.events`: `ti_event_name(event_id)` names threat-intelligence
  events 1–32 (`"???"` for unknown ids). `kernel_process_event_name(event_id)`
  names only process start (1) and thread start (3) and returns `None` for
  anything else. `EtwTiHandler(cache, emit)` takes `EventRecord`s
  (`event_id`, `process_id`, `properties`). Only while its `enabled` property
  is true, and only for observed processes, it calls `emit(name, record)` and
  returns the name. Otherwise it returns `None`.
- `rededr_ppl.control`: `parse_command(text)` returns a `Command`
  (`START`, `STOP`, `SHUTDOWN`, `UNKNOWN`) and its argument. Any message
  containing `start:` is a start command whose argument is the field after
  it, for example `start:notepad`. `stop` and `shutdown` must match exactly,
  and trailing NUL characters are ignored. `ControlHandler(cache, handler,
  connect, disconnect, shutdown)` carries out the commands:
  - start sets the cache's target name, calls `connect` and enables the handler;
  - stop disables the handler and calls `disconnect`;
  - shutdown stops the handler's loop and calls `shutdown`.

  `run(messages)` handles messages in order until they run out or a shutdown
  arrives, and returns the commands it handled.
- `rededr_ppl.jsontoken`: `tokenize(text)` turns JSON text into a list of
  `JsonToken`s (`type` is a `TokenType`, `value` the literal). A malformed
  token raises `TokenizeError`, which carries a `position`.
- `rededr_ppl.jsonformat`: `format_value(value, singleline)` renders a value
  as text. It writes one line, or spreads objects and longer arrays over
  lines indented by four spaces. An invalid value renders as `""`. Floats are
  written with six decimals. `quote_string(text)` escapes a string, including
  `/` as `\/`. `JsonType` lists the kinds of value.
- `rededr_ppl.jsonvalue`: `JsonValue` is a mutable JSON tree.
  - Build one with `JsonValue.parse()` (str or UTF-8 bytes), `from_tokens()`
    or `from_file()`. Malformed input gives a value whose `valid()` is
    `False`.
  - Read it with `type()`, `len()`, `integer()`, `frac()`, `string()`,
    `boolean()`, `keys()` (sorted) and `get()`.
  - Change it with `add()`, `erase()`, `reset()` and `load()`.
  - Indexing with a string makes the value an object, and indexing with an
    int makes it an array. Missing members are created as null.
  - `copy()` makes a deep copy, and `text()` or `str()` render the value.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install .[test]
```

## Example

```python
from rededr_ppl.objcache import ObjectCache
from rededr_ppl.events import EtwTiHandler, EventRecord
from rededr_ppl.control import ControlHandler

sent = []
cache = ObjectCache(lambda pid: r"C:\tools\notepad.exe" if pid == 42 else None)
handler = EtwTiHandler(cache, lambda name, record: sent.append(name))
control = ControlHandler(
    cache,
    handler,
    connect=lambda: True,
    disconnect=lambda: None,
    shutdown=lambda: None,
)

control.handle("start:notepad")
handler.handle_ti(EventRecord(event_id=1, process_id=42))
print(sent)  # ['ALLOCVM_REMOTE']
```

```python
from rededr_ppl.jsonvalue import JsonValue

doc = JsonValue.parse('{"a": [1, 2, 3], "b": "text"}')
print(doc.valid(), len(doc), doc.keys())  # True 2 ['a', 'b']
doc["c"]["d"].add(True)
print(doc.text())  # {"a":[1,2,3],"b":"text","c":{"d":[true]}}
```

## What this package does not do

It does not run as a system service, open trace sessions or read events from
the operating system. It does not carry control messages or emitted events
over pipes. Your code supplies the `EventRecord`s, the control messages and
the `emit`, `connect`, `disconnect` and `shutdown` callables. The package has
no command-line program.

## Tests

```
pytest
```