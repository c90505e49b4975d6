# clawtools

A small toolkit for defining tools that an agent can call.
Each tool takes JSON-like input (plain dicts, lists, strings and numbers) and gives back JSON-like output.
When a tool fails it raises an exception.

## Modules

### `clawtools.core`

The basic building blocks.

- `Tool` is an abstract base class. A tool has:
  - a class-level `name` and `description`;
  - `input_schema()` and `output_schema()`, which return a `ToolSchema`;
  - `permission()`;
  - `execute(input)`.
- `ToolSchema(type, description=None, properties=None, required=None)` describes a tool's input or output. `to_dict()` returns it as a plain dict.
- Permission policies each have a `check(action, target)` method. When the check fails it raises `PermissionDeniedError`.
  - `SafePermission` and `CustomPermission` allow everything.
  - `FilesystemPermission(allowlist, writable)` allows targets below an allowlisted path. Paths that exist are resolved first, so `..` cannot escape the allowlist.
  - `ShellPermission(allowlist, arg_pattern)` allows actions whose command name is on the allowlist.
  - `NetworkPermission(destinations, protocols, max_connections)` allows targets that appear in `destinations`.
- Errors all derive from `ToolError`:
  - `NotFoundError`
  - `PermissionDeniedError`
  - `InvalidInputError`
  - `ExecutionFailedError`
  - `ToolTimeoutError`
  - `ResourceLimitError`
  - `ToolIOError`

  The value each error was raised with is kept in `.detail`.
- `ToolCall(name, arguments)` is a call request; `arguments` is a JSON string.
- `ToolResult(content, error=None)` is the result of a call. `str()` of a result gives the content, or `Error: <error>` when an error is set.

### `clawtools.permissions`

A simple allow/deny model.

- `Permission` is an enum:
  - `READ_FILE`
  - `WRITE_FILE`
  - `EXECUTE_COMMAND`
  - `NETWORK_ACCESS`
  - `SPAWN_PROCESS`
- `FileSystemAccess(path)` is the permission to access one path.
- `PermissionSet` has these methods:
  - `allow(perm)` and `deny(perm)`; each one overrides the other for the same permission.
  - `is_allowed(perm)`.
  - `check(perm)`, which raises:
    - `PermissionDenied` when the permission was denied;
    - `PermissionRefused` when it was never allowed.
- `PermissionDenied`, `PermissionRefused` and `ToolFailure` all derive from `PermissionCheckError`.

### `clawtools.text_tools`

- `HashTool` returns a 64-bit keyed-hash hex digest of `data`.
- `UuidTool` returns an identifier built from the current time in nanoseconds.
- `RandomStringTool` returns an alphanumeric string of `length` characters. The default length is 32 and the maximum is 128.
- `TextStatsTool` counts the characters, words and lines of `text`.

### `clawtools.validator`

- `validate_against_schema(data, schema, path, detailed)` checks a value against the top-level keywords of a schema and returns a list of error messages. The keywords it checks are:
  - `type` (with `integer`)
  - `required`
  - `enum`
  - `minimum` and `maximum`
  - `minLength` and `maxLength`, measured in UTF-8 bytes
  - `minItems` and `maxItems`

  `pattern` is accepted but not enforced. Nested schemas are not descended into.
- `ValidateJsonTool` runs that check on `data` against `schema`. `detailed_errors` is on by default and prefixes each message with its path (`root:` at the top).
- `ValidateToolInputTool` only checks that `input` is JSON-serialisable. Its result carries a `note` naming the tool.

### `clawtools.json_store`

- `JsonStore(path=None)` is a thread-safe mapping of keys to JSON values with these methods:
  - `set`
  - `get`: returns a copy, or `None`
  - `delete`
  - `list_keys`

  When a path is given, the file is loaded if it exists, and every change is written back as indented JSON.
- `JsonStoreSetTool`, `JsonStoreGetTool` and `JsonStoreListTool` each work on a fresh in-memory store. Values therefore do not carry over from one call to the next, and `store_path` is accepted but not used. Use `JsonStore` directly when you need persistence.

### `clawtools.network`

These tools use `httpx`.

- `HttpRequestTool` sends a request with:
  - `method`: one of `GET`, `POST`, `PUT`, `PATCH` or `DELETE`;
  - `url`: must be absolute and use `http` or `https`;
  - optional `headers`;
  - optional `body`: a string is sent as is, and any other value is sent as JSON;
  - `timeout_seconds`: 30 by default.

  It returns `status`, lower-cased `headers` and `body`. A bad method or URL raises `InvalidInputError`. A failed request raises `ExecutionFailedError`.
- `HealthCheckTool` sends a `HEAD` request to `url` and compares the answer with `expected_status` (200 by default). The timeout is `timeout_secs` (5 by default). It returns `healthy`, `status_code`, `response_time_ms` and `error`. A connection failure is reported in the result, not raised.
- `BatchHealthCheckTool` does the same for every URL in `urls`, with a 5-second timeout, and returns one result per URL.

## Installation

```
pip install clawtools
```

The package needs Python 3.10 or later.

## Usage

```python
from clawtools.text_tools import TextStatsTool
from clawtools.validator import ValidateJsonTool
from clawtools.core import FilesystemPermission, PermissionDeniedError

print(TextStatsTool().execute({"text": "hello world\nsecond line"}))
# {'characters': 23, 'words': 4, 'lines': 2}

print(ValidateJsonTool().execute({
    "data": {"a": 1},
    "schema": {"type": "object", "required": ["a", "b"]},
}))
# {'valid': False, 'errors': ['root: missing required field: b']}

perm = FilesystemPermission(allowlist=["/tmp"])
perm.check("read", "/tmp/notes.txt")  # passes
try:
    perm.check("read", "/etc/passwd")
except PermissionDeniedError as exc:
    print(exc)
```

```python
from clawtools.json_store import JsonStore

store = JsonStore("store.json")
store.set("greeting", {"text": "hi"})
print(store.list_keys())  # ['greeting']
```

## What the package does not do

- There is no tool registry and no function that collects the built-in tools in one place. You create the tools you need and call them directly.
- There are no file tools (listing, reading, writing, editing or inspecting files) and no image-inspection tools.
- There is no process sandbox. Tools run in the calling process, and no resource limits are applied.
- There is no asynchronous executor, and nothing checks a `PermissionSet` before a tool runs. `PermissionSet.check` must be called by your own code.
- There is no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```