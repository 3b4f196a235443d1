# zumic

zumic is a small in-memory key-value store. It comes with ZSP, a line-based
wire protocol close to RESP, and with an asyncio TCP server that speaks it.
It needs no third-party libraries at run time.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Running the server

```
zumic
```

To listen somewhere else, pass an address as `host:port`:

```
zumic 0.0.0.0:7000
```

The server listens on `127.0.0.1:6379` by default. It decodes each incoming
frame and replies as follows:

- a simple string `+text` gets `+text` back;
- an integer `:n` gets `:n` back;
- an error `-message` gets `-message` back;
- any other frame (bulk string, array, dictionary) gets `+OK`.

Input may arrive in pieces. A frame that is still incomplete is kept until
more bytes come in. When the decoder meets malformed input, the server stops
decoding that batch and waits for the next read.

From code, `zumic.server.run_tcp_server("host:port")` is a coroutine that
serves forever. `zumic.server.handle_connection(reader, writer)` serves one
asyncio stream pair. `zumic.server.format_response(frame)` returns the reply
bytes for a decoded frame.

## What the package does not do

The server does not run commands. It does not parse `SET`, `GET` or any other
command, and it does not touch a store. It only echoes frames as described
above. The store lives wholly in memory: nothing is written to disk, and there
is no clustering, no pub/sub, no scripting and no authentication.

## Library overview

### Data structures

- `zumic.arc_bytes.ArcBytes`: an immutable binary string that you can build
  from `str`, `bytes` or a list of byte values. It orders and hashes by its
  bytes, and it compares equal to `bytes` and to `str` with the same UTF-8
  content. It offers `as_str()` (which returns `None` on invalid UTF-8),
  `expect_utf8()`, `slice(start, stop)`, `startswith`, `endswith`, and
  `to_json()` / `from_json()` as a JSON array of byte values.
- `zumic.smart_hash.SmartHash`: a field/value hash. It keeps its pairs in a
  list while small and switches to a dict once it holds 32 entries. When
  removals bring a dict below 16 entries, it switches back to the list on the
  next `insert`, `get` or iteration. Its methods are `insert`, `get`, `remove`,
  `keys`, `values`, `entries`, `get_all` (pairs as text, with invalid UTF-8
  replaced), `extend` and `clear`.
- `zumic.quicklist.QuickList`: a list built from bounded deque segments, suited
  to pushes and pops at both ends. Its methods are `push_front`, `push_back`,
  `pop_front`, `pop_back`, `get`, `set`, `optimize`, `auto_optimize` and
  `validate` (which raises `ValueError` on inconsistency). It can be built with
  `from_iterable` and turned into a deque with `to_deque`.
- `zumic.skip_list.SkipList`: an ordered map. Its methods are `insert`,
  `search`, `update`, `remove`, `first`, `last` and `range(start, end)` (where
  `end` is exclusive). It supports forward iteration and `reversed()`, and
  `to_pairs()` / `from_pairs()` for serialisation.

### Stored values

`zumic.types` defines the value kinds: `StrValue`, `IntValue` (checked to fit
in a signed 64-bit integer), `FloatValue`, `NullValue`, `ListValue`,
`HashValue`, `SetValue`, `ZSetValue`, `HyperLogLogValue` (wrapping `HLL`) and
`StreamValue` (a list of `StreamEntry`). A `ZSetValue` keeps a member-to-score
dict and a `SkipList` ordered by score. Use `ZSetValue.add(member, score)` or
`ZSetValue.from_scores(...)` to keep both in step.

### Storage

```python
from zumic.arc_bytes import ArcBytes
from zumic.storage import InMemoryStore
from zumic.types import IntValue

store = InMemoryStore()
store.set(ArcBytes("counter"), IntValue(1))
store.rename(ArcBytes("counter"), ArcBytes("hits"))
print(store.get(ArcBytes("hits")))  # IntValue(value=1)
```

`InMemoryStore` implements the abstract `zumic.storage.Storage` interface. Its
methods are `set`, `get`, `delete` (which returns 1 or 0), `mset`, `mget`,
`rename`, `renamenx` and `flushdb`. Keys may be given as `ArcBytes`, `str` or
`bytes`. `rename`, and `renamenx` when the target is free, raise
`zumic.errors.KeyNotFoundError` if the source key is missing. All operations
take a lock, so the store can be shared between threads.

### Protocol

The frame types live in `zumic.frame`: `SimpleString`, `FrameError`,
`Integer`, `FloatFrame`, `BulkString`, `Array`, `Dictionary`, `ZSetFrame` and
`NullFrame`.

```python
from zumic.decoder import ZSPDecoder
from zumic.encoder import encode
from zumic.frame import Array, Integer, SimpleString

data = encode(Array([SimpleString("test"), Integer(42)]))
# b"*2\r\n+test\r\n:42\r\n"

decoder = ZSPDecoder()
frame = decoder.decode(data)
```

`encode` raises `zumic.errors.InvalidDataError` in three cases: a simple string
or error that holds CR or LF, a bulk string over 512 MiB, and nesting deeper
than 32 levels.

`ZSPDecoder.decode` reads from a seekable binary stream such as `io.BytesIO`
or from raw bytes. It returns `None` until a frame is complete, and it resumes
unfinished bulk strings and arrays on the next call. Malformed input raises
`InvalidDataError` or `UnexpectedEofError`, both subclasses of
`zumic.errors.ZSPError`.

Stored values turn into frames in two ways:

- `zumic.frame.frame_from_value` turns UTF-8 strings into simple strings. It
  raises `zumic.errors.FrameConversionError` for HyperLogLog and stream values,
  and for hash or sorted-set keys that are not UTF-8.
- `zumic.serializer.value_to_frame` and `serialize_response` build the frames
  for replies, from `OkResponse`, `ValueResponse`, `ErrorResponse`,
  `NotFoundResponse`, `IntegerResponse`, `FloatResponse` and `StringResponse`.

## Tests

```
pytest
```