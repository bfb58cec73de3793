# resolvkit

Small, independent helpers for a stub DNS resolver. It uses only the standard library.

## Modules

- `resolvkit.answerttl` works out how long a raw DNS answer message may be cached.
  - `answer_ttl(answer)` returns the smallest TTL among the answer records.
  - When there are no answer records, it returns the negative TTL. This is the smaller of the SOA record's TTL and its MINIMUM field.
  - It returns `0` when the message cannot be parsed, meaning "do not cache".
  - `negative_ttl(answer)` computes the negative TTL on its own.
  - `skip_name(data, offset)` returns the length of a possibly compressed name. It raises `ValueError` for malformed names.
- `resolvkit.hostnames` checks the character set of domain names. It has four functions: `is_hostname`, `is_owner_name`, `is_mail_name` and `is_domain_name`. Each accepts `str` or `bytes`.
- `resolvkit.hosterror` turns resolver host error codes into text.
  - `hstrerror(err)` returns the message for a code.
  - `herror(message, err, stream=None)` writes `message: <text>` and a newline to the stream, or to stderr.
- `resolvkit.dispatch` implements name-service switch dispatch.
  - `nsdispatch(table, database, method, defaults, *args)` consults the `Source`s in order, using the matching `DispatchEntry` callbacks. Source names are matched ignoring case.
  - It returns a pair: an `NSStatus` and the value from the last callback that ran.
  - `find_method(source, table)` looks up a single entry.
- `resolvkit.logformat` is a minimal printf-style formatter.
  - `format_message`, `format_to_buffer` and `write_formatted` support `%s %c %p %d %i %o %x %X %%`, the flags `0` and `-`, a field width and the `hh h l ll z t` length modifiers.
  - Sign flags, precisions and other conversions raise `FormatError`.
  - It also encodes main-log records (`encode_log_record`) and integer events (`encode_event_int`). `EventType` lists the event payload types.
- `resolvkit.logger_entry` packs and unpacks the binary headers of kernel logger entries: `LoggerEntry` (version 1) and `LoggerEntryV2` (version 2).
- `resolvkit.control_socket`: `get_control_socket(name, environ=None)` reads the descriptor number published in `ANDROID_SOCKET_<name>`.
  - It raises `KeyError` when the variable is missing.
  - It raises `ValueError` when the number is out of range.
  - `SocketNamespace` lists the local socket namespaces.

## Installation

```
pip install .
```

## Examples

```python
from resolvkit.hostnames import is_hostname
from resolvkit.hosterror import hstrerror
from resolvkit.logformat import format_message, format_to_buffer

is_hostname("www.example.com")       # True
is_hostname("-bad.example.com")      # False
hstrerror(1)                         # 'Unknown host'
format_message("%5d|%-3s|", 42, "ab")  # '   42|ab |'
format_to_buffer(4, "hello")         # 'hel'
```

Dispatching to the first source that succeeds:

```python
from resolvkit.dispatch import DispatchEntry, NSStatus, Source, nsdispatch

def files(cb_data, name):
    return NSStatus.NOTFOUND, None

def dns(cb_data, name):
    return NSStatus.SUCCESS, f"{name} via dns"

table = [DispatchEntry("files", files), DispatchEntry("dns", dns)]
status, value = nsdispatch(table, "hosts", "gethostbyname",
                           [Source("files"), Source("dns")], "example.com")
# status is NSStatus.SUCCESS, value is 'example.com via dns'
```

## What it does not do

The package has no answer cache of its own. It also does not do the following:

- check, hash or compare query packets;
- keep per-interface resolver settings such as name servers or search domains;
- send or receive DNS messages.

`answer_ttl` tells you how long an answer may be kept. Storing it is up to the caller.

## Running the tests

```
pip install .[test]
pytest
```