# trportfolio

A library for fetching a Trade Republic timeline (transactions, the
activity log and the detail pages behind them) and turning it into typed
Python objects, plus a CSV ledger format and a few storage helpers.

## Modules

- `trportfolio.apiclient`: `Client` talks to the REST login, one-time code
  and session endpoints and returns `LoginResponse` objects and `Token`s.
  Failed requests raise `APIError`, which carries the HTTP status code.
- `trportfolio.authclient`: `AuthClient` holds the session and refresh
  tokens. It loads them from `.session` and `.refresh` files in its token
  directory, writes them back after a one-time code is confirmed, and
  refreshes the session in a background thread (every 60 seconds by
  default). It is a context manager, and `close()` stops the refresh.
- `trportfolio.console`: `AuthService` asks for a phone number, PIN and 2FA
  code on the console and passes them to an `AuthClient`. `read_password`
  reads a secret without echo.
- `trportfolio.tokens`: `Token`, `TokenName` and `TokenNotFoundError`. A
  token can be parsed from `Set-Cookie` values, read from a file or written
  to a file.
- `trportfolio.headers`: `Headers` builds the HTTP headers. It always sends
  the user agent, and can add a JSON content type and the refresh-token
  cookie.
- `trportfolio.wsreader`: `WebsocketReader` subscribes to a data type over
  the websocket API and returns the first answer as a `JSONResponse`. It
  skips "continue" frames. When the server reports an authentication error,
  it logs in again, reconnects and retries. Other errors raise
  `ErrorStateReceived`. If you pass a writer, every answer is also written
  to it.
- `trportfolio.wsmessage`: `Message.parse` splits a websocket frame into its
  subscription id, state and payload. Malformed frames raise
  `MessageParseError`.
- `trportfolio.jsonwriter`: `JSONWriter` stores responses as
  `<base_dir>/<data type>/<id>.json`. When a response has no `id`, it uses
  `page-1.json`, `page-2.json`, and so on. The default base directory is
  `responses`.
- `trportfolio.jsonreader`: `JSONReader` reads responses back from the same
  layout, so recorded traffic can be replayed offline.
- `trportfolio.wsclient`: `WSClient` requests one data type through a
  reader and follows `cursors.after` until the last page.
- `trportfolio.transactions`: `TransactionsClient`, `ResponseItem`,
  `EventType`, and `EventTypeResolver`, which raises
  `UnsupportedEventTypeError` for event types that are not handled.
- `trportfolio.activitylog`: `ActivityLogClient` and `ActivityLogItem`.
- `trportfolio.details`: `DetailsClient` fetches a `DetailsResponse`. This
  module also holds the typed sections (`HeaderSection`, `TableSection`,
  `DocumentsSection`) and `NormalizedResponse`.
- `trportfolio.normalizer`: `TransactionResponseNormalizer` requires a
  header section. It sorts the overview, performance and transaction tables
  and picks up documents when they are present.
  `ActivityLogResponseNormalizer` requires both a header and a documents
  section.
- `trportfolio.typeresolver`: `TypeResolver` classifies a transaction as a
  purchase, sale, deposit, withdrawal, dividend payout, interest payout,
  round-up or saveback. If none of these match, it raises
  `UnsupportedTypeError`.
- `trportfolio.csvfile`: `CSVEntry`, `CSVWriter` and `CSVReader`.
  - `CSVWriter` appends one entry at a time and writes the header only when
    it creates the file.
  - `CSVReader` returns an empty list for a file that does not exist.
- `trportfolio.timeutil`: `format_csv_datetime` and `parse_csv_datetime`
  use the `YYYY-MM-DD HH:MM:SS` format.
  - Values without a zone are taken as UTC.
  - The older `25 Sep 23 08:45 +0000` form is also accepted.
  - `set_runtime_timezone` detects the local timezone from `TZ`,
    `/etc/localtime` or `/etc/timezone` and makes it the process timezone.
- `trportfolio.database`:
  - `new_sqlite_on_fs` opens `traderepublic.db` in the working directory.
  - `new_sqlite_in_memory` opens a private in-memory database with foreign
    keys enforced.
  - `Repository` creates the table of a SQLAlchemy-mapped model and saves
    instances, inserting a new row or updating an existing one.
- `trportfolio.counter`: `OperationCounter` is a thread-safe count of
  processed and skipped operations.

## Replaying stored responses

```python
from trportfolio.jsonreader import JSONReader
from trportfolio.transactions import TransactionsClient, EventTypeResolver, UnsupportedEventTypeError
from trportfolio.details import DetailsClient
from trportfolio.normalizer import TransactionResponseNormalizer
from trportfolio.typeresolver import TypeResolver, UnsupportedTypeError

reader = JSONReader("responses")
transactions = TransactionsClient(reader)
details = DetailsClient(reader)
normalizer = TransactionResponseNormalizer()
event_types = EventTypeResolver()
types = TypeResolver()

for item in transactions.items():
    try:
        event_type = event_types.resolve(item)
    except UnsupportedEventTypeError:
        continue
    if not item.action.has_details():
        continue
    normalized = normalizer.normalize(details.fetch(item.action.payload))
    try:
        print(item.id, types.resolve(event_type, normalized))
    except UnsupportedTypeError:
        print(item.id, "unsupported")
```

`JSONReader` expects files laid out as follows, which is the layout
`JSONWriter` produces:

- `responses/timelineTransactions/page-1.json`
- `responses/timelineDetailV2/<id>.json`

## Fetching live data

```python
from trportfolio.apiclient import Client
from trportfolio.authclient import AuthClient
from trportfolio.console import AuthService
from trportfolio.jsonwriter import JSONWriter
from trportfolio.transactions import TransactionsClient
from trportfolio.wsreader import WebsocketReader

with AuthClient(Client()) as auth_client:
    reader = WebsocketReader(AuthService(auth_client), writer=JSONWriter())
    try:
        items = TransactionsClient(reader).items()
    finally:
        reader.close()
```

`WebsocketReader` connects as soon as it is created. The console login is
only started when the server rejects the current session.

## Writing a CSV ledger

```python
from trportfolio.csvfile import CSVEntry, CSVReader, CSVWriter

CSVWriter().write("transactions.csv", CSVEntry(id="example-id", type="Deposit", credit=100.0))
rows = CSVReader().read("transactions.csv")
```

## What it does not do

There is no command-line program. The package is a library, and you write
the loop that ties the pieces together yourself, as in the examples above.

It does not build `CSVEntry` rows from normalized transactions; you fill
them in yourself. It does not download the documents listed in detail
responses. It also does not define any database models; `Repository`
works with models you map yourself.

## Tests

The test suite uses pytest and responses. Both are listed in the `test`
extra.