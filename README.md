# apclient

Building blocks for a client of a music streaming access point: identifiers,
credentials, key agreement, session state and the routing of incoming packets
to channels and audio-key requests.

## Modules

- `apclient.spotify_id` — `SpotifyId` (a 128-bit id with `from_base16`,
  `from_base62`, `from_raw`, `to_base16`, `to_raw`) and `FileId` (20 bytes,
  `to_base16`).
- `apclient.diffie_hellman` — `DHLocalKeys.random()` with `public_key()` and
  `shared_secret(remote_key)` over a 768-bit MODP group.
- `apclient.keys` — `compute_keys(shared_secret, packets)` returns
  `(challenge, send_key, recv_key)` derived with HMAC-SHA1 from the handshake
  transcript.
- `apclient.authentication` — `Credentials` built from a password
  (`with_password`), from a base64 encrypted blob (`with_blob`), or loaded from
  and saved to JSON (`from_reader`, `from_file`, `save_to_writer`,
  `save_to_file`). `get_credentials(username, password, cached_credentials)`
  picks credentials and prompts on standard error for a missing password.
- `apclient.cache` — `Cache(location, use_audio_cache)` keeps
  `credentials.json` and a `files/` tree; `file()` opens a cached file and
  `save_file()` stores one when the audio cache is enabled.
- `apclient.apresolve` — `apresolve()` asks the resolver service over HTTP for
  an access point; `apresolve_or_fallback()` returns a fixed address
  (`AP_FALLBACK`) on failure; `parse_apresolve_response(body)` parses a
  response body and raises `APResolveError` on bad input.
- `apclient.session` — `Session(config, username, cache=None)` holds the
  country and username, queues outgoing `(cmd, data)` packets on
  `session.outgoing`, and `dispatch(cmd, data)` answers pings, records the
  country code and routes channel and audio-key packets. `device_id(name)` is
  the hex SHA-1 of a name.
- `apclient.channel` — `ChannelManager.allocate()` returns a channel id and a
  `Channel`; `Channel.poll()` yields `HeaderEvent`, `DataEvent` and finally
  `None`; `headers()` and `data()` iterate over them. Server errors raise
  `ChannelError`.
- `apclient.audio_key` — `AudioKeyManager.request(track, file)` sends a key
  request and returns a `concurrent.futures.Future` that yields 16 bytes or
  fails with `AudioKeyError`.
- `apclient.metadata` — `countrylist_contains`, `parse_restrictions` (with
  `Restriction`) and `select_top_tracks` (with `TopTracks`).
- `apclient.cover` — `request_cover(session, file)` sends an image request and
  returns an iterator over the image's data chunks.
- `apclient.config` — `SessionConfig`, `ConnectConfig`, `DeviceType` (parsed
  case-insensitively with `DeviceType.from_str`) and `version_string()`.
- `apclient.util` — `powm`, `rand_vec`, `now_ms`, `mkdir_existing`,
  `run_program`, `str_chunks` and `SeqGenerator`.

## Installation

```
pip install .
```

## Examples

Identifiers:

```python
from apclient.spotify_id import SpotifyId

track = SpotifyId.from_base16("0123456789abcdef0123456789abcdef")
assert SpotifyId.from_raw(track.to_raw()) == track
```

Credentials stored as JSON:

```python
from apclient.authentication import Credentials

password = "password"
creds = Credentials.with_password("someone", password)
creds.save_to_file("credentials.json")
same = Credentials.from_file("credentials.json")
```

Key agreement:

```python
from apclient.diffie_hellman import DHLocalKeys

alice = DHLocalKeys.random()
bob = DHLocalKeys.random()
assert alice.shared_secret(bob.public_key()) == bob.shared_secret(alice.public_key())
```

Routing packets through a session:

```python
from apclient.config import SessionConfig
from apclient.session import Session

session = Session(SessionConfig(), "someone")
session.dispatch(0x1B, b"SE")
assert session.country == "SE"

channel_id, channel = session.channel.allocate()
session.dispatch(0x9, channel_id.to_bytes(2, "big") + b"\x00\x00")
session.dispatch(0x9, channel_id.to_bytes(2, "big") + b"chunk")
session.dispatch(0x9, channel_id.to_bytes(2, "big"))
assert list(channel.data()) == [b"chunk"]
```

Device types:

```python
from apclient.config import DeviceType

assert DeviceType.from_str("speaker") is DeviceType.SPEAKER
```

## What it does not do

- It opens no connection to an access point. There is no TCP transport, no
  handshake exchange and no packet encryption; `compute_keys` only derives the
  keys. Packets must be fed to `Session.dispatch` and taken from
  `Session.outgoing` by the caller.
- Request/response messages (commands `0xb2`–`0xb6`) are received but ignored,
  so track, album and artist metadata cannot be fetched; `apclient.metadata`
  only evaluates restrictions and top-track lists given to it.
- It plays no audio and has no command-line program.

## Running the tests

```
pip install .[test]
pytest
```