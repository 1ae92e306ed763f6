# hanabot

Building blocks for a group chat bot: small games and utilities, a
system status report, banned-word tracking, drift bottles, and helpers
for recognising bilibili links and storing push subscriptions. Storage
is plain SQLite or JSON files.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Command line

The `hanabot` command prints the start-up banner and builds the bot
configuration from its options, or reads it from a JSON file.

```
hanabot -h
```

Options:

- `-d` / `-w` – debug or warning log level (`-w` wins when both are given)
- `-t TOKEN` – access token of the websocket client
- `-u ADDRESS` – websocket server address (default `127.0.0.1:6700`)
- `-n NAME` – default nickname (default `花酱`)
- `-p PREFIX` – command prefix (default `/`)
- `-c FILE` – read the configuration from a JSON file
- `-s FILE` – save the configuration built from the options and exit
- `-l MS`, `-r SIZE`, `-x MIN` – response latency, receive ring size and
  maximum processing time

Remaining arguments that are integers are taken as super user ids; others
are ignored. On Windows the log lines are coloured by level.

Example: save a configuration, then start from it.

```
hanabot -n Hana -t token -s bot.json
hanabot -c bot.json
```

## Library

- `hanabot.banner` – `render_banner(kanban)` gives the start-up banner text.
- `hanabot.cli` – `BotConfig` (with `to_dict()`), `config_from_dict`,
  `parse_args`, `build_config`, `load_config`, `save_config`,
  `ColorFormatter` and `main`.
- `hanabot.chrev` – `flip("I love you")` reverses English text and turns
  each letter upside down; other characters raise `ValueError`.
- `hanabot.choose` – `choose(args, nickname, rng)` lists the options
  separated by "还是" and announces one picked at random.
- `hanabot.breakrepeat` – `RepeatBreaker.feed(group_id, raw)` counts
  identical consecutive messages per group and, once the chain runs past
  the throttle, returns the message with its characters shuffled.
- `hanabot.chat` – `greeting(nickname, rng)`, `AirConditioner` (a pretend
  per-group air conditioner) and `PokeLimiter`, which answers pokes under
  a per-group token bucket.
- `hanabot.aifalse` – `status_report()` with CPU, memory and disk usage
  (via psutil); `pack_limit`, `unpack_limit` and `parse_limit_command` for
  the stored default rate limit.
- `hanabot.aipaint` – `ServerConfig`, painting server settings kept in a
  JSON file (`update` saves, `load` reads and raises `FileNotFoundError`
  when there is no file).
- `hanabot.cpstory` – `StoryDB` (SQLite), `CpStory`, `fill_story` and
  `split_names`.
- `hanabot.chouxianghua` – `AbstractDictionary` and `translate`, which
  replaces character pairs, then single characters, with emoji.
- `hanabot.antiabuse` – `AntiAbuseDB`: banned words per group, ban times
  and `pending_bans`; `normalize_message` strips line breaks, tabs and
  semicolons.
- `hanabot.bilibili_parse` – `find_short_link` and `match_link`, which
  reports a `LinkMatch` of kind video, dynamic, article or live.
- `hanabot.bilibili_store` – `PushStore` for dynamic and live
  subscriptions and uploader names, `VupStore` for virtual uploaders.
- `hanabot.drift_bottle` – `make_bottle` (id is a CRC-64 of the contents;
  at least 10 characters), `Bottle.describe` and `Sea` with `throw` and
  `pick`.

```python
from hanabot.chrev import flip
from hanabot.breakrepeat import RepeatBreaker
from hanabot.drift_bottle import Sea, make_bottle

print(flip("hello"))

breaker = RepeatBreaker()
for _ in range(5):
    reply = breaker.feed(1, "same message")
print(reply)

with Sea() as sea:
    sea.throw(make_bottle(10001, 20002, "2022-11-15 11:13:42", "Hana", "a message in a bottle"))
    print(sea.pick().describe("Hana"))
```

## What it does not do

`hanabot` does not connect to a chat server. The command line builds,
loads and saves the configuration and then exits; there is no websocket
client, no event loop and no dispatch of incoming messages to the modules
above. Nothing here calls remote services: it does not fetch bilibili
cards, send pushes, generate AI replies or speech, or run content audits.