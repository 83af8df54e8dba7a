import json
import os
import tempfile
from pathlib import Path

import dacite

from general.exceptions import RuleError, TokenError, TweetParseError
from general.project_dataclasses import BearerToken, RuleList, Tweet, TweetEnvelope

TWEET_FILE_MODE = 0o644


def load_json(payload: bytes):
    return json.loads(payload)


def parse_token(payload: bytes) -> BearerToken:
    try:
        creds = load_json(payload)
    except ValueError as e:
        raise TokenError(f"Error parsing this JSON:\n{payload!r}\n{e}") from e

    if not isinstance(creds, dict) or not creds.get("access_token"):
        raise TokenError(f"No access_token in token response: {payload!r}")

    return BearerToken(creds.get("token_type", "bearer"), creds["access_token"])


def parse_rules(payload: bytes) -> RuleList:
    try:
        rule_dict = load_json(payload)
    except ValueError as e:
        raise RuleError(f"Error parsing this JSON:\n{payload.decode('utf-8', 'replace')}\n{e}") from e

    if not isinstance(rule_dict, dict):
        raise RuleError(f"Unexpected rules payload:\n{payload.decode('utf-8', 'replace')}")

    # the API leaves out "data" entirely when no rules are set
    try:
        return dacite.from_dict(RuleList, {"data": rule_dict.get("data") or [], "meta": rule_dict.get("meta")})
    except dacite.DaciteError as e:
        raise RuleError(f"Error parsing this JSON:\n{payload.decode('utf-8', 'replace')}\n{e}") from e


def parse_tweet(payload: bytes) -> Tweet:
    try:
        tweet_dict = load_json(payload)
    except ValueError as e:
        raise TweetParseError(payload, str(e)) from e

    if not isinstance(tweet_dict, dict):
        raise TweetParseError(payload, "not an object")

    try:
        envelope = dacite.from_dict(TweetEnvelope, tweet_dict)
    except dacite.DaciteError as e:
        raise TweetParseError(payload, str(e)) from e

    tweet_id = envelope.data.id
    separators = {"/", "\x00", os.sep, os.altsep} - {None}
    if not tweet_id or tweet_id in (".", "..") or any(sep in tweet_id for sep in separators):
        raise TweetParseError(payload, f"unusable id {tweet_id!r}")

    return envelope.data


def delete_rules_payload(ids: list[str]) -> dict:
    return {"delete": {"ids": ids}}


def add_rule_payload(query: str, tag: str = None) -> dict:
    rule = {"value": query}
    if tag is not None:
        rule["tag"] = tag
    return {"add": [rule]}


def dump_payload(payload: dict) -> bytes:
    return json.dumps(payload).encode("utf-8")


def tweet_file_path(output_dir, tweet: Tweet) -> Path:
    return Path(output_dir) / f"{tweet.id}.json"


def write_atomic(target: Path, data: bytes) -> None:
    with tempfile.NamedTemporaryFile("wb", dir=target.parent, prefix=f".{target.name}.", suffix=".tmp",
                                     delete=False) as tmp:
        temp_path = Path(tmp.name)
        try:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        except OSError:
            tmp.close()
            temp_path.unlink(missing_ok=True)
            raise

    try:
        os.chmod(temp_path, TWEET_FILE_MODE)
        os.replace(temp_path, target)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
