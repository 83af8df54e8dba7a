import os

from dotenv import load_dotenv

from general.exceptions import ConfigError

load_dotenv()

TOKEN_URL = os.getenv("TWITTER_TOKEN_URL", "https://api.twitter.com/oauth2/token")
RULES_URL = os.getenv("TWITTER_RULES_URL", "https://api.twitter.com/2/tweets/search/stream/rules")
STREAM_URL = os.getenv("TWITTER_STREAM_URL", "https://api.twitter.com/2/tweets/search/stream")

OUTPUT_DIR = os.getenv("TWITTER_OUTPUT_DIR", "data")


# everything below is read on every call so a changed environment is picked up
def int_setting(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {value}")
    return value


def max_workers() -> int:
    return int_setting("TWITTER_MAX_WORKERS", 8, minimum=1)


def max_pending() -> int:
    return int_setting("TWITTER_MAX_PENDING", 64, minimum=0)


def app_name() -> str:
    return os.getenv("TWITTER_APP_NAME", "")


def api_key() -> str:
    return os.getenv("TWITTER_API_KEY", "")


def api_secret() -> str:
    return os.getenv("TWITTER_API_SECRET", "")


def access_token() -> str:
    return os.getenv("TWITTER_ACCESS_TOKEN", "")
