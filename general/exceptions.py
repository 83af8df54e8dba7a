"""
Errors raised while talking to the Twitter API.

Everything except TweetParseError is fatal for the running command and is
turned into an exit status by main.py.
"""


class TwitterApiError(Exception):
    """Base class for failures of a Twitter API call."""


class ConfigError(TwitterApiError):
    """A TWITTER_* setting has an unusable value."""


class TokenError(TwitterApiError):
    pass


class RuleError(TwitterApiError):
    pass


class StreamError(TwitterApiError):
    pass


class TweetParseError(Exception):
    """A single stream record could not be decoded."""

    def __init__(self, payload: bytes, reason: str):
        self.payload = payload
        super().__init__(f"Cannot parse tweet ({reason}): {payload!r}")
