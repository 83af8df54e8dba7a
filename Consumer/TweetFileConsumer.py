import logging
from pathlib import Path
from typing import Optional

from general import utils
from general.exceptions import TweetParseError

logger = logging.getLogger(__name__)


class TweetFileConsumer:
    """Stores each streamed tweet as <output_dir>/<tweet id>.json, byte for byte."""

    def __init__(self, output_dir: str):
        self.output_dir = Path(output_dir)

    def process(self, count: int, raw_tweet: bytes) -> Optional[Path]:
        try:
            tweet = utils.parse_tweet(raw_tweet)
        except TweetParseError as e:
            logger.debug("[%d] dropped: %s", count, e)
            return None

        path = utils.tweet_file_path(self.output_dir, tweet)
        utils.write_atomic(path, raw_tweet)
        logger.info("[%d] %s saved", count, path)
        return path
