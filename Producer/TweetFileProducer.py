import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from Consumer.TweetFileConsumer import TweetFileConsumer
from general.TwitterStreamer import TwitterStreamer
from general.project_dataclasses import BearerToken, StreamSettings

logger = logging.getLogger(__name__)


class TweetFileProducer(TwitterStreamer):
    """
    Reads the filtered stream and hands every record to a pool of writers.

    At most max_workers records are written at the same time and at most
    max_pending more wait in the pool. When both are used up, the read loop
    blocks until a writer finishes.
    """

    def __init__(self, bearer_token: BearerToken, settings: StreamSettings, consumer: TweetFileConsumer = None):
        super().__init__(bearer_token)
        self.settings: StreamSettings = settings
        self.consumer: TweetFileConsumer = consumer or TweetFileConsumer(settings.output_dir)
        self.count: int = 0
        self.executor: ThreadPoolExecutor = None
        self.slots = threading.BoundedSemaphore(settings.max_workers + settings.max_pending)

    def start_stream(self) -> int:
        self.count = 0
        self.executor = ThreadPoolExecutor(max_workers=self.settings.max_workers,
                                           thread_name_prefix="tweet-writer")
        try:
            super().start_stream()
        finally:
            # pending writes still land on disk when the stream ends or fails
            self.executor.shutdown(wait=True)
            self.executor = None
            logger.info("%d tweet(s) received", self.count)
        return self.count

    # overwriting
    def on_data(self, response_data: bytes) -> None:
        self.count += 1
        self.dispatch(self.count, response_data)

    def dispatch(self, count: int, raw_tweet: bytes) -> Future:
        self.slots.acquire()
        try:
            future = self.executor.submit(self.consumer.process, count, raw_tweet)
        except RuntimeError:
            self.slots.release()
            raise
        future.add_done_callback(self.on_done)
        return future

    def on_done(self, future: Future) -> None:
        self.slots.release()
        error = future.exception()
        if error is not None:
            logger.error("Cannot save tweet: %s", error)
