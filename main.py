import argparse
import logging
import sys

import env_vars
from Producer.TweetFileProducer import TweetFileProducer
from general.TwitterAuth import get_token
from general.TwitterStreamer import TwitterStreamer
from general.exceptions import TwitterApiError
from general.project_dataclasses import StreamSettings

logger = logging.getLogger("twitter_stream")


def print_body(body: bytes) -> None:
    print(body.decode("utf-8", "replace"))


def list_rules(args) -> int:
    print_body(TwitterStreamer(get_token()).get_rules())
    return 0


def remove_rules(args) -> int:
    print_body(TwitterStreamer(get_token()).delete_all_rules())
    return 0


def new_rule(args) -> int:
    print_body(TwitterStreamer(get_token()).create_rule(args.query, args.tag))
    return 0


def stream(args) -> int:
    settings = StreamSettings(env_vars.OUTPUT_DIR, env_vars.max_workers(), env_vars.max_pending())
    producer = TweetFileProducer(get_token(), settings)
    logger.info("Listening to the stream…")
    producer.start_stream()
    return 0


def show_token(args) -> int:
    print(get_token().access_token)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twitter-stream", description="Twitter Filtered Stream API client")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    commands = parser.add_subparsers(dest="command", metavar="command", required=True)

    rule = commands.add_parser("rule", help="Tools to manage the filter rules")
    rule_commands = rule.add_subparsers(dest="rule_command", metavar="subcommand", required=True)
    rule_commands.add_parser("ls", help="List the existing rules").set_defaults(func=list_rules)
    rule_commands.add_parser("rm", help="Remove existing rules").set_defaults(func=remove_rules)
    new = rule_commands.add_parser("new", help="Create a rule")
    new.add_argument("--query", required=True, help="Text for the rule")
    new.add_argument("--tag", default=None, help="Tag attached to matching tweets")
    new.set_defaults(func=new_rule)

    commands.add_parser("stream", help="Start streaming with current rules").set_defaults(func=stream)
    commands.add_parser("token", help="Show API bearer token").set_defaults(func=show_token)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S",
    )

    try:
        return args.func(args)
    except TwitterApiError as e:
        logger.error(e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
