from unittest.mock import patch

import pytest

import env_vars
import main
from general.exceptions import ConfigError, RuleError, TokenError


@pytest.fixture
def streamer():
    with patch("main.get_token"), patch("main.TwitterStreamer") as streamer_class:
        yield streamer_class.return_value


class TestCommands:

    def test_rule_ls_prints_raw_body(self, streamer, capsys):
        streamer.get_rules.return_value = b'{"data": [{"id": "1", "value": "cat"}]}'

        assert main.main(["rule", "ls"]) == 0
        assert capsys.readouterr().out == '{"data": [{"id": "1", "value": "cat"}]}\n'

    def test_rule_rm(self, streamer, capsys):
        streamer.delete_all_rules.return_value = b'{"meta": {"summary": {"deleted": 1}}}'

        assert main.main(["rule", "rm"]) == 0
        assert "deleted" in capsys.readouterr().out

    def test_rule_new(self, streamer, capsys):
        streamer.create_rule.return_value = b"{}"

        assert main.main(["rule", "new", "--query", "cat has:images"]) == 0
        streamer.create_rule.assert_called_once_with("cat has:images", None)

    def test_rule_new_requires_query(self, streamer):
        with pytest.raises(SystemExit):
            main.main(["rule", "new"])

    def test_token(self, monkeypatch, capsys):
        monkeypatch.setenv("TWITTER_ACCESS_TOKEN", "abc")

        assert main.main(["token"]) == 0
        assert capsys.readouterr().out == "abc\n"

    def test_stream(self):
        with patch("main.get_token"), patch("main.TweetFileProducer") as producer_class:
            assert main.main(["stream"]) == 0

        settings = producer_class.call_args.args[1]
        assert settings.output_dir == main.env_vars.OUTPUT_DIR
        producer_class.return_value.start_stream.assert_called_once_with()

    def test_unknown_command(self):
        with pytest.raises(SystemExit):
            main.main(["follow"])


class TestErrors:

    def test_token_error_exits_1(self):
        with patch("main.get_token", side_effect=TokenError("no credentials")):
            assert main.main(["token"]) == 1

    def test_rule_error_exits_1(self, streamer):
        streamer.get_rules.side_effect = RuleError("Cannot get rules: refused")
        assert main.main(["rule", "ls"]) == 1

    def test_interrupted_stream(self):
        with patch("main.get_token"), patch("main.TweetFileProducer") as producer_class:
            producer_class.return_value.start_stream.side_effect = KeyboardInterrupt
            assert main.main(["stream"]) == 130

    @pytest.mark.parametrize("name, value", [
        ("TWITTER_MAX_WORKERS", "many"),
        ("TWITTER_MAX_WORKERS", "0"),
        ("TWITTER_MAX_PENDING", "-1"),
    ])
    def test_bad_pool_setting_exits_1(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with patch("main.get_token"), patch("main.TweetFileProducer") as producer_class:
            assert main.main(["stream"]) == 1
        producer_class.assert_not_called()

    def test_bad_pool_setting_does_not_affect_token(self, monkeypatch, capsys):
        monkeypatch.setenv("TWITTER_MAX_WORKERS", "many")
        monkeypatch.setenv("TWITTER_ACCESS_TOKEN", "abc")

        assert main.main(["token"]) == 0
        assert capsys.readouterr().out == "abc\n"


class TestPoolSettings:

    def test_defaults(self):
        assert env_vars.max_workers() == 8
        assert env_vars.max_pending() == 64

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("TWITTER_MAX_WORKERS", " 3 ")
        monkeypatch.setenv("TWITTER_MAX_PENDING", "0")
        assert env_vars.max_workers() == 3
        assert env_vars.max_pending() == 0

    def test_not_a_number(self, monkeypatch):
        monkeypatch.setenv("TWITTER_MAX_PENDING", "lots")
        with pytest.raises(ConfigError) as exc_info:
            env_vars.max_pending()
        assert "TWITTER_MAX_PENDING" in str(exc_info.value)
