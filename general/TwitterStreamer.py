import logging

import requests

import env_vars
from general import utils
from general.exceptions import RuleError, StreamError
from general.project_dataclasses import BearerToken

logger = logging.getLogger(__name__)


class TwitterStreamer:
    def __init__(self, bearer_token: BearerToken):
        self.bearer_token: BearerToken = bearer_token

    def bearer_oauth(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        r.headers["Authorization"] = f"Bearer {self.bearer_token.access_token}"
        r.headers["Content-type"] = "application/json"
        if env_vars.app_name():
            r.headers["User-Agent"] = env_vars.app_name()
        return r

    def get_rules(self) -> bytes:
        try:
            response = requests.get(env_vars.RULES_URL, auth=self.bearer_oauth)
        except requests.RequestException as e:
            raise RuleError(f"Cannot get rules: {e}") from e
        logger.debug("Rules listed (HTTP %s)", response.status_code)
        return response.content

    def delete_rules(self, ids: list[str]) -> bytes:
        return self.post_rules(utils.dump_payload(utils.delete_rules_payload(ids)), "delete")

    def delete_all_rules(self) -> bytes:
        rules = utils.parse_rules(self.get_rules())
        ids = rules.ids()
        logger.info("Deleting %d rule(s)", len(ids))
        return self.delete_rules(ids)

    def create_rule(self, query: str, tag: str = None) -> bytes:
        body = utils.dump_payload(utils.add_rule_payload(query, tag))
        logger.info(body.decode("utf-8"))
        return self.post_rules(body, "add")

    def post_rules(self, body: bytes, action: str) -> bytes:
        try:
            response = requests.post(
                env_vars.RULES_URL,
                auth=self.bearer_oauth,
                data=body,
            )
        except requests.RequestException as e:
            raise RuleError(f"Cannot {action} rules: {e}") from e
        logger.debug("Rules %s sent (HTTP %s)", action, response.status_code)
        return response.content

    def start_stream(self) -> None:
        try:
            response = requests.get(env_vars.STREAM_URL, auth=self.bearer_oauth, stream=True)
        except requests.RequestException as e:
            raise StreamError(f"Cannot get stream: {e}") from e

        with response:
            if response.status_code != 200:
                raise StreamError(
                    "Cannot get stream (HTTP {}): {}".format(response.status_code, response.text)
                )
            try:
                for response_line in response.iter_lines():
                    if response_line:
                        self.on_data(response_line)
            except requests.RequestException as e:
                raise StreamError(f"Stream interrupted: {e}") from e

        logger.info("Stream closed by the server")

    def on_data(self, response_data: bytes) -> None:
        print(response_data.decode("utf-8", "replace"))
