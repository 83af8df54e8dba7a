import logging

import requests
from requests.auth import HTTPBasicAuth

import env_vars
from general import utils
from general.exceptions import TokenError
from general.project_dataclasses import BearerToken

logger = logging.getLogger(__name__)


def get_token() -> BearerToken:
    """
    Returns the bearer token for API calls.

    TWITTER_ACCESS_TOKEN is used as is when it is set. Otherwise the API key and
    secret are exchanged for an app-only token with the client credentials grant.
    """
    access_token = env_vars.access_token()
    if access_token:
        return BearerToken("bearer", access_token)

    key, secret = env_vars.api_key(), env_vars.api_secret()
    if not key or not secret:
        raise TokenError("TWITTER_API_KEY and TWITTER_API_SECRET must be set to request a token")

    headers = {"Content-type": "application/x-www-form-urlencoded;charset=UTF-8"}
    if env_vars.app_name():
        headers["User-Agent"] = env_vars.app_name()

    logger.debug("Requesting bearer token from %s", env_vars.TOKEN_URL)
    try:
        response = requests.post(
            env_vars.TOKEN_URL,
            auth=HTTPBasicAuth(key, secret),
            headers=headers,
            data="grant_type=client_credentials",
        )
    except requests.RequestException as e:
        raise TokenError(f"Cannot get token: {e}") from e

    return utils.parse_token(response.content)
