"""
Configuration: runtime defaults read from the environment, .env loading and
discovery of the configured Atlassian (Jira) instances.
"""

import os
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from log import get_logger
from models import AtlassianInstance

logger = get_logger(__name__)

DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_GH_TIMEOUT = 60.0
DEFAULT_GH_BIN = "gh"

ATLASSIAN_PREFIX = "ATLASSIAN"


def _seconds_from_env(name: str, default: float) -> float:
    """Positive number of seconds from the environment, or default when unset or invalid."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if not value > 0:
        logger.warning(f"Invalid {name}={raw!r}, using {default}s")
        return default
    return value


# read at call time, a .env file may be loaded after import
def http_timeout() -> float:
    return _seconds_from_env("DAILY_ACTIVITY_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)


def gh_timeout() -> float:
    return _seconds_from_env("DAILY_ACTIVITY_GH_TIMEOUT", DEFAULT_GH_TIMEOUT)


def gh_bin() -> str:
    return os.getenv("DAILY_ACTIVITY_GH_BIN", DEFAULT_GH_BIN)


def load_env_file(path: Optional[str] = None) -> bool:
    """Load variables from a .env file into os.environ.

    Variables already present in the process environment are left untouched.
    Returns True if a file was found and read.
    """
    loaded = load_dotenv(dotenv_path=path, override=False)
    if path and not loaded:
        logger.warning(f"Environment file {path} not found or empty")
    return loaded


def _instance_vars(prefix: str, index: int):
    return (
        f"{prefix}_{index}_DOMAIN",
        f"{prefix}_{index}_ACCOUNT_EMAIL",
        f"{prefix}_{index}_API_TOKEN",
    )


def discover_atlassian_instances(env: Mapping[str, str], prefix: str = ATLASSIAN_PREFIX) -> List[AtlassianInstance]:
    """Scan PREFIX_1_*, PREFIX_2_*, ... in env and return the complete instances in index order.

    Scanning stops at the first index where none of DOMAIN, ACCOUNT_EMAIL and
    API_TOKEN is set. An index with only some of them set is skipped with a
    warning and scanning moves on to the next index.
    """
    instances: List[AtlassianInstance] = []
    index = 1
    while True:
        names = _instance_vars(prefix, index)
        domain, email, api_token = (env.get(n) for n in names)
        if domain and email and api_token:
            instances.append(AtlassianInstance(domain=domain, email=email, api_token=api_token))
        elif domain or email or api_token:
            missing = [n for n, v in zip(names, (domain, email, api_token)) if not v]
            logger.warning(f"Incomplete configuration for {prefix}_{index}_* (missing {', '.join(missing)}). Skipping.")
        else:
            break
        index += 1
    return instances


def required_instance_vars(prefix: str = ATLASSIAN_PREFIX) -> str:
    """Human readable list of the variables an instance needs, for error messages."""
    return ", ".join(n.replace("_1_", "_N_") for n in _instance_vars(prefix, 1))
