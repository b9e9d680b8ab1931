"""Invocation inputs for a hotfix run.

Inputs are named strings (``github-token``, ``tag``, ``slack-webhook-url``...)
looked up, in priority order, from:

1. explicit overrides (CLI options)
2. GitHub Actions style environment variables (``INPUT_GITHUB-TOKEN``, also
   accepted with underscores: ``INPUT_GITHUB_TOKEN``)
3. the ``[hotfix]`` table of an optional TOML file
4. conventional environment fallbacks (``GITHUB_TOKEN``, ``GITHUB_REPOSITORY``,
   ``GITHUB_API_URL``)
5. built-in defaults

Everything is validated here, before any client is built, so that a missing
or malformed input never reaches the network.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast, get_args
from urllib.parse import urlsplit

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_table

__all__ = [
    "ConfigurationError",
    "HotfixInputs",
    "TagStrategy",
    "WebhookSource",
    "load_inputs",
    "read_config_file",
    "DEFAULT_CONFIG_FILE",
]

TagStrategy = Literal["ref", "list"]
WebhookSource = Literal["input", "env", "repo-secret"]

DEFAULT_CONFIG_FILE = "hotfix.toml"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_WEBHOOK_ENV = "SLACK_WEBHOOK_URL"
DEFAULT_TIMEOUT_SECONDS = 10.0

# Input names
GITHUB_TOKEN = "github-token"
TAG = "tag"
SLACK_WEBHOOK_URL = "slack-webhook-url"
REPOSITORY = "repository"
API_URL = "api-url"
TAG_STRATEGY = "tag-strategy"
WEBHOOK_SOURCE = "webhook-source"
SLACK_WEBHOOK_ENV = "slack-webhook-env"
TIMEOUT = "timeout"

_ENV_FALLBACKS: dict[str, str] = {
    GITHUB_TOKEN: "GITHUB_TOKEN",
    REPOSITORY: "GITHUB_REPOSITORY",
    API_URL: "GITHUB_API_URL",
}

_DEFAULTS: dict[str, str] = {
    API_URL: DEFAULT_API_URL,
    TAG_STRATEGY: "ref",
    WEBHOOK_SOURCE: "input",
    SLACK_WEBHOOK_ENV: DEFAULT_WEBHOOK_ENV,
    TIMEOUT: str(DEFAULT_TIMEOUT_SECONDS),
}

_REPO_RE = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


@dataclass(frozen=True, slots=True)
class ConfigurationError:
    """A required input is missing, or an input value is invalid."""

    input_name: str
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class HotfixInputs:
    """Validated inputs of one hotfix run."""

    github_token: str
    tag: str
    repository: str  # owner/name
    webhook_url: str
    api_url: str = DEFAULT_API_URL
    tag_strategy: TagStrategy = "ref"
    webhook_source: WebhookSource = "input"
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __repr__(self) -> str:
        # Never leak credentials into tracebacks or logs.
        return (
            f"HotfixInputs(tag={self.tag!r}, repository={self.repository!r}, "
            f"api_url={self.api_url!r}, tag_strategy={self.tag_strategy!r}, "
            f"webhook_source={self.webhook_source!r}, timeout={self.timeout!r})"
        )


def _missing(name: str) -> ConfigurationError:
    return ConfigurationError(
        input_name=name,
        message=f'Input "{name}" was not defined',
        hint=f"pass --{name} or set INPUT_{name.upper()}",
    )


def _clean(value: object) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None


class _InputSource:
    def __init__(
        self,
        *,
        overrides: Mapping[str, str | None],
        environ: Mapping[str, str],
        file_table: StrDict,
    ) -> None:
        self._overrides = overrides
        self._environ = environ
        self._file = file_table

    def get(self, name: str) -> str | None:
        candidates: list[object] = [
            self._overrides.get(name),
            self._environ.get(f"INPUT_{name.upper()}"),
            self._environ.get(f"INPUT_{name.upper().replace('-', '_')}"),
            self._file.get(name),
        ]
        fallback_env = _ENV_FALLBACKS.get(name)
        if fallback_env is not None:
            candidates.append(self._environ.get(fallback_env))
        candidates.append(_DEFAULTS.get(name))

        for candidate in candidates:
            value = _clean(candidate)
            if value is not None:
                return value
        return None

    def require(self, name: str) -> Result[str, ConfigurationError]:
        value = self.get(name)
        if value is None:
            return Err(_missing(name))
        return Ok(value)


def read_config_file(path: Path) -> Result[StrDict, ConfigurationError]:
    """Read the ``[hotfix]`` table of a TOML config file."""
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigurationError("config", f"Config file not found: {path}"))
    except PermissionError:
        return Err(ConfigurationError("config", f"Permission denied reading: {path}"))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigurationError("config", f"Invalid TOML syntax in {path}: {e}"))
    except UnicodeDecodeError as e:
        return Err(ConfigurationError("config", f"Error reading {path}: {e}"))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigurationError("config", f"Config root must be a TOML table: {path}"))
    if "hotfix" in data and get_table(data, "hotfix") is None:
        return Err(ConfigurationError("config", f"[hotfix] must be a table: {path}"))
    return Ok(get_table(data, "hotfix") or {})


def _check_webhook_url(url: str) -> Result[str, ConfigurationError]:
    # The URL is a secret: never echo it back.
    try:
        parts = urlsplit(url)
        valid = parts.scheme in ("http", "https") and bool(parts.hostname) and parts.port != 0
    except ValueError:
        # Bad or out-of-range port.
        valid = False
    if not valid:
        return Err(
            ConfigurationError(
                input_name=SLACK_WEBHOOK_URL,
                message="slack webhook URL is not a valid http(s) URL",
                hint="expected https://hooks.slack.com/services/...",
            )
        )
    return Ok(url)


def _resolve_webhook_url(
    source: _InputSource,
    *,
    webhook_source: str,
    environ: Mapping[str, str],
) -> Result[str, ConfigurationError]:
    match webhook_source:
        case "input":
            return source.require(SLACK_WEBHOOK_URL)
        case "env":
            env_name = source.get(SLACK_WEBHOOK_ENV) or DEFAULT_WEBHOOK_ENV
            value = _clean(environ.get(env_name))
            if value is None:
                return Err(
                    ConfigurationError(
                        input_name=SLACK_WEBHOOK_ENV,
                        message=f"Environment variable {env_name} was not defined",
                        hint="set it or use --webhook-source input",
                    )
                )
            return Ok(value)
        case "repo-secret":
            return Err(
                ConfigurationError(
                    input_name=WEBHOOK_SOURCE,
                    message="repository secrets cannot be read back through the API",
                    hint="expose the secret to the job and pass it as slack-webhook-url",
                )
            )
        case _:
            return Err(
                ConfigurationError(
                    input_name=WEBHOOK_SOURCE,
                    message=f"unknown webhook source: {webhook_source}",
                    hint="expected one of: input, env",
                )
            )


def load_inputs(
    *,
    environ: Mapping[str, str],
    overrides: Mapping[str, str | None] | None = None,
    config_path: Path | None = None,
) -> Result[HotfixInputs, ConfigurationError]:
    """Collect and validate every input of a hotfix run.

    Args:
        environ: Process environment (passed explicitly so tests control it).
        overrides: Values given on the command line, keyed by input name.
        config_path: Optional TOML file holding a ``[hotfix]`` table.

    Returns:
        Ok(HotfixInputs), or Err(ConfigurationError) naming the first bad input.
    """
    file_table: StrDict = {}
    if config_path is not None:
        file_r = read_config_file(config_path)
        if isinstance(file_r, Err):
            return file_r
        file_table = file_r.value

    source = _InputSource(overrides=overrides or {}, environ=environ, file_table=file_table)

    token = source.require(GITHUB_TOKEN)
    if isinstance(token, Err):
        return token

    tag = source.require(TAG)
    if isinstance(tag, Err):
        return tag

    repo = source.require(REPOSITORY)
    if isinstance(repo, Err):
        return repo
    if not _REPO_RE.match(repo.value):
        return Err(
            ConfigurationError(
                input_name=REPOSITORY,
                message=f"invalid repository (expected owner/name): {repo.value}",
            )
        )

    strategy = source.get(TAG_STRATEGY) or "ref"
    if strategy not in get_args(TagStrategy):
        return Err(
            ConfigurationError(
                input_name=TAG_STRATEGY,
                message=f"unknown tag strategy: {strategy}",
                hint="expected one of: ref, list",
            )
        )

    webhook_source = source.get(WEBHOOK_SOURCE) or "input"
    webhook_url = _resolve_webhook_url(source, webhook_source=webhook_source, environ=environ)
    if isinstance(webhook_url, Err):
        return webhook_url
    webhook_url = _check_webhook_url(webhook_url.value)
    if isinstance(webhook_url, Err):
        return webhook_url

    raw_timeout = source.get(TIMEOUT) or str(DEFAULT_TIMEOUT_SECONDS)
    try:
        timeout = float(raw_timeout)
    except ValueError:
        timeout = -1.0
    if not math.isfinite(timeout) or timeout <= 0:
        return Err(
            ConfigurationError(
                input_name=TIMEOUT,
                message=f"invalid timeout (expected seconds > 0): {raw_timeout}",
            )
        )

    api_url = (source.get(API_URL) or DEFAULT_API_URL).rstrip("/")

    return Ok(
        HotfixInputs(
            github_token=token.value,
            tag=tag.value,
            repository=repo.value,
            webhook_url=webhook_url.value,
            api_url=api_url,
            tag_strategy=cast(TagStrategy, strategy),
            webhook_source=cast(WebhookSource, webhook_source),
            timeout=timeout,
        )
    )
