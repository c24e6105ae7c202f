"""Config types for declarative rule sets.

The same shape loads from a dict (e.g. parsed JSON) or from YAML:

    rules:
      - method: GET
        url: http://api.example.com/users/42
        response:
          status: 200
          json: {"id": 42}
      - method: ANY
        url: "=~^https?://cdn\\."
        response: {status: 204}
    fallback:
      status: 404
      body: not mocked

Config loading path:
  dict / YAML → parse_rules_config() → RulesConfig → load_rules() → RuleSet

In config the string ``"ANY"`` spells the wildcard for both method and url.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from stubmatch._patterns import ANY
from stubmatch._rules import RuleSet
from stubmatch.http._responders import json_responder, string_responder

if TYPE_CHECKING:
    from stubmatch._types import Responder
    from stubmatch.http._request import MockRequest
    from stubmatch.http._response import MockResponse

logger = logging.getLogger("stubmatch.config")

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_RULES = 1024
MAX_PATTERN_LENGTH = 8192

WILDCARD = "ANY"

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


class TooManyRulesError(ConfigParseError):
    """Config declares more rules than MAX_RULES."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many rules: {count} exceeds maximum {max_}")


class PatternTooLongError(ConfigParseError):
    """A method or url pattern exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class TextBody:
    """A plain string body, sent UTF-8 encoded."""

    text: str


@dataclass(frozen=True, slots=True)
class JsonBody:
    """A JSON payload, serialized when the rule set is loaded."""

    payload: Any


type BodyConfig = TextBody | JsonBody


@dataclass(frozen=True, slots=True)
class ResponseConfig:
    status: int = 200
    body: BodyConfig | None = None
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RuleConfig:
    method: str
    url: str
    response: ResponseConfig


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Parsed rule set config. Load with load_rules()."""

    rules: tuple[RuleConfig, ...]
    fallback: ResponseConfig | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════


def parse_rules_config(data: dict[str, Any]) -> RulesConfig:
    """Parse a dict into a RulesConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_rules = data.get("rules")
    if raw_rules is None:
        msg = "missing required field 'rules'"
        raise ConfigParseError(msg)
    if not isinstance(raw_rules, list):
        msg = f"'rules' must be a list, got {type(raw_rules).__name__}"
        raise ConfigParseError(msg)
    if len(raw_rules) > MAX_RULES:
        raise TooManyRulesError(len(raw_rules), MAX_RULES)

    rules = tuple(_parse_rule(r) for r in raw_rules)

    fallback = None
    if data.get("fallback") is not None:
        fallback = _parse_response(data["fallback"])

    return RulesConfig(rules=rules, fallback=fallback)


def _parse_rule(data: dict[str, Any]) -> RuleConfig:
    if not isinstance(data, dict):
        msg = f"rule must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    method = _parse_pattern(data, "method", default=WILDCARD)
    if "url" not in data:
        msg = "rule missing required field 'url'"
        raise ConfigParseError(msg)
    url = _parse_pattern(data, "url")
    response = _parse_response(data.get("response", {}))
    return RuleConfig(method=method, url=url, response=response)


def _parse_pattern(data: dict[str, Any], key: str, default: str | None = None) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        msg = f"rule {key} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    if len(value) > MAX_PATTERN_LENGTH:
        raise PatternTooLongError(len(value), MAX_PATTERN_LENGTH)
    return value


def _parse_response(data: dict[str, Any]) -> ResponseConfig:
    """Parse a response dict.

    Enforces oneof: at most one of body or json.
    """
    if not isinstance(data, dict):
        msg = f"response must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    status = data.get("status", 200)
    if isinstance(status, bool) or not isinstance(status, int):
        msg = f"response status must be an integer, got {type(status).__name__}"
        raise ConfigParseError(msg)
    if not 100 <= status <= 599:
        msg = f"response status must be between 100 and 599, got {status}"
        raise ConfigParseError(msg)

    if "body" in data and "json" in data:
        msg = "at most one of 'body' or 'json' may be set, got both"
        raise ConfigParseError(msg)

    body: BodyConfig | None = None
    if "body" in data:
        text = data["body"]
        if not isinstance(text, str):
            msg = f"response body must be a string, got {type(text).__name__}"
            raise ConfigParseError(msg)
        body = TextBody(text)
    elif "json" in data:
        body = JsonBody(data["json"])

    headers = data.get("headers", {})
    if not isinstance(headers, dict):
        msg = f"response headers must be a dict, got {type(headers).__name__}"
        raise ConfigParseError(msg)

    return ResponseConfig(
        status=status,
        body=body,
        headers={str(k): str(v) for k, v in headers.items()},
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Loading (config types → RuleSet)
# ═══════════════════════════════════════════════════════════════════════════════


def load_rules(config: RulesConfig) -> RuleSet[MockRequest, MockResponse]:
    """Build a RuleSet from a parsed config.

    Raises:
        MalformedPatternUrlError: If a url pattern cannot be parsed.
        InvalidPatternError: If a ``=~`` regex does not compile.
        TypeError: If a json payload is not serializable.
    """
    rule_set: RuleSet[MockRequest, MockResponse] = RuleSet()
    for rule in config.rules:
        method = ANY if rule.method == WILDCARD else rule.method
        url = ANY if rule.url == WILDCARD else rule.url
        rule_set.register(method, url, _build_responder(rule.response))

    if config.fallback is not None:
        rule_set.set_fallback(_build_responder(config.fallback))

    logger.debug(
        "loaded %d rules (fallback: %s)", len(rule_set), config.fallback is not None
    )
    return rule_set


def load_rules_yaml(text: str) -> RuleSet[MockRequest, MockResponse]:
    """Parse YAML text and load it into a RuleSet.

    Raises:
        ConfigParseError: If the YAML is invalid or has the wrong shape.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"invalid YAML: {e}"
        raise ConfigParseError(msg) from e
    return load_rules(parse_rules_config(data))


def load_rules_file(path: str | Path) -> RuleSet[MockRequest, MockResponse]:
    """Load a YAML (or JSON, which is YAML) rules file."""
    return load_rules_yaml(Path(path).read_text(encoding="utf-8"))


def _build_responder(config: ResponseConfig) -> Responder[MockRequest, MockResponse]:
    match config.body:
        case JsonBody(payload=payload):
            return json_responder(config.status, payload, config.headers)
        case TextBody(text=text):
            return string_responder(config.status, text, config.headers)
        case None:
            return string_responder(config.status, "", config.headers)
    msg = f"unknown body config type: {type(config.body).__name__}"  # pragma: no cover
    raise ConfigParseError(msg)  # pragma: no cover
