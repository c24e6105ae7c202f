"""stubmatch — request matching for mocking outbound HTTP calls in tests.

All public types are exported from this module for flat imports:

    from stubmatch import ANY, new_matcher, RuleSet
    from stubmatch.http import MockRequest, string_responder
"""

__version__ = "0.1.0"

# Config — see stubmatch._config for details
from stubmatch._config import (
    MAX_PATTERN_LENGTH,
    MAX_RULES,
    ConfigParseError,
    JsonBody,
    PatternTooLongError,
    ResponseConfig,
    RuleConfig,
    RulesConfig,
    TextBody,
    TooManyRulesError,
    load_rules,
    load_rules_file,
    load_rules_yaml,
    parse_rules_config,
)

# Errors
from stubmatch._errors import (
    InvalidPatternError,
    MalformedCandidateUrlError,
    MalformedPatternUrlError,
    MalformedUrlError,
    MatcherError,
    NoResponderFoundError,
)

# Matcher
from stubmatch._matcher import Matcher, new_matcher

# Patterns
from stubmatch._patterns import (
    ANY,
    REGEX_PREFIX,
    ExactMethod,
    ExactUrl,
    MethodPattern,
    RegexUrl,
    UrlPattern,
    Wildcard,
    match_method,
    match_url,
    method_pattern,
    url_pattern,
)

# Rule set
from stubmatch._rules import RuleSet
from stubmatch._types import RequestLike, Responder
from stubmatch._url import UrlParts, canonical_path, parse_request_uri, parse_url

__all__ = [
    # Protocols
    "Responder",
    "RequestLike",
    # URLs
    "UrlParts",
    "canonical_path",
    "parse_url",
    "parse_request_uri",
    # Patterns
    "ANY",
    "REGEX_PREFIX",
    "Wildcard",
    "ExactMethod",
    "ExactUrl",
    "RegexUrl",
    "MethodPattern",
    "UrlPattern",
    "method_pattern",
    "url_pattern",
    "match_method",
    "match_url",
    # Matcher
    "Matcher",
    "new_matcher",
    # Rule set
    "RuleSet",
    # Errors
    "MatcherError",
    "MalformedUrlError",
    "MalformedPatternUrlError",
    "MalformedCandidateUrlError",
    "InvalidPatternError",
    "NoResponderFoundError",
    # Config
    "TextBody",
    "JsonBody",
    "ResponseConfig",
    "RuleConfig",
    "RulesConfig",
    "ConfigParseError",
    "TooManyRulesError",
    "PatternTooLongError",
    "parse_rules_config",
    "load_rules",
    "load_rules_yaml",
    "load_rules_file",
    "MAX_RULES",
    "MAX_PATTERN_LENGTH",
]
