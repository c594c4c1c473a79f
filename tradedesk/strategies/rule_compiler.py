# tradedesk/strategies/rule_compiler.py
"""
Parser for the textual strategy rule grammar.

One directive per line::

    BUY when RSI < 30
    SELL when RSI > 70

Keywords are case-insensitive. Lines that do not match are ignored.
"""

import logging
import re
from typing import List

from pydantic import BaseModel, ConfigDict

from ..core.errors import ConfigurationError
from ..models.rules import Comparison, Indicator, Operator, RuleAction, StrategyRule


logger = logging.getLogger(__name__)

RULE_PATTERN = re.compile(
    r'^\s*(?P<action>BUY|SELL)\s+when\s+(?P<indicator>RSI)\s*(?P<operator>[<>])\s*(?P<threshold>\d+)\s*$',
    re.IGNORECASE,
)

RULE_EXAMPLES = {
    RuleAction.BUY: "BUY when RSI < 30",
    RuleAction.SELL: "SELL when RSI > 70",
}


class CompiledRuleSet(BaseModel):
    """Exactly one entry rule and one exit rule."""
    model_config = ConfigDict(frozen=True)

    buy: StrategyRule
    sell: StrategyRule


def parse_rule(line: str):
    """Parse one line, returning a StrategyRule or None when it does not match."""
    match = RULE_PATTERN.match(line)
    if not match:
        return None
    return StrategyRule(
        action=RuleAction(match.group('action').upper()),
        condition=Comparison(
            indicator=Indicator(match.group('indicator').upper()),
            operator=Operator(match.group('operator')),
            threshold=int(match.group('threshold')),
        ),
    )


def parse_rules(text: str) -> List[StrategyRule]:
    """Parse every matching line of ``text`` in order."""
    rules = []
    for line in text.splitlines():
        rule = parse_rule(line)
        if rule is None:
            if line.strip():
                logger.debug(f"Ignoring unrecognised rule line: {line.strip()!r}")
            continue
        rules.append(rule)
    return rules


def compile_rules(text: str) -> CompiledRuleSet:
    """
    Parse rule text into a rule set with one BUY and one SELL rule.

    Raises:
        ConfigurationError: If a BUY or SELL rule is missing or repeated
    """
    rules = parse_rules(text)
    compiled = {}

    for action in RuleAction:
        matching = [rule for rule in rules if rule.action == action]
        if not matching:
            raise ConfigurationError(
                f"Strategy rules must include a {action.value} rule, e.g. '{RULE_EXAMPLES[action]}'."
            )
        if len(matching) > 1:
            raise ConfigurationError(
                f"Strategy rules must include exactly one {action.value} rule, found {len(matching)}."
            )
        compiled[action.value.lower()] = matching[0]

    return CompiledRuleSet(**compiled)
