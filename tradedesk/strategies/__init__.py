from .base_strategy import BaseStrategy
from .rule_compiler import CompiledRuleSet, compile_rules, parse_rules
from .rule_strategy import RuleStrategy

__all__ = [
    "BaseStrategy",
    "CompiledRuleSet",
    "compile_rules",
    "parse_rules",
    "RuleStrategy",
]
