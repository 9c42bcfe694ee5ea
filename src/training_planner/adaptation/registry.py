"""Rule registry with auto-discovery of AdaptationRule subclasses."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path

from training_planner.adaptation.rules.base import AdaptationRule


class AdaptationRuleRegistry:
    """Discovers and manages all AdaptationRule implementations.

    Scans the ``adaptation.rules`` package for concrete AdaptationRule
    subclasses; a new rule only needs a module in that package.
    """

    def __init__(self) -> None:
        self._rules: dict[str, AdaptationRule] = {}

    def discover_rules(self) -> None:
        """Import every module under the rules package and register its rules."""
        import training_planner.adaptation.rules as rules_pkg

        rules_path = Path(rules_pkg.__file__).parent
        for _, module_name, _ in pkgutil.walk_packages([str(rules_path)], prefix=rules_pkg.__name__ + "."):
            module = importlib.import_module(module_name)
            for attr in vars(module).values():
                if (
                    isinstance(attr, type)
                    and issubclass(attr, AdaptationRule)
                    and attr is not AdaptationRule
                    and not getattr(attr, "__abstractmethods__", set())
                ):
                    self.register(attr())

    def register(self, rule: AdaptationRule) -> None:
        self._rules[rule.rule_id] = rule

    def get(self, rule_id: str) -> AdaptationRule | None:
        return self._rules.get(rule_id)

    def get_all_rules(self) -> list[AdaptationRule]:
        """All registered rules, highest priority first, then by rule_id."""
        return sorted(self._rules.values(), key=lambda r: (r.priority, r.rule_id))

    @property
    def rule_ids(self) -> list[str]:
        return list(self._rules.keys())
