"""
Rules Processor.

Applies a ruleset to node differences. Every rule that passes on a node diff
adds a CategorizedChange to it; a node diff can collect several.
"""

from pathlib import Path
from typing import List, Optional, Union

from graphdelta.diff.domain.models import NodeDiff
from graphdelta.rules.application.condition_evaluator import build_fact, evaluate
from graphdelta.rules.defaults import DEFAULT_RULES_PATH
from graphdelta.rules.domain.models import CategorizedChange, Rule
from graphdelta.rules.infrastructure.ruleset_loader import load_ruleset
from graphdelta.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def apply_rules(
    node_diffs: List[NodeDiff],
    ruleset: Optional[Union[str, Path, List[Rule]]] = None,
) -> List[NodeDiff]:
    """
    Categorize node differences with a ruleset.

    Args:
        node_diffs: Differences to categorize (updated in place)
        ruleset: Loaded rules or a path to a ruleset file; the packaged
            default rules when omitted

    Returns:
        The same list of node diffs
    """
    if not node_diffs:
        logger.info("no_differences_to_categorize")
        return node_diffs

    if ruleset is None:
        ruleset = DEFAULT_RULES_PATH
    rules = ruleset if isinstance(ruleset, list) else load_ruleset(ruleset)
    if not rules:
        logger.info("no_rules_to_apply", node_count=len(node_diffs))
        return node_diffs

    ordered_rules = sorted(rules, key=lambda r: r.priority, reverse=True)
    for node_diff in node_diffs:
        categorize(node_diff, ordered_rules)

    logger.info(
        "rules_applied",
        rule_count=len(rules),
        node_count=len(node_diffs),
        categorized_nodes=sum(1 for n in node_diffs if n.has_categorized_changes()),
    )
    return node_diffs


def categorize(node_diff: NodeDiff, rules: List[Rule]) -> None:
    """Run every rule on one node diff."""
    fact = build_fact(node_diff)
    for rule in rules:
        if not evaluate(rule.conditions, fact):
            continue
        logger.debug("rule_passed", rule=rule.name, node=node_diff.id)

        change = None
        if rule.changed_property:
            change = (
                node_diff.removed.get(rule.changed_property),
                node_diff.added.get(rule.changed_property),
            )
        node_diff.categorized_changes.append(
            CategorizedChange(
                rule_name=rule.name,
                rule_event=rule.event_type,
                category=rule.category,
                change=change,
            )
        )
