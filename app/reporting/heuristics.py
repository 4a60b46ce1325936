"""
Heuristic Diff Scanner

Flags risky text patterns in a diff without calling the gatekeeper engine.
Rules are a declarative table evaluated in one pass over the lower-cased
diff; each matching rule contributes exactly one finding, in table order.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

SPELLING_LABEL = "Spelling suggestion: "


@dataclass(frozen=True)
class HeuristicRule:
    """A finding emitted when its predicate holds for the lower-cased diff."""

    finding: str
    predicate: Callable[[str], bool]


def contains_any(*needles: str) -> Callable[[str], bool]:
    return lambda text: any(needle in text for needle in needles)


def contains_all(*needles: str) -> Callable[[str], bool]:
    return lambda text: all(needle in text for needle in needles)


def any_of(*predicates: Callable[[str], bool]) -> Callable[[str], bool]:
    return lambda text: any(predicate(text) for predicate in predicates)


DEFAULT_RULES: Tuple[HeuristicRule, ...] = (
    HeuristicRule(
        "Possible credential exposure (password/secret/apikey)",
        contains_any("password", "passwd", "secret", "apikey", "api_key"),
    ),
    HeuristicRule(
        "Potential dangerous runtime/exec call",
        contains_any("system.exit", "runtime.getruntime", "runtime.exec", "exec("),
    ),
    HeuristicRule(
        "Debug prints found (console.log / print)",
        contains_any("console.log", "print("),
    ),
    HeuristicRule(
        "TODO/FIXME markers present",
        contains_any("todo", "fixme"),
    ),
    HeuristicRule(
        "Potential SQL concatenation risk",
        any_of(contains_all("sql", "execute"), contains_all("concat(", "sql")),
    ),
)


def scan_diff(
    diff: Optional[str],
    spelling_suggestions: Optional[Iterable[str]] = None,
    rules: Sequence[HeuristicRule] = DEFAULT_RULES,
) -> List[str]:
    """
    Scan diff text and return finding labels.

    Args:
        diff: Diff text; None is treated as empty
        spelling_suggestions: Engine-supplied suggestions appended after the
            rule findings, each prefixed with SPELLING_LABEL
        rules: Rule table, evaluated in order

    Returns:
        Rule findings in table order, then spelling suggestions in given order
    """
    text = (diff or "").lower()
    findings = [rule.finding for rule in rules if rule.predicate(text)]
    for suggestion in spelling_suggestions or ():
        findings.append(f"{SPELLING_LABEL}{suggestion}")
    return findings
