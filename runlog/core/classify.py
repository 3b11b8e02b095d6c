"""Screenshot layout classification."""

from __future__ import annotations

import logging
from typing import Any, Collection, Dict, List, Optional, Sequence

from runlog.core.constants import UNKNOWN_VARIANT, VARIANT_KEYWORDS
from runlog.core.models import VariantRule

logger = logging.getLogger(__name__)

VARIANT_RULES: List[VariantRule] = [
    VariantRule(name=name, keywords=tuple(keywords), extractor=name)
    for name, keywords in VARIANT_KEYWORDS
]


def _missing_keyword(text: str, keywords: Sequence[str]) -> Optional[str]:
    for keyword in keywords:
        if keyword not in text:
            return keyword
    return None


def match_variant(
    text: str,
    rules: Sequence[VariantRule] = VARIANT_RULES,
) -> Optional[VariantRule]:
    """Return the first rule whose keywords all appear in text (case-sensitive)."""
    for rule in rules:
        missing = _missing_keyword(text, rule.keywords)
        if missing is None:
            return rule
        logger.debug("Keyword %r not found, not %s", missing, rule.name)
    return None


def classify_text(text: str, rules: Sequence[VariantRule] = VARIANT_RULES) -> str:
    """Classify recognized text into a variant name or 'unknown'."""
    rule = match_variant(text, rules)
    return rule.name if rule else UNKNOWN_VARIANT


def _rule_from_value(name: str, value: Any) -> Optional[VariantRule]:
    if isinstance(value, dict):
        keywords = value.get("keywords")
        extractor = str(value.get("extractor") or name)
    else:
        keywords = value
        extractor = name

    if isinstance(keywords, str) or not isinstance(keywords, (list, tuple)):
        return None
    cleaned = tuple(str(item) for item in keywords if str(item))
    if not cleaned:
        return None
    return VariantRule(name=name, keywords=cleaned, extractor=extractor)


def variant_rules_from_config(
    config: Dict[str, Any],
    extractors: Optional[Collection[str]] = None,
) -> List[VariantRule]:
    """Build rules from config if provided, otherwise defaults.

    Each entry under ``[classification.rules]`` is either a keyword list or a
    table with ``keywords`` and an optional ``extractor`` naming the ruleset
    to reuse. Table order is priority order. Entries whose extractor is not
    in ``extractors`` are dropped.
    """
    configured = config.get("classification", {}).get("rules", {})
    if not isinstance(configured, dict) or not configured:
        return list(VARIANT_RULES)

    rules: List[VariantRule] = []
    for key, value in configured.items():
        rule = _rule_from_value(str(key), value)
        if rule is None:
            logger.warning("Ignoring malformed classification rule %r", key)
            continue
        if extractors is not None and rule.extractor not in extractors:
            logger.warning(
                "Ignoring classification rule %r: unknown extractor %r",
                rule.name,
                rule.extractor,
            )
            continue
        rules.append(rule)
    return rules or list(VARIANT_RULES)
