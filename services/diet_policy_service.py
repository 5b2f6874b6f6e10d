"""
Diet rule compilation.

Turns named dietary rules into forbidden ingredient tokens. The compiled
result is advisory: it is merged into the meal policy and enforced by
whoever consumes it (filters, prompt builder).
"""

import logging
from typing import Dict, Iterable, List, Optional

from domain.schemas.policy_schemas import CompiledDiet

logger = logging.getLogger("smartpantry.diet_policy")

DIET_TOKENS: Dict[str, List[str]] = {
    "vegan": [
        "meat", "beef", "lamb", "pork", "chicken", "turkey", "fish",
        "shrimp", "egg", "milk", "cheese", "yogurt", "honey",
    ],
    "vegetarian": [
        "meat", "beef", "lamb", "pork", "chicken", "turkey", "fish", "shrimp",
    ],
    "pescatarian": ["beef", "lamb", "pork", "chicken", "turkey"],
    "halal": [
        "pork", "bacon", "ham", "gelatin", "wine", "rum", "brandy", "beer", "alcohol",
    ],
    "kosher": [
        "pork", "bacon", "ham", "shellfish", "shrimp", "crab", "lobster",
        "oyster", "clam", "mussel",
    ],
}


def compile_diet_policy(rules: Optional[Iterable[str]]) -> CompiledDiet:
    """
    Compile diet rule names into a deduplicated forbidden-token list.

    Names are matched case-insensitively. Unknown names stay in ``picked``
    but add no tokens. Tokens keep first-seen order.
    """
    picked = [str(r).strip().lower() for r in (rules or []) if r]
    tokens: List[str] = []
    restrictions: Dict[str, List[str]] = {}

    for rule in picked:
        rule_tokens = DIET_TOKENS.get(rule)
        if rule_tokens is None:
            continue
        restrictions[rule] = list(rule_tokens)
        for token in rule_tokens:
            if token not in tokens:
                tokens.append(token)

    if len(restrictions) < len(set(picked)):
        logger.debug(
            "Ignoring unknown diet rules: %s",
            sorted(set(picked) - set(restrictions)),
        )
    return CompiledDiet(picked=picked, tokens=tokens, restrictions=restrictions)


def violates_diet(text: str, compiled: CompiledDiet) -> List[str]:
    """Tokens of ``compiled`` that appear as substrings of ``text``."""
    lowered = (text or "").lower()
    return [t for t in compiled.tokens if t in lowered]
