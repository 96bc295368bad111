"""
Modifier placement.

Java modifiers land in three fixed TypeScript slots, always emitted in this
order with empty slots omitted:

    slot 0: access     public / protected / private
    slot 1: storage    abstract / static
    slot 2: final      spelled per declaration context

`final` has no single TypeScript spelling: on a type it renders as `const`,
on a field as `readonly`, on a local variable as the `const` declaration
keyword (see StatementGenerator), and on a parameter or method it is dropped,
optionally leaving a `/*const*/` marker on parameters.
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..parser.ast_nodes import Modifier


class ModifierContext(Enum):
    """The kind of declaration a modifier list belongs to."""
    TYPE = 'type'
    FIELD = 'field'
    METHOD = 'method'
    CONSTRUCTOR = 'constructor'
    PARAMETER = 'parameter'
    LOCAL = 'local'


ACCESS_SLOT = 0
STORAGE_SLOT = 1
FINAL_SLOT = 2

MODIFIER_SLOTS: Dict[Modifier, int] = {
    Modifier.PUBLIC: ACCESS_SLOT,
    Modifier.PROTECTED: ACCESS_SLOT,
    Modifier.PRIVATE: ACCESS_SLOT,
    Modifier.ABSTRACT: STORAGE_SLOT,
    Modifier.STATIC: STORAGE_SLOT,
    Modifier.FINAL: FINAL_SLOT,
}

FINAL_COMMENT = '/*const*/'

FINAL_SPELLINGS: Dict[ModifierContext, Optional[str]] = {
    ModifierContext.TYPE: 'const',
    ModifierContext.FIELD: 'readonly',
    ModifierContext.METHOD: None,
    ModifierContext.CONSTRUCTOR: None,
    ModifierContext.PARAMETER: None,
    ModifierContext.LOCAL: None,
}


def spell_modifier(
    modifier: Modifier,
    context: ModifierContext,
    top_level: bool = False,
    comment_final: bool = False,
) -> Optional[str]:
    """Return the TypeScript spelling of one modifier, or None to drop it.

    Args:
        modifier: The Java modifier
        context: The declaration it belongs to
        top_level: Whether a TYPE context declaration is at module level
        comment_final: Whether a dropped parameter `final` leaves a marker

    Returns:
        The spelling, or None
    """
    if modifier is Modifier.FINAL:
        if context is ModifierContext.PARAMETER and comment_final:
            return FINAL_COMMENT
        return FINAL_SPELLINGS[context]

    if context is ModifierContext.TYPE:
        # Module-level declarations have no access keyword; `public` exports.
        if modifier is Modifier.PUBLIC:
            return 'export' if top_level else None
        if modifier is Modifier.ABSTRACT:
            return 'abstract'
        return None

    if context in (ModifierContext.PARAMETER, ModifierContext.LOCAL):
        return None

    if context is ModifierContext.CONSTRUCTOR and modifier is not Modifier.PUBLIC:
        if MODIFIER_SLOTS[modifier] == STORAGE_SLOT:
            return None

    return modifier.value


def render_modifiers(
    modifiers: Iterable[Modifier],
    context: ModifierContext,
    top_level: bool = False,
    comment_final: bool = False,
) -> str:
    """Render a modifier list into its fixed slots.

    Returns:
        The modifiers joined by spaces with a trailing space, or '' if none
    """
    slots: List[List[str]] = [[], [], []]
    for modifier in modifiers:
        spelling = spell_modifier(modifier, context, top_level, comment_final)
        if spelling and spelling not in slots[MODIFIER_SLOTS[modifier]]:
            slots[MODIFIER_SLOTS[modifier]].append(spelling)
    words = [word for slot in slots for word in slot]
    if not words:
        return ''
    return ' '.join(words) + ' '
