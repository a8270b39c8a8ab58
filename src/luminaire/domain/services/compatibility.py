"""Snap point compatibility rules.

The rule table encodes which snap point kinds mate on which kinds of
owner. Each rule is keyed on the (kind, owner class) of one side and decides
the acceptable partners for it; a pair is compatible when either side's rule
accepts the other, which makes the relation symmetric by construction.

Rules, in precedence order:

1. Track point on a connector mates only with a track point on a track/profile.
2. Track point on a track/profile mates only with a track point on a connector.
3. Mounting point mates with a mechanical point on any spotlight (pendant or
   not), or with a mounting point on a connector.
4. Mechanical point on a pendant mates with a mechanical point on a plain
   spotlight, or with a mounting point on a connector.
5. Mechanical point on a plain spotlight mates only with a mounting point.
6. Power point mates only with a power point.

Anything else is incompatible.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from ..value_objects import ComponentType, SnapKind, SnapPoint

logger = logging.getLogger(__name__)

__all__ = [
    "CompatibilityRule",
    "OwnerClass",
    "SnapOwner",
    "classify_owner",
    "is_compatible",
    "matching_rule",
]


class SnapOwner(Protocol):
    """Anything that owns snap points (placed component or template)."""

    @property
    def type_tag(self) -> ComponentType: ...

    @property
    def is_pendant(self) -> bool: ...


class OwnerClass(str, Enum):
    """Owner categories the rule table distinguishes."""

    TRACK_LIKE = "track_like"
    CONNECTOR = "connector"
    PLAIN_SPOTLIGHT = "plain_spotlight"
    PENDANT = "pendant"
    OTHER = "other"


class CompatibilityRule(str, Enum):
    """Named rules of the compatibility table."""

    CONNECTOR_TRACK_TO_TRACK = "connector track point to track"
    TRACK_TO_CONNECTOR_TRACK = "track point to connector"
    MOUNTING_TO_LAMP_OR_CONNECTOR = "mounting point to lamp or connector"
    PENDANT_TO_LAMP_OR_MOUNTING = "pendant to lamp or connector mounting"
    SPOTLIGHT_TO_MOUNTING = "spotlight to mounting point"
    POWER_TO_POWER = "power to power"


_Side = tuple[SnapKind, OwnerClass]


def classify_owner(owner: SnapOwner) -> OwnerClass:
    """Map an owner onto the categories used by the rule table."""
    try:
        type_tag = ComponentType(getattr(owner, "type_tag", None))
    except ValueError:
        return OwnerClass.OTHER
    if type_tag.is_elongated:
        return OwnerClass.TRACK_LIKE
    if type_tag is ComponentType.CONNECTOR:
        return OwnerClass.CONNECTOR
    if type_tag is ComponentType.SPOTLIGHT:
        if getattr(owner, "is_pendant", False):
            return OwnerClass.PENDANT
        return OwnerClass.PLAIN_SPOTLIGHT
    return OwnerClass.OTHER


def _side(point: SnapPoint, owner: SnapOwner) -> _Side | None:
    try:
        kind = SnapKind(getattr(point, "kind", None))
    except ValueError:
        return None
    return (kind, classify_owner(owner))


def _rule_for(side: _Side, other: _Side) -> CompatibilityRule | None:
    """Apply the first rule keyed on ``side`` to ``other``."""
    match side:
        case (SnapKind.TRACK, OwnerClass.CONNECTOR):
            if other == (SnapKind.TRACK, OwnerClass.TRACK_LIKE):
                return CompatibilityRule.CONNECTOR_TRACK_TO_TRACK
        case (SnapKind.TRACK, OwnerClass.TRACK_LIKE):
            if other == (SnapKind.TRACK, OwnerClass.CONNECTOR):
                return CompatibilityRule.TRACK_TO_CONNECTOR_TRACK
        case (SnapKind.MOUNTING, _):
            if other in (
                (SnapKind.MECHANICAL, OwnerClass.PLAIN_SPOTLIGHT),
                (SnapKind.MECHANICAL, OwnerClass.PENDANT),
                (SnapKind.MOUNTING, OwnerClass.CONNECTOR),
            ):
                return CompatibilityRule.MOUNTING_TO_LAMP_OR_CONNECTOR
        case (SnapKind.MECHANICAL, OwnerClass.PENDANT):
            if other in (
                (SnapKind.MECHANICAL, OwnerClass.PLAIN_SPOTLIGHT),
                (SnapKind.MOUNTING, OwnerClass.CONNECTOR),
            ):
                return CompatibilityRule.PENDANT_TO_LAMP_OR_MOUNTING
        case (SnapKind.MECHANICAL, OwnerClass.PLAIN_SPOTLIGHT):
            if other[0] is SnapKind.MOUNTING:
                return CompatibilityRule.SPOTLIGHT_TO_MOUNTING
        case (SnapKind.POWER, _):
            if other[0] is SnapKind.POWER:
                return CompatibilityRule.POWER_TO_POWER
    return None


def matching_rule(
    point_a: SnapPoint,
    owner_a: SnapOwner,
    point_b: SnapPoint,
    owner_b: SnapOwner,
) -> CompatibilityRule | None:
    """Return the rule allowing the pair, or None when incompatible.

    The rule keyed on ``point_a`` is consulted before the one keyed on
    ``point_b``, so the reported rule may depend on argument order even
    though the yes/no answer never does.
    """
    side_a = _side(point_a, owner_a)
    side_b = _side(point_b, owner_b)
    if side_a is None or side_b is None:
        return None
    return _rule_for(side_a, side_b) or _rule_for(side_b, side_a)


def is_compatible(
    point_a: SnapPoint,
    owner_a: SnapOwner,
    point_b: SnapPoint,
    owner_b: SnapOwner,
) -> bool:
    """Decide whether two snap points may be connected.

    Symmetric, pure and total: unknown kinds or owner types yield False.
    """
    rule = matching_rule(point_a, owner_a, point_b, owner_b)
    logger.debug(
        f"Compatibility {getattr(point_a, 'id', '?')} <-> {getattr(point_b, 'id', '?')}: "
        f"{rule.value if rule else 'rejected'}"
    )
    return rule is not None
