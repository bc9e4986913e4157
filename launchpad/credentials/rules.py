"""Rules for which credentials are strictly required or not.

The templates are read-only. Each resolution call takes its own copy via
``rules_for`` and may raise fields to required on that copy only.
"""

from collections.abc import Mapping
from types import MappingProxyType

from launchpad.enums import FieldKind, TargetKind

Rules = dict[FieldKind, bool]

SERVER_RULES: Mapping[FieldKind, bool] = MappingProxyType(
    {
        FieldKind.HOST: True,
        FieldKind.USERNAME: True,
        FieldKind.PASSWORD: False,
        FieldKind.KEYPHRASE: False,
        FieldKind.KEY: False,
        FieldKind.AGENT: False,
        FieldKind.AGENT_FORWARD: False,
    }
)

REPOSITORY_RULES: Mapping[FieldKind, bool] = MappingProxyType(
    {
        FieldKind.REPOSITORY: True,
        FieldKind.USERNAME: False,
        FieldKind.PASSWORD: False,
    }
)

RULE_TABLE: Mapping[TargetKind, Mapping[FieldKind, bool]] = MappingProxyType(
    {
        TargetKind.SERVER: SERVER_RULES,
        TargetKind.REPOSITORY: REPOSITORY_RULES,
    }
)


def rules_for(target: TargetKind) -> Rules:
    """Return a fresh, mutable copy of the rules for a target kind."""
    return dict(RULE_TABLE[target])


def target_of(rules: Mapping[FieldKind, bool]) -> TargetKind:
    """Tell which target kind a (possibly adjusted) rule set belongs to."""
    if FieldKind.REPOSITORY in rules:
        return TargetKind.REPOSITORY
    return TargetKind.SERVER
