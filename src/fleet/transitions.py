"""Status-transition registry: which lifecycle moves the UI may offer.

The registry only enumerates what is legal to *offer*. Executing a move is a
separate PATCH against the fleet API, which stays the source of truth and may
still reject it.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from src.config.constants import (
    RESOURCE_PATHS,
    STATUS_ENUMS,
    TRANSITION_ACTIONS,
    TRANSITION_TABLE,
)
from src.fleet.common import normalize_status


@dataclass(frozen=True)
class TransitionOption:
    target: str
    label: str

    def to_dict(self) -> Dict[str, str]:
        return {"target": self.target, "label": self.label}


class TransitionRegistry:
    """Lookup of (entity kind, current status) -> ordered transition options."""

    def __init__(
        self,
        table: Mapping[str, Mapping[str, Sequence[Tuple[str, str]]]] = TRANSITION_TABLE,
        enums: Mapping[str, Sequence[str]] = STATUS_ENUMS,
        actions: Mapping[str, Mapping[str, str]] = TRANSITION_ACTIONS,
    ):
        self._table: Dict[str, Dict[str, Tuple[TransitionOption, ...]]] = {}
        self._actions = {kind: dict(paths) for kind, paths in actions.items()}

        for kind, rows in table.items():
            assert kind in enums, f"No status enum for entity kind {kind!r}"
            members = list(enums[kind])

            # Exhaustiveness: every status has a row and every row is a status
            assert sorted(rows) == sorted(members), (
                f"{kind} transition rows {sorted(rows)} != statuses {sorted(members)}"
            )
            for current, targets in rows.items():
                for target, _label in targets:
                    assert target in members, f"{kind}: unknown target {target!r}"
                    assert target != current, f"{kind}: {current} transitions to itself"
                    assert target in self._actions.get(kind, {}), (
                        f"{kind}: no API action for target {target!r}"
                    )

            self._table[kind] = {
                current: tuple(TransitionOption(target, label) for target, label in targets)
                for current, targets in rows.items()
            }

    @property
    def kinds(self) -> List[str]:
        return list(self._table)

    def _rows(self, kind: str) -> Dict[str, Tuple[TransitionOption, ...]]:
        rows = self._table.get(kind.lower())
        if rows is None:
            raise ValueError(f"Entity kind {kind!r} has no lifecycle status")
        return rows

    def transitions_for(self, kind: str, current_status: Optional[str]) -> List[TransitionOption]:
        """Ordered transitions offered from ``current_status``.

        Terminal states and statuses outside the kind's enum yield an empty list.
        """
        rows = self._rows(kind)
        status = normalize_status(kind.lower(), current_status)
        return list(rows.get(status, ()))

    def is_terminal(self, kind: str, status: Optional[str]) -> bool:
        rows = self._rows(kind)
        status = normalize_status(kind.lower(), status)
        return status in rows and not rows[status]

    def allows(self, kind: str, current_status: Optional[str], target: str) -> bool:
        return any(o.target == target for o in self.transitions_for(kind, current_status))

    def action_path(self, kind: str, entity_id: str, target: str) -> str:
        """PATCH path that asks the API to move an entity to ``target``.

        Raises:
            ValueError: ``target`` is not a status this kind can be moved to.
        """
        kind = kind.lower()
        self._rows(kind)
        action = self._actions[kind].get(target)
        if action is None:
            raise ValueError(f"No {kind} action moves to {target!r}")
        return f"{RESOURCE_PATHS[kind]}/{entity_id}/{action}"


REGISTRY = TransitionRegistry()


def transitions_for(kind: str, current_status: Optional[str]) -> List[TransitionOption]:
    return REGISTRY.transitions_for(kind, current_status)


def is_terminal(kind: str, status: Optional[str]) -> bool:
    return REGISTRY.is_terminal(kind, status)


def action_path(kind: str, entity_id: str, target: str) -> str:
    return REGISTRY.action_path(kind, entity_id, target)
