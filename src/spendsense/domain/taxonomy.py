"""Ledger taxonomy store: groups and their subgroups."""

import copy
from typing import Iterable, Optional

from spendsense.domain.entities import Direction, LedgerGroup, LedgerSubgroup
from spendsense.utils.ids import new_id

UNCATEGORIZED_GROUP_ID = "system-uncat"
SKIPPED_SUBGROUP_ID = "system-skipped"

DEFAULT_LEDGERS: tuple[LedgerGroup, ...] = (
    LedgerGroup(
        id=UNCATEGORIZED_GROUP_ID,
        name="UNCATEGORIZED",
        direction=Direction.DEBIT,
        subgroups=[
            LedgerSubgroup(id=SKIPPED_SUBGROUP_ID, name="SKIPPED", parent_id=UNCATEGORIZED_GROUP_ID)
        ],
    ),
    LedgerGroup(
        id="grp-house",
        name="HOUSEHOLD",
        direction=Direction.DEBIT,
        subgroups=[
            LedgerSubgroup(id="sub-rent", name="Rent", parent_id="grp-house"),
            LedgerSubgroup(id="sub-grocery", name="Groceries", parent_id="grp-house"),
        ],
    ),
    LedgerGroup(
        id="grp-inc",
        name="INCOME",
        direction=Direction.CREDIT,
        subgroups=[LedgerSubgroup(id="sub-sal", name="Salary", parent_id="grp-inc")],
    ),
)


def default_ledgers() -> list[LedgerGroup]:
    """Return a fresh copy of the starter taxonomy."""
    return copy.deepcopy(list(DEFAULT_LEDGERS))


class TaxonomyStore:
    """In-memory collection of ledger groups.

    Lookups are lenient: an unknown id yields ``None`` or a no-op rather than
    an exception. Names are not deduplicated.
    """

    def __init__(self, groups: Optional[Iterable[LedgerGroup]] = None):
        self._groups: list[LedgerGroup] = list(groups) if groups is not None else []

    @property
    def groups(self) -> list[LedgerGroup]:
        return list(self._groups)

    def add_group(self, name: str, direction: Direction) -> str:
        """Append a new empty group. Returns the group ID."""
        group = LedgerGroup(id=new_id("group"), name=name, direction=Direction(direction))
        self._groups.append(group)
        return group.id

    def remove_group(self, group_id: str) -> Optional[LedgerGroup]:
        """Remove a group. Transactions referencing it are left alone."""
        group = self.find_group(group_id)
        if group is not None:
            self._groups = [g for g in self._groups if g.id != group_id]
        return group

    def add_subgroup(self, group_id: str, name: str) -> Optional[str]:
        """Add a subgroup to a group.

        Returns:
            Subgroup ID, or None when the name is blank or the group is unknown
        """
        if not name or not name.strip():
            return None
        group = self.find_group(group_id)
        if group is None:
            return None
        subgroup = LedgerSubgroup(id=new_id("sub"), name=name, parent_id=group_id)
        group.subgroups.append(subgroup)
        return subgroup.id

    def remove_subgroup(self, group_id: str, subgroup_id: str) -> Optional[LedgerSubgroup]:
        subgroup = self.find_subgroup(group_id, subgroup_id)
        if subgroup is not None:
            group = self.find_group(group_id)
            group.subgroups = [s for s in group.subgroups if s.id != subgroup_id]
        return subgroup

    def find_group(self, group_id: str) -> Optional[LedgerGroup]:
        for group in self._groups:
            if group.id == group_id:
                return group
        return None

    def find_subgroup(self, group_id: str, subgroup_id: str) -> Optional[LedgerSubgroup]:
        """Find a subgroup within the given group only."""
        group = self.find_group(group_id)
        if group is None:
            return None
        for subgroup in group.subgroups:
            if subgroup.id == subgroup_id:
                return subgroup
        return None

    def find_subgroup_name(self, group_id: str, subgroup_id: str) -> Optional[str]:
        subgroup = self.find_subgroup(group_id, subgroup_id)
        return subgroup.name if subgroup is not None else None

    def find_group_for_subgroup(self, subgroup_id: str) -> Optional[LedgerGroup]:
        """Find the first group that owns a subgroup with this ID."""
        for group in self._groups:
            if any(s.id == subgroup_id for s in group.subgroups):
                return group
        return None

    def groups_for_direction(self, direction: Direction) -> list[LedgerGroup]:
        return [g for g in self._groups if g.direction == direction]

    def is_resolved(self, group_id: str, subgroup_id: str) -> bool:
        """True when both IDs exist and the subgroup belongs to the group."""
        return self.find_subgroup(group_id, subgroup_id) is not None
