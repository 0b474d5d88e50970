"""Tag-team partners, stable members and manager clients.

All three relationships are membership rows with a join date and, once
closed, a leave date. Rules enforced when a row is opened:

    - the member joins a group of the right family
    - neither side is deleted or retired
    - the member is not already current in that group
    - a wrestler is a current partner of at most one tag team
    - a tag team holds at most the configured number of partners
    - a member is current in at most one stable (when configured)
    - a join never precedes the member's previous leave of the same kind
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.application.ports.time_authority import TimeAuthorityProtocol
from ringside.application.services.base import LoggingMixin
from ringside.application.services.cascade_engine import CascadeEngine
from ringside.application.services.period_ledger import PeriodLedger
from ringside.config.roster_config import RosterConfig
from ringside.domain.errors.ledger import InvalidDateRangeError
from ringside.domain.errors.membership import MembershipConflictError
from ringside.domain.errors.not_found import (
    EntityNotFoundError,
    MembershipNotFoundError,
)
from ringside.domain.models.entity import RosterEntity
from ringside.domain.models.membership import Membership, MembershipKind
from ringside.domain.models.roster import EntityRef
from ringside.domain.models.status import ActivationStatus, EmploymentStatus

_RETIRED = (EmploymentStatus.RETIRED, ActivationStatus.RETIRED)


class MembershipService(LoggingMixin):
    """Opens and closes membership rows."""

    def __init__(
        self,
        repository: RosterRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
        ledger: PeriodLedger,
        cascades: CascadeEngine,
        config: RosterConfig,
    ) -> None:
        self._repository = repository
        self._time = time_authority
        self._ledger = ledger
        self._cascades = cascades
        self._config = config
        self._init_logger(component="memberships")

    # Tag teams

    def add_partner(
        self, tag_team_id: UUID, wrestler_id: UUID, joined_at: datetime | None = None
    ) -> Membership:
        return self.join(
            MembershipKind.TAG_TEAM_PARTNER,
            EntityRef.tag_team(tag_team_id),
            EntityRef.wrestler(wrestler_id),
            joined_at,
        )

    def remove_partner(
        self, tag_team_id: UUID, wrestler_id: UUID, left_at: datetime | None = None
    ) -> Membership:
        return self.leave(
            MembershipKind.TAG_TEAM_PARTNER,
            EntityRef.tag_team(tag_team_id),
            EntityRef.wrestler(wrestler_id),
            left_at,
        )

    def current_partners(self, tag_team_id: UUID) -> list[EntityRef]:
        return self._current_members(
            MembershipKind.TAG_TEAM_PARTNER, EntityRef.tag_team(tag_team_id)
        )

    # Stables

    def join_stable(
        self, stable_id: UUID, member: EntityRef, joined_at: datetime | None = None
    ) -> Membership:
        return self.join(
            MembershipKind.STABLE_MEMBER, EntityRef.stable(stable_id), member, joined_at
        )

    def leave_stable(
        self, stable_id: UUID, member: EntityRef, left_at: datetime | None = None
    ) -> Membership:
        return self.leave(
            MembershipKind.STABLE_MEMBER, EntityRef.stable(stable_id), member, left_at
        )

    def current_members(self, stable_id: UUID) -> list[EntityRef]:
        return self._current_members(
            MembershipKind.STABLE_MEMBER, EntityRef.stable(stable_id)
        )

    # Managers

    def assign_manager(
        self, manager_id: UUID, client: EntityRef, joined_at: datetime | None = None
    ) -> Membership:
        return self.join(
            MembershipKind.MANAGEMENT, EntityRef.manager(manager_id), client, joined_at
        )

    def remove_manager(
        self, manager_id: UUID, client: EntityRef, left_at: datetime | None = None
    ) -> Membership:
        return self.leave(
            MembershipKind.MANAGEMENT, EntityRef.manager(manager_id), client, left_at
        )

    def current_managers(self, client: EntityRef) -> list[EntityRef]:
        return [
            m.group
            for m in self._repository.memberships(
                MembershipKind.MANAGEMENT, member=client, current_only=True
            )
        ]

    def current_clients(self, manager_id: UUID) -> list[EntityRef]:
        return self._current_members(
            MembershipKind.MANAGEMENT, EntityRef.manager(manager_id)
        )

    # Shared

    def join(
        self,
        kind: MembershipKind,
        group: EntityRef,
        member: EntityRef,
        joined_at: datetime | None = None,
    ) -> Membership:
        """Open a membership row after checking every joining rule.

        Raises:
            EntityNotFoundError: Either side does not exist or is deleted.
            MembershipConflictError: A joining rule is broken.
            InvalidDateRangeError: The join precedes the member's last leave.
        """
        at = joined_at if joined_at is not None else self._time.now()
        log = self._log_operation(
            "join", kind=kind.value, group=str(group), member=str(member)
        )

        with self._repository.atomic():
            self._check_families(kind, group, member)
            self._require_live(group)
            self._require_live(member)
            self._check_join(kind, group, member, at)
            membership = self._repository.attach_membership(
                Membership(kind=kind, group=group, member=member, joined_at=at)
            )

        log.info("membership_opened", joined_at=at.isoformat())
        return membership

    def leave(
        self,
        kind: MembershipKind,
        group: EntityRef,
        member: EntityRef,
        left_at: datetime | None = None,
    ) -> Membership:
        """Close the current row joining member to group.

        Raises:
            MembershipNotFoundError: No current row joins them.
            InvalidDateRangeError: left_at is not after the join date.
        """
        at = left_at if left_at is not None else self._time.now()
        with self._repository.atomic():
            self._require_live(group)
            current = self._repository.memberships(
                kind, group=group, member=member, current_only=True
            )
            if not current:
                raise MembershipNotFoundError(kind, group, member)
            closed = self._cascades.close_memberships(current, at)
        return closed[0]

    def _current_members(self, kind: MembershipKind, group: EntityRef) -> list[EntityRef]:
        return [
            m.member
            for m in self._repository.memberships(kind, group=group, current_only=True)
        ]

    def _check_families(
        self, kind: MembershipKind, group: EntityRef, member: EntityRef
    ) -> None:
        if group.family != kind.group_family:
            raise MembershipConflictError(
                kind, group, member, f"group must be a {kind.group_family.label}"
            )
        if member.family not in kind.member_families:
            raise MembershipConflictError(
                kind, group, member, f"a {member.family.label} cannot be a member"
            )

    def _check_join(
        self,
        kind: MembershipKind,
        group: EntityRef,
        member: EntityRef,
        at: datetime,
    ) -> None:
        if self._ledger.project(group) in _RETIRED:
            raise MembershipConflictError(kind, group, member, "group is retired")
        if self._ledger.project(member) in _RETIRED:
            raise MembershipConflictError(kind, group, member, "member is retired")

        if self._repository.memberships(
            kind, group=group, member=member, current_only=True
        ):
            raise MembershipConflictError(kind, group, member, "already a current member")

        held = self._repository.memberships(kind, member=member, current_only=True)
        if kind == MembershipKind.TAG_TEAM_PARTNER:
            if held:
                raise MembershipConflictError(
                    kind, group, member, f"already a partner in {held[0].group}"
                )
            partners = self._repository.memberships(kind, group=group, current_only=True)
            if len(partners) >= self._config.tag_team_partners:
                raise MembershipConflictError(kind, group, member, "tag team is full")
        elif kind == MembershipKind.STABLE_MEMBER and self._config.enforce_single_stable:
            if held:
                raise MembershipConflictError(
                    kind, group, member, f"already a member of {held[0].group}"
                )

        # Managers and non-exclusive stables only overlap-check within the group
        per_group = kind == MembershipKind.MANAGEMENT or (
            kind == MembershipKind.STABLE_MEMBER and not self._config.enforce_single_stable
        )
        previous = [
            m.left_at
            for m in self._repository.memberships(kind, member=member)
            if m.left_at is not None and (not per_group or m.group == group)
        ]
        if previous and at < max(previous):
            raise InvalidDateRangeError(member, kind, at, max(previous))

    def _require_live(self, ref: EntityRef) -> RosterEntity:
        entity = self._repository.lock(ref)
        if entity is None or entity.is_deleted:
            raise EntityNotFoundError(ref)
        return entity
