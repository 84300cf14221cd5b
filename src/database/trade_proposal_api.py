"""
Trade Proposal API - Database operations for AI trade proposals.

Handles CRUD operations with campaign isolation. Status transitions are done
by filter (campaign + status + optional expiry cutoff) so sweeps are a single
UPDATE and re-running them is a no-op.
"""

import json
from datetime import date
from typing import List, Optional

from .connection import TradeDatabase
from transactions.models import AssetReference, ProposalStatus, TradeProposal


class TradeProposalAPI:
    """
    API for trade proposal database operations.

    Handles:
    - Creating proposals from the AI generator
    - Checking for an outstanding pending proposal per team
    - Bulk status transitions (expiration sweep, deadline)
    - Querying proposal history
    """

    def __init__(self, db: TradeDatabase):
        """
        Initialize with database connection.

        Args:
            db: TradeDatabase instance
        """
        self.db = db

    # =========================================================================
    # Create Operations
    # =========================================================================

    def create_proposal(self, proposal: TradeProposal) -> int:
        """
        Persist a proposal.

        Args:
            proposal: TradeProposal to persist (id is assigned in place)

        Returns:
            id of created proposal
        """
        cursor = self.db.execute(
            """INSERT INTO trade_proposals
               (campaign_id, proposing_team_id, status, proposal, reason, created_at, expires_at)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (
                proposal.campaign_id,
                proposal.proposing_team_id,
                proposal.status.value,
                json.dumps(proposal.to_payload()),
                proposal.reason,
                proposal.created_at.isoformat(),
                proposal.expires_at.isoformat(),
            )
        )
        proposal.id = cursor.lastrowid
        return proposal.id

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_proposal(self, proposal_id: int) -> Optional[TradeProposal]:
        row = self.db.query_one("SELECT * FROM trade_proposals WHERE id = ?", (proposal_id,))
        return self._row_to_proposal(row) if row else None

    def find_proposals(
        self,
        campaign_id: int,
        status: Optional[ProposalStatus] = None,
        proposing_team_id: Optional[int] = None
    ) -> List[TradeProposal]:
        """
        Find proposals by filter.

        Args:
            campaign_id: Campaign isolation key
            status: Optional status filter
            proposing_team_id: Optional team filter

        Returns:
            Matching proposals, oldest first
        """
        sql = "SELECT * FROM trade_proposals WHERE campaign_id = ?"
        params = [campaign_id]

        if status is not None:
            sql += " AND status = ?"
            params.append(ProposalStatus.normalize(status).value)
        if proposing_team_id is not None:
            sql += " AND proposing_team_id = ?"
            params.append(proposing_team_id)

        sql += " ORDER BY id"
        return [self._row_to_proposal(row) for row in self.db.query_all(sql, tuple(params))]

    def has_pending_proposal(self, campaign_id: int, proposing_team_id: int) -> bool:
        row = self.db.query_one(
            """SELECT 1 FROM trade_proposals
               WHERE campaign_id = ? AND proposing_team_id = ? AND status = ?
               LIMIT 1""",
            (campaign_id, proposing_team_id, ProposalStatus.PENDING.value)
        )
        return row is not None

    # =========================================================================
    # Update Operations
    # =========================================================================

    def update_status(self, proposal_id: int, status: ProposalStatus) -> bool:
        """
        Set one proposal's status.

        Returns:
            True if a row was updated
        """
        cursor = self.db.execute(
            "UPDATE trade_proposals SET status = ? WHERE id = ?",
            (ProposalStatus.normalize(status).value, proposal_id)
        )
        return cursor.rowcount > 0

    def update_status_where(
        self,
        campaign_id: int,
        new_status: ProposalStatus,
        current_status: ProposalStatus = ProposalStatus.PENDING,
        expires_before: Optional[date] = None
    ) -> int:
        """
        Transition every matching proposal to new_status.

        Args:
            campaign_id: Campaign isolation key
            new_status: Status to set
            current_status: Only rows in this status are touched
            expires_before: If given, only rows with expires_at strictly before it

        Returns:
            Number of proposals updated
        """
        sql = "UPDATE trade_proposals SET status = ? WHERE campaign_id = ? AND status = ?"
        params = [
            ProposalStatus.normalize(new_status).value,
            campaign_id,
            ProposalStatus.normalize(current_status).value,
        ]

        if expires_before is not None:
            # ISO dates compare correctly as text
            sql += " AND expires_at < ?"
            params.append(expires_before.isoformat())

        cursor = self.db.execute(sql, tuple(params))
        return cursor.rowcount

    @staticmethod
    def _row_to_proposal(row) -> TradeProposal:
        payload = json.loads(row['proposal']) if row['proposal'] else {}
        return TradeProposal(
            id=row['id'],
            campaign_id=row['campaign_id'],
            proposing_team_id=row['proposing_team_id'],
            give=[AssetReference.from_dict(a) for a in payload.get('aiGives', [])],
            receive=[AssetReference.from_dict(a) for a in payload.get('aiReceives', [])],
            reason=row['reason'] or "",
            created_at=date.fromisoformat(row['created_at']),
            expires_at=date.fromisoformat(row['expires_at']),
            status=ProposalStatus.normalize(row['status']),
        )
