"""Enums for the LeadHub application.

Status values are stored lowercase with underscores, exactly as the
pipeline board and the import engine write them.
"""

from enum import Enum


class UserRole(str, Enum):
    """Roles carried in access tokens."""

    ADMIN = "admin"
    BROKER = "broker"
    TEAM_MEMBER = "team_member"


class LeadStatus(str, Enum):
    """Pipeline stage of a lead."""

    NEW = "new"
    NO_ANSWER = "no_answer"
    CALL_BACK = "call_back"
    PENDING = "pending"
    BAD_LEAD = "bad_lead"
    SETTLED = "settled"


class LeadSubStatus(str, Enum):
    """
    Refinement of `pending` or `bad_lead`.

    Any other status must carry no sub-status.
    """

    # pending
    WAITING_ON_BANKING = "waiting_on_banking"
    INDICATIVE_OFFER = "indicative_offer"
    DOCS_OUT = "docs_out"
    SUBMITTED = "submitted"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"

    # bad_lead
    DUPLICATE = "duplicate"
    INVALID_NUMBER = "invalid_number"
    BELOW_MINIMUM_DEPOSIT = "below_minimum_deposit"
    INELIGIBLE = "ineligible"
    EXCESSIVE_DISHONORS = "excessive_dishonors"
    NOT_INTERESTED = "not_interested"


STATUSES_WITH_SUB_STATUS = frozenset({LeadStatus.PENDING, LeadStatus.BAD_LEAD})

DEFAULT_IMPORT_SOURCE = "csv_import"
