from schemas.call_log import LogEntry
from schemas.changeset import Changeset, ChangesetDetails, ChangesetPage, VersionInfo
from schemas.loan import Loan, LoanBorrower, LoanOfficer, LoanProperty
from schemas.lock_request import BuySide, LockRequest, LockRequestList
from schemas.pricing import (
    PricingChange,
    PricingScenario,
    ScenarioBorrower,
    ScenarioLoan,
    ScenarioProperty,
    ScenarioSearch,
)
from schemas.rates import RateSetItem, RateSetPage
from schemas.triage import (
    ChangesetsState,
    LoanState,
    LockRequestsState,
    RunStatus,
    TriageRequest,
    TriageSnapshot,
    WorkflowState,
)

__all__ = [
    "LogEntry",
    "Changeset",
    "ChangesetDetails",
    "ChangesetPage",
    "VersionInfo",
    "Loan",
    "LoanBorrower",
    "LoanOfficer",
    "LoanProperty",
    "BuySide",
    "LockRequest",
    "LockRequestList",
    "PricingChange",
    "PricingScenario",
    "ScenarioBorrower",
    "ScenarioLoan",
    "ScenarioProperty",
    "ScenarioSearch",
    "RateSetItem",
    "RateSetPage",
    "ChangesetsState",
    "LoanState",
    "LockRequestsState",
    "RunStatus",
    "TriageRequest",
    "TriageSnapshot",
    "WorkflowState",
]
