from __future__ import annotations

from typing import Annotated

from pydantic import AliasChoices, BeforeValidator, Field

from schemas.base import PayloadModel
from utils.coerce import LooseNumber, LooseStr, as_mapping


class LoanBorrower(PayloadModel):
    first_name: LooseStr = ""
    last_name: LooseStr = ""
    fico: LooseNumber = None
    dti_ratio: LooseStr = ""


class LoanProperty(PayloadModel):
    address_line1: LooseStr = ""
    city: LooseStr = ""
    state: LooseStr = ""
    zip_code: LooseStr = ""
    property_type: LooseStr = ""
    occupancy: LooseStr = ""
    appraised_value: LooseStr = ""


class LoanOfficer(PayloadModel):
    name: LooseStr = ""
    email: LooseStr = ""


class Loan(PayloadModel):
    """
    Key loan fields for display. Amount-like fields stay display strings,
    as the loan service returns them; term and FICO are numeric.
    """

    loan_number: LooseStr = ""
    los_loan_id: LooseStr = ""
    purpose: LooseStr = ""
    amount: LooseStr = ""
    rate: LooseStr = ""
    product_name: LooseStr = ""
    product_code: LooseStr = ""
    loan_term: LooseNumber = None
    loan_type: LooseStr = ""
    amortization_type: LooseStr = ""
    application_date: LooseStr = ""
    funded_at: LooseStr = ""
    ltv: LooseStr = ""
    cltv: LooseStr = ""
    borrower: Annotated[LoanBorrower, BeforeValidator(as_mapping)] = Field(default_factory=LoanBorrower)
    property: Annotated[LoanProperty, BeforeValidator(as_mapping)] = Field(default_factory=LoanProperty)
    loan_officer: Annotated[LoanOfficer, BeforeValidator(as_mapping)] = Field(
        default_factory=LoanOfficer,
        validation_alias=AliasChoices("loanofficer", "loanOfficer", "loan_officer"),
        serialization_alias="loanOfficer",
    )
