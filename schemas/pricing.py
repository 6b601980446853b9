from __future__ import annotations

from typing import Annotated

from pydantic import BeforeValidator, Field

from schemas.base import PayloadModel
from utils.coerce import LooseMapping, LooseNumber, LooseStr, LooseStrList, as_mapping


class ScenarioBorrower(PayloadModel):
    first_name: LooseStr = ""
    last_name: LooseStr = ""
    fico: LooseNumber = None
    dti_ratio: LooseNumber = None
    annual_income: LooseNumber = None


class ScenarioLoan(PayloadModel):
    amount: LooseNumber = None
    purpose: LooseStr = ""
    refinance_purpose: LooseStr = ""
    ltv: LooseNumber = None
    cltv: LooseNumber = None
    los_loan_id: LooseStr = ""


class ScenarioProperty(PayloadModel):
    address_line1: LooseStr = ""
    city: LooseStr = ""
    state: LooseStr = ""
    zip_code: LooseStr = ""
    property_type: LooseStr = ""
    occupancy: LooseStr = ""
    appraised_value: LooseNumber = None


class ScenarioSearch(PayloadModel):
    desired_lock_period: LooseNumber = None
    product_codes: LooseStrList = Field(default_factory=list)
    loan_types: LooseStrList = Field(default_factory=list)


class PricingScenario(PayloadModel):
    """Inputs and assumptions behind one PE pricing request."""

    base_rate_set_id: LooseStr = ""
    changeset_id: LooseStr = ""
    requested_on: LooseStr = ""
    completed_on: LooseStr = ""
    borrower: Annotated[ScenarioBorrower, BeforeValidator(as_mapping)] = Field(default_factory=ScenarioBorrower)
    loan: Annotated[ScenarioLoan, BeforeValidator(as_mapping)] = Field(default_factory=ScenarioLoan)
    property: Annotated[ScenarioProperty, BeforeValidator(as_mapping)] = Field(default_factory=ScenarioProperty)
    search: Annotated[ScenarioSearch, BeforeValidator(as_mapping)] = Field(default_factory=ScenarioSearch)
    custom_values: LooseMapping = Field(default_factory=dict)


class PricingChange(PayloadModel):
    path: str
    previous: str
    current: str
