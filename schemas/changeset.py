from __future__ import annotations

from typing import Annotated

from pydantic import BeforeValidator, Field

from schemas.base import PayloadModel
from utils.coerce import LooseCount, LooseInt, LooseOptionalStr, LooseStr, as_mapping


class ChangesetDetails(PayloadModel):
    status: LooseStr = ""
    initiated_at: LooseStr = ""
    published_at: LooseStr = ""
    pricing_generated_at: LooseStr = ""


class VersionInfo(PayloadModel):
    based_on_id: LooseStr = ""
    additions_to_base: LooseInt = None
    modifications_to_base: LooseInt = None
    removals_from_base: LooseInt = None


class Changeset(PayloadModel):
    id: LooseStr = ""
    name: LooseStr = ""
    details: Annotated[ChangesetDetails, BeforeValidator(as_mapping)] = Field(default_factory=ChangesetDetails)
    version_info: Annotated[VersionInfo, BeforeValidator(as_mapping)] = Field(default_factory=VersionInfo)


class ChangesetPage(PayloadModel):
    """One page of changesets, most recently published first."""

    total: LooseCount = 0
    changesets: list[Changeset] = Field(default_factory=list)
    next_page: LooseOptionalStr = None
    previous_page: LooseOptionalStr = None
