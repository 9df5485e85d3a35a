"""
BrandAgent Backend - Submission Schemas
=========================================

`data` is returned exactly as stored: a JSON string, not a parsed object.
Clients call JSON.parse / json.loads on it themselves.
"""

from pydantic import BaseModel, ConfigDict, Field


class SubmitResponse(BaseModel):
    ok: bool = True
    id: int = Field(description="Identifier assigned to the new submission")


class SubmissionItem(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    data: str = Field(description="Raw JSON string as submitted")
    created_at: str = Field(
        alias="createdAt",
        description="ISO-8601 UTC insertion time",
    )
