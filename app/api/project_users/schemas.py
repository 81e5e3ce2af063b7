from pydantic import BaseModel, Field


class MembershipCreate(BaseModel):
    project_id: int = Field(alias="projectId")
    user_id: int = Field(alias="userId")

    model_config = {"populate_by_name": True}


class UserProjectOut(BaseModel):
    id: int
    name: str
    code: str

    model_config = {"from_attributes": True}
