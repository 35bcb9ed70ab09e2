from pydantic import BaseModel, Field
from typing import Dict, Optional
from netbill.schemas.record import SheetRecord
from netbill.schemas.status import RecordStatus, Role

class User(SheetRecord):
    username: str = Field("", validation_alias="Username")
    email: str = Field("", validation_alias="Email")
    # stored as handed in; hashing happens before the table is called
    password: str = Field("", validation_alias="Password")
    role: str = Field("", validation_alias="Role")
    status: str = Field("", validation_alias="Status")
    created_at: str = Field("", validation_alias="Created_At")

class UserPublic(BaseModel):
    """User as returned over HTTP: never carries the password column."""
    id: str
    username: str
    email: str
    role: str
    status: str
    created_at: str

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(**user.model_dump(exclude={"password"}))

class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=3, max_length=30, pattern=r"^[a-zA-Z0-9_]+$")
    email: Optional[str] = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    role: Optional[Role] = None
    status: Optional[RecordStatus] = None

class UserStats(BaseModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    by_role: Dict[str, int] = Field(default_factory=dict)
