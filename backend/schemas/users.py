from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, EmailStr, constr

# helper types
Name = constr(strip_whitespace=True, min_length=1, max_length=255)
Password = constr(min_length=6, max_length=72)
Role = Literal["manufacturer", "distributor", "retailer", "candidate", "admin"]
# admins are created with `python -m database.seed_admin`, never by sign-up
RegisterRole = Literal["manufacturer", "distributor", "retailer", "candidate"]

# ---------- Schemas ----------

class RegisterPayload(BaseModel):
    name: Name
    email: EmailStr
    password: Password
    role: RegisterRole

class LoginPayload(BaseModel):
    email: EmailStr
    password: constr(min_length=1, max_length=128)
    role: Optional[Role] = None

class AuthResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    token: str

class UserMini(BaseModel):
    id: int
    name: str
    email: str
    role: str
    model_config = ConfigDict(from_attributes=True)
