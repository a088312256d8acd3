from pydantic import BaseModel, ConfigDict


class UserBase(BaseModel):
    username: str
    email: str


class UserCreate(UserBase):
    password: str


class UserLogin(BaseModel):
    email: str
    password: str


class UserOut(UserBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class LoginUser(UserBase):
    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    user: LoginUser
    token: str
