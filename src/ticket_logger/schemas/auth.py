from .common import APIModel


class LoginRequest(APIModel):
    # optional on purpose: the service answers missing values with its own 400 message
    username: str | None = None
    password: str | None = None


class LoginResponse(APIModel):
    message: str
    username: str
    token: str


class LoginInfo(APIModel):
    message: str
    required_fields: list[str]


class HomeResponse(APIModel):
    message: str
    version: str
    status: str
