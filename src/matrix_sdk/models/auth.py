from matrix_sdk.models.base import MatrixModel


class LoginResponse(MatrixModel):
    user_id: str
    access_token: str
    home_server: str | None = None
    device_id: str | None = None
    refresh_token: str | None = None
    expires_in_ms: int | None = None


class RegisterResponse(MatrixModel):
    user_id: str
    access_token: str | None = None
    home_server: str | None = None
    device_id: str | None = None


class WhoamiResponse(MatrixModel):
    user_id: str
    device_id: str | None = None
    is_guest: bool = False
