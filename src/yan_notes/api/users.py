"""Client for the /v1/users endpoints."""

from yan_notes.models.user import (
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    User,
)
from yan_notes.transport import Transport


class UsersClient:
    """Maps user operations to API calls. Errors pass through from the transport."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport
        # Token from the Authorization header of the last login response, if any.
        self.issued_token: str | None = None

    def register(self, data: RegisterRequest) -> User:
        """POST /v1/users/register"""
        return User.from_json(self.transport.request("/v1/users/register", method="POST", body=data))

    def login(self, data: LoginRequest) -> User:
        """POST /v1/users/login

        A token returned in the Authorization response header is kept in issued_token.
        """
        self.issued_token = None
        user = User.from_json(self.transport.request("/v1/users/login", method="POST", body=data))
        self.issued_token = self.transport.last_response_headers.get("Authorization") or None
        return user

    def logout(self) -> None:
        """POST /v1/users/logout"""
        self.transport.request("/v1/users/logout", method="POST")

    def get(self, user_id: int) -> User:
        """GET /v1/users/:id"""
        return User.from_json(self.transport.request(f"/v1/users/{user_id}", method="GET"))

    def update_profile(self, user_id: int, data: UpdateProfileRequest) -> User:
        """PUT /v1/users/:id"""
        return User.from_json(
            self.transport.request(f"/v1/users/{user_id}", method="PUT", body=data)
        )

    def change_password(self, user_id: int, data: ChangePasswordRequest) -> None:
        """PUT /v1/users/:id/password"""
        self.transport.request(f"/v1/users/{user_id}/password", method="PUT", body=data)
