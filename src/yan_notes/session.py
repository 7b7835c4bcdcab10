"""Login state of the current user."""

from loguru import logger

from yan_notes.api.users import UsersClient
from yan_notes.config import LOGIN_PATH
from yan_notes.context import SessionContext
from yan_notes.errors import YanError
from yan_notes.models.user import LoginRequest, RegisterRequest, User
from yan_notes.protocols import NavigatorProtocol


class SessionState:
    """Login, logout and registration flows over the shared session context."""

    def __init__(
        self,
        users: UsersClient,
        context: SessionContext,
        navigator: NavigatorProtocol | None = None,
    ) -> None:
        self.users = users
        self.context = context
        self.navigator = navigator

    def login(self, credentials: LoginRequest) -> User:
        """Log in and remember the returned profile, and the token if one was issued.

        On failure any stored profile is forgotten and the error is re-raised.
        """
        try:
            user = self.users.login(credentials)
        except YanError:
            self.context.user = None
            raise
        self.context.user = user
        if self.users.issued_token:
            self.context.token = self.users.issued_token
        logger.info("Logged in as {}", user.username)
        return user

    def register(self, profile: RegisterRequest) -> User:
        """Create an account. The user still has to log in afterwards."""
        user = self.users.register(profile)
        logger.info("Registered {}", user.username)
        return user

    def logout(self) -> None:
        """Log out on the server if possible; always clear local state and redirect."""
        try:
            self.users.logout()
        except YanError as e:
            logger.warning("Logout API call failed, clearing local session anyway: {}", e)
        finally:
            self.context.clear()
            if self.navigator is not None:
                self.navigator.redirect(LOGIN_PATH)

    def is_logged_in(self) -> bool:
        return self.context.user is not None

    def current_user(self) -> User | None:
        return self.context.user
