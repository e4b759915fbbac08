"""User accounts, login state and preferences."""

import dataclasses
from typing import Optional

from spendsense.database.base import Database
from spendsense.domain.entities import User, UserPreferences, UserProfile
from spendsense.domain.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
    user_not_found,
    username_taken,
)
from spendsense.utils.ids import new_id

THEME_PRESETS = ("Light Blue", "Dark Mode", "Green", "Purple", "Classic White")
FONTS = ("inter", "roboto", "serif", "rounded", "mono")

# Theme and font pairs offered as one-click presets.
PRESETS = {
    "Light Blue": "inter",
    "Dark Mode": "roboto",
    "Green": "serif",
    "Purple": "rounded",
    "Classic White": "mono",
}

DEFAULT_ADMIN = ("admin", "admin@admin.com", "admin123")
EMAIL_DOMAIN = "spendsense.com"


class UserService:
    """Service for user accounts.

    Passwords are compared as plain text. There is no hashing, lockout or
    throttling.
    """

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def ensure_default_admin(self) -> None:
        """Create the built-in admin account when no users exist."""
        if self.db.list_users():
            return
        username, email, password = DEFAULT_ADMIN
        self.db.save_user(
            User(
                id="admin-0",
                username=username,
                email=email,
                password=password,
                role="admin",
                profile=UserProfile(full_name="Administrator", pet_name="Admin", email=email),
            )
        )

    def sign_up(self, username: str, password: str) -> User:
        """Register a new user and return it.

        Raises:
            ValidationError: If username or password is blank
            ConflictError: If the username is taken
        """
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("User ID and password are required")
        if self.db.get_user_by_username(username) is not None:
            raise ConflictError(username_taken(username))

        email = f"{username}@{EMAIL_DOMAIN}"
        user = User(
            id=new_id("u"),
            username=username,
            email=email,
            password=password,
            profile=UserProfile(pet_name=username, email=email),
        )
        self.db.save_user(user)
        return user

    def authenticate(self, identifier: str, password: str) -> User:
        """Find a user by username or email whose password matches.

        Raises:
            AuthenticationError: If no user matches
        """
        for user in self.db.list_users():
            if identifier in (user.username, user.email) and user.password == password:
                return user
        raise AuthenticationError("Invalid Credentials")

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.get_user(user_id)

    def require_user(self, user_id: str) -> User:
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        return user

    def list_users(self) -> list[User]:
        return self.db.list_users()

    def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        """Change a password after checking the current one.

        Raises:
            AuthenticationError: If the current password does not match
            ValidationError: If the new password is blank
        """
        user = self.require_user(user_id)
        if user.password != current_password:
            raise AuthenticationError("Current password is incorrect")
        if not new_password:
            raise ValidationError("New password cannot be empty")
        self.db.save_user(dataclasses.replace(user, password=new_password))

    def update_preferences(
        self, user_id: str, theme: Optional[str] = None, font: Optional[str] = None
    ) -> UserPreferences:
        """Update theme and/or font.

        Picking a theme without a font applies that theme's preset font.

        Raises:
            ValidationError: If the theme or font is not one of the known values
        """
        user = self.require_user(user_id)
        if theme is not None and theme not in THEME_PRESETS:
            raise ValidationError(f"Unknown theme '{theme}'. Choose from: {', '.join(THEME_PRESETS)}")
        if font is not None and font not in FONTS:
            raise ValidationError(f"Unknown font '{font}'. Choose from: {', '.join(FONTS)}")

        if theme is not None and font is None:
            font = PRESETS[theme]
        prefs = UserPreferences(
            theme=theme if theme is not None else user.preferences.theme,
            font=font if font is not None else user.preferences.font,
        )
        self.db.save_user(dataclasses.replace(user, preferences=prefs))
        return prefs

    def update_profile(self, user_id: str, **fields: Optional[str]) -> UserProfile:
        """Update profile fields that are not None."""
        user = self.require_user(user_id)
        profile = user.profile or UserProfile()
        changes = {key: value for key, value in fields.items() if value is not None}
        profile = dataclasses.replace(profile, **changes)
        self.db.save_user(dataclasses.replace(user, profile=profile))
        return profile

    # Login state
    def login(self, identifier: str, password: str) -> User:
        user = self.authenticate(identifier, password)
        self.db.set_session_user(user.id)
        return user

    def logout(self) -> None:
        self.db.set_session_user(None)

    def current_user(self) -> Optional[User]:
        user_id = self.db.get_session_user()
        if user_id is None:
            return None
        return self.db.get_user(user_id)
