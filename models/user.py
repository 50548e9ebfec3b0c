"""
models/user.py
--------------
Domain model for application users, keyed by their username.
"""

from orm import Entity, register


@register
class User(Entity):
    """
    A user account.

    Attributes:
        username: Primary key, chosen by the caller (save with force_create=True).
        fullName: Display name.
        password: Password hash.
        email: Contact address.
        isAdmin: Administrator flag (default False).
        rememberToken: Session token for "remember me" logins (default "").
    """
    primary = "username"
    attributes = ("fullName", "password", "email", "isAdmin", "rememberToken")
    defaults = {"isAdmin": False, "rememberToken": ""}

    def name(self) -> str:
        return self["fullName"] or str(self.key)
