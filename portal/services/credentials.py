"""
Credential Store

Username -> password mapping loaded once at startup from a JSON document:

    {"credentials": {"admin": "secret", "alice": "hunter2"}}

When the document cannot be loaded, a single admin entry is used with the
password from settings (ADMIN_PASSWORD or its default).
"""
import json
from pathlib import Path
from typing import Callable, Dict, List, Optional

from portal.config import Settings
from portal.models.schemas import ADMIN_USERNAME, AuthResult
from portal.utils.logger import get_logger

logger = get_logger(__name__)

# (supplied password, stored password) -> match
PasswordVerifier = Callable[[str, str], bool]


def plaintext_verifier(supplied: str, stored: str) -> bool:
    """Exact, case-sensitive string match"""
    return supplied == stored


class CredentialStore:
    """
    Read-only credential lookup.

    Password comparison goes through a PasswordVerifier so a hashing scheme
    can replace plaintext_verifier without touching callers.
    """

    def __init__(
        self,
        credentials: Dict[str, str],
        verifier: PasswordVerifier = plaintext_verifier
    ) -> None:
        self._credentials = dict(credentials)
        self._verify = verifier

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialStore":
        """
        Load credentials from settings.credentials_file

        Falls back to {"admin": settings.admin_password} on any load failure.
        """
        credentials = load_credentials(Path(settings.credentials_file))
        if credentials is None:
            logger.warning(
                "Using default credentials (admin only); could not load %s",
                settings.credentials_file
            )
            credentials = {ADMIN_USERNAME: settings.admin_password}
        else:
            logger.info(f"Loaded credentials: {sorted(credentials)}")
        return cls(credentials)

    def usernames(self) -> List[str]:
        """Loaded usernames"""
        return sorted(self._credentials)

    def authenticate(self, username: Optional[str], password: Optional[str]) -> AuthResult:
        """
        Check a username/password pair

        Args:
            username: Supplied username
            password: Supplied password

        Returns:
            AuthResult; is_admin is only set for a valid "admin" login
        """
        if username is None or password is None:
            return AuthResult(is_valid=False)

        stored = self._credentials.get(username)
        if not stored or not self._verify(password, stored):
            return AuthResult(is_valid=False)

        return AuthResult(is_valid=True, is_admin=username == ADMIN_USERNAME)


def load_credentials(path: Path) -> Optional[Dict[str, str]]:
    """
    Read the credentials mapping from a JSON document

    Returns:
        The mapping, or None when the file is missing, malformed, or has no
        usable "credentials" object
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug(f"Credentials file unavailable: {e}")
        return None

    credentials = config.get("credentials") if isinstance(config, dict) else None
    if not isinstance(credentials, dict):
        return None

    return {
        str(username): password
        for username, password in credentials.items()
        if isinstance(password, str)
    }
