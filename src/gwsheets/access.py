"""
Authenticated access to the Sheets service.
See https://developers.google.com/workspace/guides/create-credentials#choose_the_access_credential_that_is_right_for_you
for an overview of what you'll need.  The key file can be either:

    a service account key, which is used as is, no user interaction, or
    an OAuth client secrets file, which triggers the browser confirmation
    the first time.  The resulting refreshable token is cached so that
    confirmation does not need to happen repeatedly.

Nothing past this module sees the credentials, everything else works
with the backend built from them.
"""
from collections.abc import Iterable
from pathlib import Path
import json
import logging

import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource
import googleapiclient.discovery_cache as gws_discovery_cache

from .config import Settings
from .exceptions import ConfigurationError, TransportFailure
from .sheets.ops import GoogleSheetsBackend
from .sheets.spreadsheet import GoogleSpreadSheet

logger = logging.getLogger(__name__)

_SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
    "drive-file": "https://www.googleapis.com/auth/drive.file",
    "drive": "https://www.googleapis.com/auth/drive",
    "drive-ro": "https://www.googleapis.com/auth/drive.readonly",
}
_SCOPE_URL_PREFIX = "https://www.googleapis.com/"

_AUTH_PROMPT_MSG = "Please visit this URL to authorize gwsheets: {url}"
_AUTH_FLOW_SUCCESS_MSG = "gwsheets is authorized, you may close this window."

def get_scope(scope: str) -> str:
    """
    Get a scope based on simplified label.
    A raw URL will also be expected.  Unknown labels give an empty string.
    """
    s = str(scope)
    sc = _SCOPES.get(s, "")
    if not sc and s.startswith(_SCOPE_URL_PREFIX):
        sc = s
    return sc

def resolve_scopes(scopes: str|Iterable[str]) -> list[str]:
    """Turn labels/URLs into a list of scope URLs, rejecting unknown ones"""
    slist = []
    values = [scopes] if isinstance(scopes, str) else list(scopes)
    for v in values:
        s = get_scope(v)
        if not s:
            raise ConfigurationError(f"unknown scope: {v}")
        if s not in slist:
            slist.append(s)
    return slist

class GoogleSheetsAccess():
    """
    Holds the credentials and builds the service from them.
    One of these per thread if you're going to share, the http transport
    underneath the client isn't thread safe.
    """
    def __init__(self, key_path: Path|str, scopes: str|Iterable[str] = ("sheets",),
                 cred_cache: Path|str|None = None) -> None:
        self._key_path = Path(key_path)
        self._scopes = resolve_scopes(scopes)
        self._cache = Path(cred_cache) if cred_cache else None
        self._creds = None
        self._service = None

    def __str__(self) -> str:
        state = "Connected" if self.connected else "Disconnected"
        return f"{state}:{str(self._scopes)}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @property
    def key_path(self) -> Path:
        return self._key_path

    @property
    def scopes(self) -> list[str]:
        return self._scopes

    @property
    def creds(self):
        """Current credentials or None"""
        return self._creds

    @property
    def connected(self) -> bool:
        """
        Are we authenticated with Google?
        A service account that hasn't fetched its first token yet is not
        'valid' but is good to go, the client will get one on first use.
        """
        if self._creds is None:
            return False
        if isinstance(self._creds, service_account.Credentials):
            return True
        return bool(self._creds.valid)

    def _read_key(self) -> dict:
        if not (self._key_path.exists() and self._key_path.is_file()):
            raise ConfigurationError(f"key file not found: {self._key_path}")
        try:
            with open(self._key_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"unreadable key file {self._key_path}: {e}") from e

    def connect(self) -> bool:
        """
        Establish a new authentication session.
        For an OAuth client this will try the token cache first, then a
        refresh, and only then the browser flow.
        """
        self._creds = None
        self._service = None
        key = self._read_key()
        if key.get('type') == 'service_account':
            try:
                self._creds = service_account.Credentials.from_service_account_info(key, scopes=self._scopes)
            except ValueError as e:
                raise ConfigurationError(f"invalid service account key {self._key_path}: {e}") from e
        elif 'installed' in key or 'web' in key:
            self._connect_oauth()
        else:
            raise ConfigurationError(f"{self._key_path} is neither a service account key nor OAuth client secrets")
        return self.connected

    def _connect_oauth(self) -> None:
        if self._cache and self._cache.is_file():
            # the cache doesn't know what scopes it was for so we stash
            # them alongside and throw the cache away if they don't cover us
            with open(self._cache, 'r', encoding='utf-8') as f:
                cached = json.load(f)
            if all(s in cached.get('scopes', []) for s in self._scopes):
                self._creds = Credentials.from_authorized_user_info(cached, self._scopes)
            else:
                logger.warning("cached token %s lacks requested scopes, re-authorizing", self._cache)
                self._cache.unlink()

        if self._creds and not self._creds.valid and self._creds.refresh_token:
            try:
                self._creds.refresh(Request())
            except google.auth.exceptions.RefreshError as e:
                logger.warning("failed to refresh stored creds: %s, re-authorizing", e)
                self._creds = None

        if not self.connected:
            flow = InstalledAppFlow.from_client_secrets_file(str(self._key_path), self._scopes)
            self._creds = flow.run_local_server(port=0,
                                                authorization_prompt_message=_AUTH_PROMPT_MSG,
                                                success_message=_AUTH_FLOW_SUCCESS_MSG)

        if self.connected and self._cache:
            user_info = {'refresh_token': self._creds.refresh_token,
                         'client_id': self._creds.client_id,
                         'client_secret': self._creds.client_secret,
                         'scopes': self._scopes}
            with open(self._cache, 'w', encoding='utf-8') as f:
                json.dump(user_info, f, ensure_ascii=False, indent=2)

    def get_service(self) -> Resource:
        """
        Build the sheets v4 service if not already available, connecting if required.
        """
        if not self.connected:
            self.connect()
        if self._service is None:
            try:
                self._service = build("sheets", "v4", credentials=self._creds,
                                      cache=gws_discovery_cache.autodetect())
            except google.auth.exceptions.GoogleAuthError as e:
                raise TransportFailure("build_service", e) from e
        return self._service

def connect(settings: Settings) -> GoogleSheetsBackend:
    """Authenticate with the configured key and return a backend to talk to"""
    access = GoogleSheetsAccess(settings.key_path, settings.scopes, settings.token_cache)
    logger.debug("connecting with %s", settings.key_path)
    return GoogleSheetsBackend(access.get_service())

def open_spreadsheet(settings: Settings) -> GoogleSpreadSheet:
    """Shortcut for connect() and wrapping the configured spreadsheet"""
    return GoogleSpreadSheet(connect(settings), settings.spreadsheet_id)
