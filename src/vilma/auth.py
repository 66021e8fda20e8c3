import os.path

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from vilma.config import Settings
from vilma.errors import AuthError


def save_credentials(creds: Credentials, path_token) -> None:
    os.makedirs(os.path.dirname(path_token) or ".", exist_ok=True)
    with open(path_token, "w") as token:
        token.write(creds.to_json())


def load_credentials(settings: Settings) -> Credentials:
    """Load the stored token, refreshing it when it has expired."""
    path_token = str(settings.token_path)
    if not os.path.exists(path_token):
        raise AuthError("no credentials found, please run 'vilma auth' first")

    creds = Credentials.from_authorized_user_file(path_token, list(settings.scopes))
    if creds.valid:
        return creds
    if creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except RefreshError as e:
            raise AuthError(f"could not refresh token, run 'vilma auth' again: {e}") from e
        save_credentials(creds, path_token)
        return creds
    raise AuthError("stored credentials are invalid, run 'vilma auth' again")


def authorize(settings: Settings) -> bool:
    """Run the browser consent flow unless a usable token is already stored.

    Returns True when new credentials were saved.
    """
    try:
        load_credentials(settings)
        return False
    except AuthError:
        pass

    path_creds = str(settings.creds_path)
    if not os.path.exists(path_creds):
        raise AuthError(f"missing OAuth client file: {path_creds}")
    flow = InstalledAppFlow.from_client_secrets_file(path_creds, list(settings.scopes))
    creds = flow.run_local_server(port=0)
    save_credentials(creds, str(settings.token_path))
    return True
