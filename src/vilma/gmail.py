from googleapiclient.discovery import build

from vilma.errors import API_ERRORS, SendError


class GMail:
    def __init__(self, service=None) -> None:
        self.service = service

    def authenticate_service(self, creds) -> None:
        self.service = build("gmail", "v1", credentials=creds)

    def send(self, raw: str) -> str:
        """Send an already encoded message, returns the Gmail message id."""
        try:
            result = (
                self.service.users()
                .messages()
                .send(userId="me", body={"raw": raw})
                .execute()
            )
        except API_ERRORS as error:
            raise SendError(f"could not send email: {error}") from error
        return result.get("id", "")
