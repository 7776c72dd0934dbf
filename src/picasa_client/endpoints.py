"""Remote endpoints used by the Picasa Web Albums client."""

from typing import Final

GOOGLE_AUTH_ENDPOINT: Final = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URL: Final = "https://www.googleapis.com/oauth2/v3/token"
GOOGLE_REFRESH_URL: Final = "https://www.googleapis.com/oauth2/v4/token"

PICASA_SCOPE: Final = "https://picasaweb.google.com/data"
PICASA_FEED_URL: Final = f"{PICASA_SCOPE}/feed/api/user/default"
PICASA_ENTRY_URL: Final = f"{PICASA_SCOPE}/entry/api/user/default"
PICASA_UPLOAD_SESSION_URL: Final = (
    "https://photos.googleapis.com/data/upload/resumable/media/create-session"
    "/feed/api/user/default"
)

DRIVE_FILES_URL: Final = "https://www.googleapis.com/drive/v3/files"

FETCH_AS_JSON: Final = "json"
FEED_GDATA_VERSION: Final = "2"
UPLOAD_GDATA_VERSION: Final = "3"

# Returned by the upload endpoint when a chunk was accepted and more may follow.
PARTIAL_ACCEPT_STATUS: Final = 308
