"""Data models for Microsoft Graph API drive items."""

from dataclasses import dataclass

# Graph API JSON field names
FIELD_ID = "id"
FIELD_NAME = "name"
FIELD_FOLDER = "folder"
FIELD_FILE = "file"
FIELD_MIME_TYPE = "mimeType"
FIELD_DELETED = "deleted"

# OData response keys
ODATA_NEXT_LINK = "@odata.nextLink"
ODATA_VALUE = "value"

# Remote id used by Graph for the top of a drive
ROOT_REMOTE_ID = "root"


@dataclass
class DriveItem:
    """Represents a single item (file or folder) from a children listing."""

    id: str
    name: str
    is_folder: bool
    mime_type: str = ""
    is_deleted: bool = False
