"""
Upload endpoints.

Uploading a FIT/TCX/GPX file creates an upload that Strava processes
asynchronously; poll get_upload() until activity_id is set or error is
reported.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..exceptions import InvalidArgumentError
from . import endpoints, http
from .models import Upload
from .parsers import parse_upload
from .validation import require_id, require_text

logger = logging.getLogger(__name__)

DATA_TYPES = ("fit", "fit.gz", "tcx", "tcx.gz", "gpx", "gpx.gz")


def upload_activity(
    access_token: str,
    file_path: Union[str, Path],
    data_type: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    trainer: bool = False,
    commute: bool = False,
    external_id: Optional[str] = None,
    sport_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Upload an activity file as multipart/form-data.

    Args:
        access_token: Bearer token with activity:write scope
        file_path: Path of the FIT/TCX/GPX file
        data_type: One of fit, fit.gz, tcx, tcx.gz, gpx, gpx.gz
        name: Activity name (Strava picks one if omitted)
        description: Activity description
        trainer: Mark as a trainer activity
        commute: Mark as a commute
        external_id: Caller's identifier for the upload
        sport_type: Sport type override, e.g. "TrailRun"

    Returns:
        The upload status object
    """
    path = Path(require_text(str(file_path) if file_path else None, "file_path"))
    if not path.is_file():
        raise InvalidArgumentError("file_path", f"File not found: {path}")

    data_type = require_text(data_type, "data_type").lower()
    if data_type not in DATA_TYPES:
        raise InvalidArgumentError(
            "data_type", f"Data type must be one of {', '.join(DATA_TYPES)}"
        )

    form: Dict[str, str] = {"data_type": data_type}
    if name and name.strip():
        form["name"] = name
    if description and description.strip():
        form["description"] = description
    if trainer:
        form["trainer"] = "true"
    if commute:
        form["commute"] = "true"
    if external_id and external_id.strip():
        form["external_id"] = external_id
    if sport_type and sport_type.strip():
        form["sport_type"] = sport_type

    logger.info(f"Uploading {path.name} ({data_type})")
    with open(path, "rb") as f:
        return http.request(
            "POST",
            endpoints.UPLOADS,
            access_token,
            data=form,
            files={"file": (path.name, f)},
            timeout=http.UPLOAD_TIMEOUT,
        )


def get_upload(access_token: str, upload_id: int) -> Dict[str, Any]:
    upload_id = require_id(upload_id, "upload_id")
    return http.get(endpoints.UPLOAD.format(upload_id=upload_id), access_token)


def fetch_upload(access_token: str, upload_id: int) -> Upload:
    """Typed variant of get_upload()."""
    return parse_upload(get_upload(access_token, upload_id))
