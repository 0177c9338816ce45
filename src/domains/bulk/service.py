# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bulk onboarding of students and teachers from CSV files.

Files are checked locally before upload: they must be ``.csv``, non-empty,
and have a header row containing every required column of the entity. The
backend creates the records and returns per-row failures together with the
login credentials it generated.
"""

import csv
import io
import logging
from pathlib import Path

from pydantic import ValidationError

from src.infrastructure.api.client import ApiClient, ApiError
from src.models.bulk import BulkEntity, BulkUploadResult

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[BulkEntity, tuple[str, ...]] = {
    BulkEntity.STUDENTS: ("admissionNumber", "firstName", "lastName", "classId"),
    BulkEntity.TEACHERS: ("employeeId", "firstName", "lastName", "email"),
}


class BulkUploadError(Exception):
    """Base exception for bulk upload errors."""

    pass


class InvalidUploadFileError(BulkUploadError):
    """Raised when a file fails the local pre-check; nothing was sent."""

    pass


def check_csv(entity: BulkEntity, file_name: str, content: bytes) -> int:
    """Check an upload file before it is sent.

    Args:
        entity: Entity the file onboards.
        file_name: Name of the file, used for the extension check.
        content: Raw file bytes.

    Returns:
        Number of data rows in the file.

    Raises:
        InvalidUploadFileError: If the file is not an acceptable CSV.
    """
    if Path(file_name).suffix.lower() != ".csv":
        raise InvalidUploadFileError(f"{file_name} is not a .csv file")

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise InvalidUploadFileError(f"{file_name} is not UTF-8 text") from e

    rows = list(csv.reader(io.StringIO(text)))
    rows = [row for row in rows if any(cell.strip() for cell in row)]
    if not rows:
        raise InvalidUploadFileError(f"{file_name} is empty")

    header = {cell.strip() for cell in rows[0]}
    missing = [column for column in REQUIRED_COLUMNS[entity] if column not in header]
    if missing:
        raise InvalidUploadFileError(
            f"{file_name} is missing required columns: {', '.join(missing)}"
        )

    data_rows = len(rows) - 1
    if data_rows == 0:
        raise InvalidUploadFileError(f"{file_name} has a header but no rows")
    return data_rows


class BulkUploadService:
    """Service for CSV onboarding and template downloads.

    Attributes:
        api: Backend API client.
    """

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def upload(self, entity: BulkEntity, school_id: str, path: Path) -> BulkUploadResult:
        """Check and upload a CSV file.

        Args:
            entity: Students or teachers.
            school_id: School the records are created in.
            path: CSV file to upload.

        Returns:
            Counts, per-row errors and generated credentials.

        Raises:
            InvalidUploadFileError: If the file fails the local pre-check.
            BulkUploadError: If the backend rejects the upload.
        """
        try:
            content = path.read_bytes()
        except OSError as e:
            raise InvalidUploadFileError(f"Cannot read {path}: {e}") from e

        rows = check_csv(entity, path.name, content)
        logger.info("Uploading %d %s for school %s", rows, entity.value, school_id)

        try:
            data = await self.api.upload(
                f"/schools/{school_id}/{entity.value}/bulk-upload",
                file_name=path.name,
                content=content,
                fields={"schoolId": school_id},
            )
        except ApiError as e:
            raise BulkUploadError(e.message) from e

        try:
            result = BulkUploadResult.model_validate(data or {})
        except ValidationError as e:
            raise BulkUploadError(f"Unexpected upload response: {e}") from e

        if result.failed:
            logger.warning(
                "Bulk upload of %s: %d of %d rows failed",
                entity.value,
                result.failed,
                result.total,
            )
        return result

    async def upload_students(self, school_id: str, path: Path) -> BulkUploadResult:
        return await self.upload(BulkEntity.STUDENTS, school_id, path)

    async def upload_teachers(self, school_id: str, path: Path) -> BulkUploadResult:
        return await self.upload(BulkEntity.TEACHERS, school_id, path)

    async def download_template(self, entity: BulkEntity) -> bytes:
        """Download the CSV template of an entity.

        Raises:
            BulkUploadError: If the backend call fails.
        """
        try:
            return await self.api.download(f"/master/templates/{entity.value}")
        except ApiError as e:
            raise BulkUploadError(e.message) from e
