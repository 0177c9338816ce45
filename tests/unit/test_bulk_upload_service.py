# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for CSV bulk onboarding."""

import pytest

from src.domains.bulk.service import (
    BulkUploadError,
    BulkUploadService,
    InvalidUploadFileError,
    check_csv,
)
from src.infrastructure.api.client import ApiResponseError
from src.models.bulk import BulkEntity

STUDENT_CSV = (
    "admissionNumber,firstName,lastName,classId\n"
    "STU100,Ravi,Kumar,class-10a\n"
    "STU101,Neha,Singh,class-10a\n"
)


@pytest.fixture
def bulk_service(mock_api):
    """Create bulk upload service with mock API client."""
    return BulkUploadService(mock_api)


@pytest.fixture
def student_file(tmp_path):
    """Write a valid student CSV."""
    path = tmp_path / "students.csv"
    path.write_text(STUDENT_CSV, encoding="utf-8")
    return path


class TestCheckCsv:
    """Tests for the local file pre-check."""

    def test_counts_data_rows(self):
        """Test a valid file reports its data rows."""
        assert check_csv(BulkEntity.STUDENTS, "s.csv", STUDENT_CSV.encode()) == 2

    def test_skips_blank_lines_and_bom(self):
        """Test blank lines and a UTF-8 BOM are tolerated."""
        content = ("\ufeff" + STUDENT_CSV + "\n,,,\n").encode("utf-8")

        assert check_csv(BulkEntity.STUDENTS, "s.csv", content) == 2

    def test_rejects_extension(self):
        """Test non-CSV files are rejected."""
        with pytest.raises(InvalidUploadFileError, match="not a .csv"):
            check_csv(BulkEntity.STUDENTS, "students.xlsx", STUDENT_CSV.encode())

    def test_rejects_empty_file(self):
        """Test empty files are rejected."""
        with pytest.raises(InvalidUploadFileError, match="empty"):
            check_csv(BulkEntity.STUDENTS, "s.csv", b"\n\n")

    def test_rejects_missing_columns(self):
        """Test files without the required columns are rejected."""
        content = b"employeeId,firstName,lastName\nE1,Meera,Iyer\n"

        with pytest.raises(InvalidUploadFileError, match="email"):
            check_csv(BulkEntity.TEACHERS, "t.csv", content)

    def test_rejects_header_only(self):
        """Test files with only a header are rejected."""
        with pytest.raises(InvalidUploadFileError, match="no rows"):
            check_csv(BulkEntity.STUDENTS, "s.csv", b"admissionNumber,firstName,lastName,classId\n")

    def test_rejects_binary(self):
        """Test non-UTF-8 content is rejected."""
        with pytest.raises(InvalidUploadFileError, match="UTF-8"):
            check_csv(BulkEntity.STUDENTS, "s.csv", b"\xff\xfe\x00\x81")


class TestUpload:
    """Tests for uploading files."""

    @pytest.mark.asyncio
    async def test_upload_students(self, bulk_service, mock_api, student_file):
        """Test the file is posted to the school's bulk endpoint."""
        mock_api.upload.return_value = {
            "successful": 1,
            "failed": 1,
            "errors": ["Row 3: duplicate admission number"],
            "credentials": [{"username": "stu100", "password": "Temp@123"}],
        }

        result = await bulk_service.upload_students("school-1", student_file)

        mock_api.upload.assert_awaited_once_with(
            "/schools/school-1/students/bulk-upload",
            file_name="students.csv",
            content=STUDENT_CSV.encode(),
            fields={"schoolId": "school-1"},
        )
        assert result.total == 2
        assert result.credentials[0].username == "stu100"

    @pytest.mark.asyncio
    async def test_invalid_file_not_sent(self, bulk_service, mock_api, tmp_path):
        """Test files failing the pre-check are never uploaded."""
        path = tmp_path / "teachers.csv"
        path.write_text("firstName\nMeera\n", encoding="utf-8")

        with pytest.raises(InvalidUploadFileError):
            await bulk_service.upload_teachers("school-1", path)

        mock_api.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_file(self, bulk_service, tmp_path):
        """Test unreadable paths raise InvalidUploadFileError."""
        with pytest.raises(InvalidUploadFileError, match="Cannot read"):
            await bulk_service.upload_students("school-1", tmp_path / "absent.csv")

    @pytest.mark.asyncio
    async def test_backend_rejects(self, bulk_service, mock_api, student_file):
        """Test backend refusals raise BulkUploadError."""
        mock_api.upload.side_effect = ApiResponseError("POST failed (413): too large", 413, "too large")

        with pytest.raises(BulkUploadError, match="too large"):
            await bulk_service.upload_students("school-1", student_file)


class TestTemplates:
    """Tests for template downloads."""

    @pytest.mark.asyncio
    async def test_download_template(self, bulk_service, mock_api):
        """Test templates are downloaded per entity."""
        mock_api.download.return_value = b"employeeId,firstName,lastName,email\n"

        content = await bulk_service.download_template(BulkEntity.TEACHERS)

        mock_api.download.assert_awaited_once_with("/master/templates/teachers")
        assert content.startswith(b"employeeId")
