"""
app/validators/import_validator.py

Pre-flight checks for bulk import payloads.
"""

from __future__ import annotations

import csv
import io

from app.domain.bulk_import import FILE_FORMAT_DELIMITERS, ImportFileFormat
from app.errors import ClientInputError


class ImportPayloadValidator:
    """
    Validates tabular content before any Marketo call is made.
    """

    def validate(
        self,
        *,
        content: str,
        dedupe_key: str,
        file_format: str = ImportFileFormat.CSV,
    ) -> list[str]:
        """
        Check the header row and return its column names.

        Raises ClientInputError when the content is blank, the lookup column
        is absent from the header, or no data rows follow the header.
        """

        delimiter = FILE_FORMAT_DELIMITERS.get(file_format)
        if delimiter is None:
            raise ClientInputError(
                f"Unsupported format '{file_format}'. "
                f"Allowed values: {sorted(FILE_FORMAT_DELIMITERS)}."
            )
        if not content.strip():
            raise ClientInputError("Import content is empty.")
        if not dedupe_key.strip():
            raise ClientInputError("Deduplication key is empty.")

        reader = csv.reader(io.StringIO(content.lstrip("\ufeff")), delimiter=delimiter)
        header = next(reader, [])
        columns = [column.strip() for column in header]

        normalized = {column.lower() for column in columns if column}
        if dedupe_key.strip().lower() not in normalized:
            raise ClientInputError(
                f"Deduplication key '{dedupe_key}' is not a column in the import header."
            )

        has_data_row = any(any(cell.strip() for cell in row) for row in reader)
        if not has_data_row:
            raise ClientInputError("Import content has a header row but no data rows.")

        return columns
