"""
CSV Parser Service
Parsing and validation of participant CSV uploads
"""

import csv
import io
from typing import List, Dict, Tuple
from fastapi import HTTPException, status


class CSVParser:
    """Utility for parsing participant CSV files"""

    HEADER_ALIASES = {
        "name": {"name", "full name", "fullname", "participant name"},
        "email": {"email", "email address", "mail", "e-mail"},
    }

    @staticmethod
    def _normalize_header(header: str) -> str:
        if not header:
            return ""
        return header.strip().lstrip("\ufeff").lower()

    @classmethod
    def _map_headers(cls, headers: List[str]) -> Dict[str, str]:
        mapped = {}
        for h in headers:
            normalized = cls._normalize_header(h)
            for key, aliases in cls.HEADER_ALIASES.items():
                if normalized in aliases and key not in mapped:
                    mapped[key] = h
        return mapped

    @classmethod
    def parse_participant_csv(cls, file_content: bytes) -> Tuple[List[dict], List[dict]]:
        """
        Parse a participant CSV

        Rows without a name or email are skipped and reported.

        Returns:
            (participants, skipped) where skipped items are {"row", "error"}
        """
        csv_text = file_content.decode("utf-8-sig", errors="ignore")

        reader = csv.DictReader(io.StringIO(csv_text))
        if not reader.fieldnames:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="CSV file is empty or has no headers"
            )

        header_map = cls._map_headers(reader.fieldnames)
        required = {"name", "email"}
        if not required.issubset(header_map.keys()):
            missing = required - set(header_map.keys())
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Missing required columns: {', '.join(sorted(missing))}"
            )

        participants = []
        skipped = []
        for row_num, row in enumerate(reader, start=2):  # row 1 is the header
            name = (row.get(header_map["name"]) or "").strip()
            email = (row.get(header_map["email"]) or "").strip()

            if not name and not email:
                continue
            if not name:
                skipped.append({"row": row_num, "error": "name is empty"})
                continue
            if not email:
                skipped.append({"row": row_num, "error": "email is empty"})
                continue

            participants.append({"name": name, "email": email})

        if not participants:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No valid rows found in CSV"
            )

        return participants, skipped
