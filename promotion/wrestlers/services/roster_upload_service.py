import logging
import pandas as pd
from io import StringIO
from fastapi import UploadFile
from pydantic import ValidationError
from rapidfuzz import fuzz
from sqlalchemy.orm import Session
from promotion.core.exceptions import BusinessRuleError
from promotion.wrestlers.models import Wrestler
from promotion.wrestlers.schemas.wrestler_schema import WrestlerCreate, WrestlerUpdate
from promotion.wrestlers.services.wrestler_service import WrestlerService

logger = logging.getLogger(__name__)

NUMERIC_COLUMNS = [
    "fans", "starting_health", "low_health", "starting_stamina", "low_stamina",
    "deck_size", "drive", "resilience", "charisma", "brawl", "physical_condition",
]

class RosterUploadService:

    def __init__(self, db: Session):
        self.db = db
        self.wrestler_service = WrestlerService(db)

    def safe_str(self, value):
        if value is None:
            return ""
        if isinstance(value, float) and str(value) == "nan":
            return ""
        return str(value).strip()

    def safe_int(self, value):
        try:
            if value is None:
                return None
            if isinstance(value, float) and str(value) == "nan":
                return None
            return int(value)
        except (ValueError, TypeError):
            return None

    def safe_bool(self, value):
        return self.safe_str(value).lower() in ("true", "yes", "1", "y")

    def match_existing(self, name: str, roster) -> Wrestler:
        """Find the wrestler this row refers to, tolerating small spelling differences."""
        for wrestler in roster:
            if wrestler.name.lower() == name.lower():
                return wrestler
        for wrestler in roster:
            if fuzz.ratio(name.lower(), wrestler.name.lower()) > 90:
                return wrestler
        return None

    def row_attributes(self, row) -> dict:
        attributes = {}
        for column in NUMERIC_COLUMNS:
            raw = row.get(column)
            value = self.safe_int(raw)
            if value is None and self.safe_str(raw):
                # Unparseable numbers are left for validation to reject
                value = self.safe_str(raw)
            attributes[column] = value
        gender = self.safe_str(row.get("gender")).upper()
        if gender:
            attributes["gender"] = gender
        description = self.safe_str(row.get("description"))
        if description:
            attributes["description"] = description
        return {key: value for key, value in attributes.items() if value is not None}

    def read_roster(self, contents: bytes) -> pd.DataFrame:
        try:
            df = pd.read_csv(StringIO(contents.decode("utf-8")))
        except (UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise BusinessRuleError(f"Failed to read roster CSV: {e}")
        df.columns = [str(column).strip().lower() for column in df.columns]

        # Normalize: replace empty strings with None
        df = df.replace(r'^\s*$', None, regex=True)
        return df.where(pd.notnull(df), None)

    async def process_csv(self, file: UploadFile):
        """Read a roster CSV and create or update one wrestler per valid row.

        Rows that fail validation are skipped and reported under ``errors``
        before anything is written for them.
        """
        df = self.read_roster(await file.read())

        if "name" not in df.columns:
            return {"message": "CSV must contain a 'name' column", "created": 0, "updated": 0}

        created, updated, skipped = 0, 0, 0
        errors = []
        roster = self.db.query(Wrestler).all()
        for index, row in df.iterrows():
            line = index + 2  # header is line 1
            name = self.safe_str(row.get("name"))
            if not name:
                skipped += 1
                continue
            attributes = self.row_attributes(row)
            existing = self.match_existing(name, roster)
            try:
                if existing is not None:
                    changes = WrestlerUpdate(**attributes).model_dump(exclude_none=True)
                else:
                    values = WrestlerCreate(
                        name=name, is_player=self.safe_bool(row.get("is_player")), **attributes
                    ).model_dump(exclude_none=True)
            except ValidationError as e:
                messages = "; ".join(
                    f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
                )
                logger.warning(f"Roster upload: line {line} ({name}) rejected: {messages}")
                errors.append({"row": line, "name": name, "error": messages})
                skipped += 1
                continue

            if existing is not None:
                self.wrestler_service.update_wrestler(existing.wrestler_id, **changes)
                updated += 1
            else:
                wrestler = self.wrestler_service.create_wrestler(
                    values.pop("name"), values.pop("is_player"), values.pop("description", None), **values
                )
                roster.append(wrestler)
                created += 1

        logger.info(f"Roster upload: {created} created, {updated} updated, {skipped} skipped")
        return {
            "message": "Roster processed",
            "created": created,
            "updated": updated,
            "skipped": skipped,
            "errors": errors,
        }
