# leadportal/models/submission.py

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


class RecordSchemaError(ValueError):
    """A row from the records store does not match the expected shape."""


def parse_timestamp(value):
    """Parses the ISO-8601 strings PostgREST returns into aware datetimes."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value:
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            raise RecordSchemaError(f'Invalid timestamp: {value!r}')
    else:
        raise RecordSchemaError(f'Invalid timestamp: {value!r}')

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass
class ContactSubmission:
    """One row of the contact form submissions table."""
    id: str
    full_name: str
    email: str
    phone: str
    timeline: str
    budget: str
    created_at: datetime
    project_details: Optional[str] = None
    hear_about: Optional[str] = None

    REQUIRED = ('id', 'full_name', 'email', 'phone', 'timeline', 'budget', 'created_at')

    @classmethod
    def from_row(cls, row):
        if not isinstance(row, dict):
            raise RecordSchemaError(f'Expected a mapping, got {type(row).__name__}')

        missing = [key for key in cls.REQUIRED if row.get(key) is None]
        if missing:
            raise RecordSchemaError(f"Submission row missing: {', '.join(missing)}")

        return cls(
            id=str(row['id']),
            full_name=str(row['full_name']),
            email=str(row['email']),
            phone=str(row['phone']),
            timeline=str(row['timeline']),
            budget=str(row['budget']),
            created_at=parse_timestamp(row['created_at']),
            project_details=row.get('project_details'),
            hear_about=row.get('hear_about'),
        )

    def matches(self, term):
        """Name and email match case-insensitively, phone as a plain substring."""
        if not term:
            return True
        needle = term.lower()
        return (
            needle in self.full_name.lower()
            or needle in self.email.lower()
            or term in self.phone
        )

    def csv_row(self):
        return [
            self.created_at.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            self.full_name,
            self.email,
            self.phone,
            self.timeline,
            self.budget,
            self.project_details or '',
            self.hear_about or '',
        ]


def profile_record(identity_id, email, full_name, created_at=None):
    """Builds the application profile row stored next to a new identity."""
    created_at = created_at or datetime.now(timezone.utc)
    return {
        'id': identity_id,
        'email': email,
        'full_name': full_name,
        'created_at': created_at.isoformat(),
    }
