"""Enumerated domains shared by several operations.

Each enum is declared once and reused by every parameter that accepts
it, so ``list_entries``, ``create_entry`` and ``update_entry`` can never
drift apart on the set of entry types.
"""

from __future__ import annotations

from enum import StrEnum


class EntryType(StrEnum):
    """Kinds of interaction entry."""

    CALL = "call"
    EMAIL = "email"
    MEETING = "meeting"
    EVENT = "event"
    GIFT = "gift"
    LETTER = "letter"
    MESSAGE = "message"
    OTHER = "other"


class TaskStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"


class DateType(StrEnum):
    """Precision of a task's due date."""

    SPECIFIC = "specific"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    UNSPECIFIED = "unspecified"


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecurrenceType(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class TaggableEntity(StrEnum):
    """Entity kinds that can be linked to a tag."""

    CONTACT = "contact"
    ENTRY = "entry"
    TASK = "task"
    NOTE = "note"
    COMPANY = "company"


class TimelineFilter(StrEnum):
    """Item kinds in a contact timeline."""

    ALL = "all"
    ENTRIES = "entries"
    TASKS = "tasks"
    NOTES = "notes"


class ChangelogFilter(StrEnum):
    ALL = "all"
    CONTACTS = "contacts"
    ENTRIES = "entries"
    TASKS = "tasks"
    NOTES = "notes"
    DAYS = "days"
    COMPANIES = "companies"


class SearchFilter(StrEnum):
    ALL = "all"
    CONTACTS = "contacts"
    ENTRIES = "entries"
    TASKS = "tasks"
    NOTES = "notes"
    COMPANIES = "companies"
