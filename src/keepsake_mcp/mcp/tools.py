"""MCP tool definitions: 43 tools across 12 resource families.

Families: Contacts (6), Companies (6), Entries (4), Tasks (7), Notes (7),
Days (3), Tags (4), Timeline (1), Smart task views (2), Changelog (1),
Search (1), Agent (1).

Each tool has a ``<name>_impl`` function translating validated
arguments into one RemoteCall; these are testable without HTTP or the
mcp package. ``register_tools()`` pairs them with their descriptors.
"""

from __future__ import annotations

from typing import Any

from keepsake_mcp.api.request import RemoteCall, build_call, path_segment, pick, without
from keepsake_mcp.domain.types import (
    ChangelogFilter,
    DateType,
    EntryType,
    Priority,
    RecurrenceType,
    SearchFilter,
    SortOrder,
    TaggableEntity,
    TaskStatus,
    TimelineFilter,
)
from keepsake_mcp.mcp.params import (
    ParamSpec,
    boolean,
    choice,
    integer,
    positive_int,
    string,
    uuid,
    uuid_list,
)
from keepsake_mcp.mcp.registry import (
    Annotations,
    Handler,
    OperationDescriptor,
    OperationRegistry,
)

PERMANENT_QUERY = "?permanent=true"


def _id(args: dict[str, Any]) -> str:
    return path_segment(args["id"])


def _delete_query(args: dict[str, Any]) -> str:
    return PERMANENT_QUERY if args.get("permanent") else ""


# ---------------------------------------------------------------------------
# Contacts (6)
# ---------------------------------------------------------------------------


def list_contacts_impl(args: dict[str, Any]) -> RemoteCall:
    query = pick(args, ("limit", "offset", "sort", "order", "include_last_interaction"))
    return build_call("/contacts", query=query)


def get_contact_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/contacts/{_id(args)}", query=pick(args, ("entries_limit",)))


def create_contact_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/contacts", "POST", body=args)


def update_contact_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/contacts/{_id(args)}", "PATCH", body=without(args, "id"))


def delete_contact_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/contacts/{_id(args)}", "DELETE")


def search_contacts_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/contacts/search", query=pick(args, ("q",)))


# ---------------------------------------------------------------------------
# Companies (6)
# ---------------------------------------------------------------------------


def list_companies_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/companies", query=pick(args, ("limit", "offset", "sort", "order")))


def get_company_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/companies/{_id(args)}")


def create_company_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/companies", "POST", body=args)


def update_company_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/companies/{_id(args)}", "PATCH", body=without(args, "id"))


def delete_company_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/companies/{_id(args)}", "DELETE", suffix=_delete_query(args))


def search_companies_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/companies/search", query=pick(args, ("q",)))


# ---------------------------------------------------------------------------
# Entries (4)
# ---------------------------------------------------------------------------


def list_entries_impl(args: dict[str, Any]) -> RemoteCall:
    query = pick(args, ("type", "contact_id", "from", "to", "limit", "offset"))
    return build_call("/entries", query=query)


def create_entry_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/entries", "POST", body=args)


def update_entry_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/entries/{_id(args)}", "PATCH", body=without(args, "id"))


def delete_entry_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/entries/{_id(args)}", "DELETE")


# ---------------------------------------------------------------------------
# Tasks (7)
# ---------------------------------------------------------------------------


def list_tasks_impl(args: dict[str, Any]) -> RemoteCall:
    query = pick(args, ("status", "date_type", "date", "limit", "offset"))
    return build_call("/tasks", query=query)


def create_task_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/tasks", "POST", body=args)


def update_task_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/tasks/{_id(args)}", "PATCH", body=without(args, "id"))


def delete_task_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/tasks/{_id(args)}", "DELETE")


def complete_task_impl(args: dict[str, Any]) -> RemoteCall:
    """Complete a task; the server spawns the next occurrence of recurring ones."""
    return build_call(f"/tasks/{_id(args)}/complete", "POST")


def uncomplete_task_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/tasks/{_id(args)}/uncomplete", "POST")


def snooze_task_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/tasks/{_id(args)}/snooze", "POST", body=without(args, "id"))


# ---------------------------------------------------------------------------
# Quick notes (7)
# ---------------------------------------------------------------------------


def list_notes_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/notes", query=pick(args, ("pinned", "archived", "limit", "offset")))


def create_note_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/notes", "POST", body=args)


def update_note_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/notes/{_id(args)}", "PATCH", body=without(args, "id"))


def delete_note_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/notes/{_id(args)}", "DELETE", suffix=_delete_query(args))


def pin_note_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/notes/{_id(args)}/pin", "POST")


def archive_note_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/notes/{_id(args)}/archive", "POST")


def restore_note_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/notes/{_id(args)}/restore", "POST")


# ---------------------------------------------------------------------------
# Days (3)
# ---------------------------------------------------------------------------


def list_days_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/days", query=pick(args, ("from", "to", "limit", "offset")))


def get_day_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/days/{path_segment(args['date'])}")


def update_day_impl(args: dict[str, Any]) -> RemoteCall:
    """Upsert: always POST, the server decides between create and update."""
    return build_call("/days", "POST", body=args)


# ---------------------------------------------------------------------------
# Tags (4)
# ---------------------------------------------------------------------------


def list_tags_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/tags", query=pick(args, ("limit", "offset")))


def get_tag_items_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/tags/{_id(args)}/items")


def link_tag_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/tags/{_id(args)}/link", "POST", body=without(args, "id"))


def unlink_tag_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call(f"/tags/{_id(args)}/unlink", "POST", body=without(args, "id"))


# ---------------------------------------------------------------------------
# Timeline, smart views, changelog, search, agent (6)
# ---------------------------------------------------------------------------


def get_contact_timeline_impl(args: dict[str, Any]) -> RemoteCall:
    query = pick(args, ("type", "from", "to", "limit", "offset"))
    return build_call(f"/contacts/{_id(args)}/timeline", query=query)


def get_tasks_today_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/tasks/today")


def get_tasks_overdue_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/tasks/overdue")


def get_changelog_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/changelog", query=pick(args, ("since", "type", "limit")))


def search_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/search", query=pick(args, ("q", "type", "limit")))


def get_agent_instructions_impl(args: dict[str, Any]) -> RemoteCall:
    return build_call("/agent/instructions")


# ---------------------------------------------------------------------------
# Shared parameters and annotation presets
# ---------------------------------------------------------------------------


def _limit(default: int = 20, *, per: str = "") -> ParamSpec:
    return positive_int("limit", f"Max results{per} (default {default})")


OFFSET = integer("offset", "Pagination offset", minimum=0)
SORT_ORDER = choice("order", SortOrder, "Sort order")
QUERY = string("q", "Search query", required=True)
FROM_DATE = string("from", "Start date (YYYY-MM-DD)")
TO_DATE = string("to", "End date (YYYY-MM-DD)")
PERMANENT = boolean("permanent", "Hard delete (default: false, soft delete)")


def _read(title: str) -> Annotations:
    return Annotations(title=title, read_only=True)


def _create(title: str) -> Annotations:
    return Annotations(title=title)


def _update(title: str) -> Annotations:
    return Annotations(title=title, idempotent=True)


def _delete(title: str) -> Annotations:
    return Annotations(title=title, destructive=True, idempotent=True)


def _add(
    registry: OperationRegistry,
    name: str,
    description: str,
    handler: Handler,
    annotations: Annotations,
    *params: ParamSpec,
) -> None:
    descriptor = OperationDescriptor(
        name=name,
        description=description,
        params=params,
        annotations=annotations,
    )
    registry.register(descriptor, handler)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def _register_contacts(registry: OperationRegistry) -> None:
    contact_id = uuid("id", "Contact UUID", required=True)
    _add(
        registry,
        "list_contacts",
        "List all contacts in the user's Keepsake CRM. Supports pagination, sorting, "
        "and optional last_interaction_date enrichment.",
        list_contacts_impl,
        _read("List contacts"),
        _limit(),
        OFFSET,
        string("sort", "Sort field: last_name, first_name, created_at"),
        SORT_ORDER,
        boolean(
            "include_last_interaction",
            "Include last_interaction_date for each contact (default: false)",
        ),
    )
    _add(
        registry,
        "get_contact",
        "Get a single contact by ID, including recent entries (interactions), tags, "
        "last_interaction_date, and total_entries count.",
        get_contact_impl,
        _read("Get contact"),
        contact_id,
        integer("entries_limit", "Max entries to return (default 10, -1 for all)"),
    )
    _add(
        registry,
        "create_contact",
        "Create a new contact. first_name and last_name are required.",
        create_contact_impl,
        _create("Create contact"),
        string("first_name", "First name", required=True),
        string("last_name", "Last name", required=True),
        *_contact_fields(),
    )
    _add(
        registry,
        "update_contact",
        "Update an existing contact. Only send the fields you want to change.",
        update_contact_impl,
        _update("Update contact"),
        contact_id,
        string("first_name", "First name"),
        string("last_name", "Last name"),
        *_contact_fields(),
    )
    _add(
        registry,
        "delete_contact",
        "Permanently delete a contact and all associated data.",
        delete_contact_impl,
        _delete("Delete contact"),
        contact_id,
    )
    _add(
        registry,
        "search_contacts",
        "Search contacts by name, email, company, etc. Search is accent-insensitive.",
        search_contacts_impl,
        _read("Search contacts"),
        QUERY,
    )


def _contact_fields() -> tuple[ParamSpec, ...]:
    return (
        string("email", "Email address"),
        string("phone", "Phone number"),
        string("company", "Company name"),
        string("notes", "Notes about the contact"),
    )


def _company_fields() -> tuple[ParamSpec, ...]:
    return (
        string("website", "Website URL"),
        string("email", "Email address"),
        string("phone", "Phone number"),
        string("address", "Address"),
        string("notes", "Notes about the company"),
    )


def _register_companies(registry: OperationRegistry) -> None:
    company_id = uuid("id", "Company UUID", required=True)
    _add(
        registry,
        "list_companies",
        "List all companies/organizations in the user's Keepsake CRM. "
        "Supports pagination and sorting.",
        list_companies_impl,
        _read("List companies"),
        _limit(),
        OFFSET,
        string("sort", "Sort field: name, created_at, updated_at"),
        SORT_ORDER,
    )
    _add(
        registry,
        "get_company",
        "Get a single company by ID, including linked contacts (with roles) and tags.",
        get_company_impl,
        _read("Get company"),
        company_id,
    )
    _add(
        registry,
        "create_company",
        "Create a new company/organization. Only 'name' is required.",
        create_company_impl,
        _create("Create company"),
        string("name", "Company name", required=True),
        *_company_fields(),
    )
    _add(
        registry,
        "update_company",
        "Update an existing company. Only send the fields you want to change.",
        update_company_impl,
        _update("Update company"),
        company_id,
        string("name", "Company name"),
        *_company_fields(),
    )
    _add(
        registry,
        "delete_company",
        "Soft-delete a company. Use permanent=true for hard delete.",
        delete_company_impl,
        _delete("Delete company"),
        company_id,
        PERMANENT,
    )
    _add(
        registry,
        "search_companies",
        "Search companies by name, email, website, or address. "
        "Search is accent-insensitive.",
        search_companies_impl,
        _read("Search companies"),
        QUERY,
    )


def _register_entries(registry: OperationRegistry) -> None:
    entry_id = uuid("id", "Entry UUID", required=True)
    content = string("content", "Entry content (supports #tag# and [[tag]])")
    _add(
        registry,
        "list_entries",
        "List interaction entries (calls, emails, meetings, events, etc.). "
        "Supports filtering by type, contact, and date range.",
        list_entries_impl,
        _read("List entries"),
        choice("type", EntryType, "Filter by entry type"),
        uuid("contact_id", "Filter by associated contact ID"),
        FROM_DATE,
        TO_DATE,
        _limit(),
        OFFSET,
    )
    _add(
        registry,
        "create_entry",
        "Create a new interaction entry. Content supports #tag# and [[tag]] syntax "
        "for automatic tag linking.",
        create_entry_impl,
        _create("Create entry"),
        choice("type", EntryType, "Entry type", required=True),
        string("date", "Date (YYYY-MM-DD)", required=True),
        content,
        uuid_list("contact_ids", "Array of contact UUIDs to associate"),
    )
    _add(
        registry,
        "update_entry",
        "Update an existing entry. Only send fields you want to change.",
        update_entry_impl,
        _update("Update entry"),
        entry_id,
        choice("type", EntryType, "Entry type"),
        string("date", "Date (YYYY-MM-DD)"),
        content,
        uuid_list("contact_ids", "Replace associated contacts"),
    )
    _add(
        registry,
        "delete_entry",
        "Delete an interaction entry.",
        delete_entry_impl,
        _delete("Delete entry"),
        entry_id,
    )


def _register_tasks(registry: OperationRegistry) -> None:
    task_id = uuid("id", "Task UUID", required=True)
    description = string("description", "Task description")
    due_date = string("date", "Due date (YYYY-MM-DD)")
    priority = choice("priority", Priority, "Priority level")
    _add(
        registry,
        "list_tasks",
        "List tasks. Filter by status (pending/completed), date_type, or specific date.",
        list_tasks_impl,
        _read("List tasks"),
        choice("status", TaskStatus, "Filter by status"),
        choice("date_type", DateType, "Filter by date type"),
        string("date", "Filter by specific date (YYYY-MM-DD)"),
        _limit(),
        OFFSET,
    )
    _add(
        registry,
        "create_task",
        "Create a new task. Title supports #tag# and [[tag]] for automatic tag linking.",
        create_task_impl,
        _create("Create task"),
        string("title", "Task title (supports #tag# and [[tag]])", required=True),
        description,
        due_date,
        choice("date_type", DateType, "Date type (default: specific)"),
        priority,
        choice("recurrence_type", RecurrenceType, "Recurrence pattern"),
        positive_int("recurrence_interval", "Recurrence interval (e.g., every N days)"),
        uuid("contact_id", "Associated contact UUID"),
    )
    _add(
        registry,
        "update_task",
        "Update an existing task. Only send fields you want to change.",
        update_task_impl,
        _update("Update task"),
        task_id,
        string("title", "Task title"),
        description,
        due_date,
        choice("date_type", DateType, "Date type"),
        priority,
    )
    _add(
        registry,
        "delete_task",
        "Delete a task.",
        delete_task_impl,
        _delete("Delete task"),
        task_id,
    )
    _add(
        registry,
        "complete_task",
        "Mark a task as completed. If the task is recurring, this automatically "
        "creates the next occurrence.",
        complete_task_impl,
        _update("Complete task"),
        task_id,
    )
    _add(
        registry,
        "uncomplete_task",
        "Mark a completed task as pending again.",
        uncomplete_task_impl,
        _update("Uncomplete task"),
        task_id,
    )
    _add(
        registry,
        "snooze_task",
        "Reschedule a task to a new date.",
        snooze_task_impl,
        _update("Snooze task"),
        task_id,
        string("date", "New date (YYYY-MM-DD)", required=True),
        choice("date_type", DateType, "New date type (default: specific)"),
    )


def _register_notes(registry: OperationRegistry) -> None:
    note_id = uuid("id", "Note UUID", required=True)
    _add(
        registry,
        "list_notes",
        "List quick notes. Filter by pinned status or archived status.",
        list_notes_impl,
        _read("List notes"),
        boolean("pinned", "Filter pinned notes only"),
        boolean("archived", "Filter archived notes"),
        _limit(),
        OFFSET,
    )
    _add(
        registry,
        "create_note",
        "Create a new quick note. Content supports #tag# and [[tag]] for automatic "
        "tag linking.",
        create_note_impl,
        _create("Create note"),
        string("content", "Note content (supports #tag# and [[tag]])", required=True),
        boolean("is_pinned", "Pin the note (default: false)"),
        uuid_list("contact_ids", "Array of contact UUIDs to associate"),
    )
    _add(
        registry,
        "update_note",
        "Update an existing quick note.",
        update_note_impl,
        _update("Update note"),
        note_id,
        string("content", "Updated content"),
    )
    _add(
        registry,
        "delete_note",
        "Soft-delete a quick note. Use permanent=true for hard delete.",
        delete_note_impl,
        _delete("Delete note"),
        note_id,
        PERMANENT,
    )
    _add(
        registry,
        "pin_note",
        "Pin a quick note so it appears at the top of the list.",
        pin_note_impl,
        _update("Pin note"),
        note_id,
    )
    _add(
        registry,
        "archive_note",
        "Archive a quick note.",
        archive_note_impl,
        _update("Archive note"),
        note_id,
    )
    _add(
        registry,
        "restore_note",
        "Restore a deleted or archived quick note.",
        restore_note_impl,
        _update("Restore note"),
        note_id,
    )


def _register_days(registry: OperationRegistry) -> None:
    _add(
        registry,
        "list_days",
        "List daily journal summaries. Filter by date range.",
        list_days_impl,
        _read("List days"),
        FROM_DATE,
        TO_DATE,
        _limit(),
        OFFSET,
    )
    _add(
        registry,
        "get_day",
        "Get a specific day's journal summary by date.",
        get_day_impl,
        _read("Get day"),
        string("date", "Date (YYYY-MM-DD)", required=True),
    )
    _add(
        registry,
        "update_day",
        "Create or update a daily journal summary. If a day entry already exists for "
        "this date, it will be updated (upsert).",
        update_day_impl,
        _update("Update day"),
        string("date", "Date (YYYY-MM-DD)", required=True),
        string("note", "Journal content for the day", required=True),
    )


def _register_tags(registry: OperationRegistry) -> None:
    tag_id = uuid("id", "Tag UUID", required=True)
    _add(
        registry,
        "list_tags",
        "List all tags. Tags organize contacts, entries, tasks, notes, and companies.",
        list_tags_impl,
        _read("List tags"),
        _limit(50),
        OFFSET,
    )
    _add(
        registry,
        "get_tag_items",
        "Get all items linked to a specific tag: contacts, entries, tasks, notes, "
        "and companies with counts.",
        get_tag_items_impl,
        _read("Get tag items"),
        tag_id,
    )
    _add(
        registry,
        "link_tag",
        "Link an entity (contact, entry, task, note, or company) to a tag.",
        link_tag_impl,
        _update("Link tag"),
        tag_id,
        choice("entity_type", TaggableEntity, "Type of entity to link", required=True),
        uuid("entity_id", "UUID of the entity to link", required=True),
    )
    _add(
        registry,
        "unlink_tag",
        "Remove the link between an entity and a tag.",
        unlink_tag_impl,
        _delete("Unlink tag"),
        tag_id,
        choice("entity_type", TaggableEntity, "Type of entity to unlink", required=True),
        uuid("entity_id", "UUID of the entity to unlink", required=True),
    )


def _register_views(registry: OperationRegistry) -> None:
    _add(
        registry,
        "get_contact_timeline",
        "Get a unified, chronological feed of ALL items related to a contact "
        "(entries, tasks, and notes) sorted by date, most recent first. Much more "
        "efficient than fetching entries, tasks, and notes separately.",
        get_contact_timeline_impl,
        _read("Get contact timeline"),
        uuid("id", "Contact UUID", required=True),
        choice("type", TimelineFilter, "Filter by item type (default: all)"),
        string("from", "Start date filter (YYYY-MM-DD)"),
        string("to", "End date filter (YYYY-MM-DD)"),
        _limit(),
        OFFSET,
    )
    _add(
        registry,
        "get_tasks_today",
        "Get all tasks for today: overdue tasks + tasks due today + ASAP tasks. Each "
        "task has a 'category' field ('overdue', 'today', or 'asap'). Includes counts "
        "per category.",
        get_tasks_today_impl,
        _read("Get today's tasks"),
    )
    _add(
        registry,
        "get_tasks_overdue",
        "Get only overdue tasks (pending tasks with a due date before today). Sorted "
        "by date ascending (oldest first).",
        get_tasks_overdue_impl,
        _read("Get overdue tasks"),
    )
    _add(
        registry,
        "get_changelog",
        "Get all items modified since a given timestamp, across all entity types. "
        "Perfect for 'heartbeat' checks to see what changed since your last visit. "
        "Returns server_time to use as 'since' for the next call.",
        get_changelog_impl,
        _read("Get changelog"),
        string(
            "since",
            "ISO timestamp; only items modified after this time are returned "
            "(e.g. 2026-02-11T10:00:00Z)",
            required=True,
        ),
        choice("type", ChangelogFilter, "Filter by entity type (default: all)"),
        positive_int("limit", "Max items per entity type (default 50, max 100)"),
    )
    _add(
        registry,
        "search",
        "Search across all Keepsake data: contacts, entries, tasks, notes, and "
        "companies. Search is accent-insensitive (e.g., 'berenice' finds 'Bérénice').",
        search_impl,
        _read("Search"),
        QUERY,
        choice("type", SearchFilter, "Limit search to a specific entity type (default: all)"),
        _limit(10, per=" per type"),
    )
    _add(
        registry,
        "get_agent_instructions",
        "Get best practices and instructions for being an effective Keepsake AI agent. "
        "Call this at the start of each session to refresh your instructions.",
        get_agent_instructions_impl,
        _read("Get agent instructions"),
    )


def register_tools(registry: OperationRegistry) -> None:
    """Register all 43 Keepsake operations on *registry*."""
    _register_contacts(registry)
    _register_companies(registry)
    _register_entries(registry)
    _register_tasks(registry)
    _register_notes(registry)
    _register_days(registry)
    _register_tags(registry)
    _register_views(registry)


def build_registry() -> OperationRegistry:
    """Create, populate, and seal the process-wide registry."""
    registry = OperationRegistry()
    register_tools(registry)
    registry.seal()
    return registry
