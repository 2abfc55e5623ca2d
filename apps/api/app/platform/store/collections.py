"""Collection names shared by every repository.

Document stores have no DDL; these constants are the schema's single source
of truth. Sub-collections are addressed by path helpers.
"""

COLLECTION_USERS = "users"
COLLECTION_TASKS = "tasks"
COLLECTION_SHOOTS = "shoots"
COLLECTION_LEADS = "leads"
COLLECTION_INVOICES = "invoices"
COLLECTION_CLIENTS = "clients"
COLLECTION_NOTIFICATIONS = "notifications"
COLLECTION_SCRIPTS = "scripts"

# Owned by other tools; listed so names stay consistent.
COLLECTION_EDITING_TASKS = "editing_tasks"
COLLECTION_REVENUE = "revenue"
COLLECTION_EXPENSES = "expenses"
COLLECTION_FAQ = "faq"


def login_history_path(user_id: str) -> str:
    return f"{COLLECTION_USERS}/{user_id}/login_history"


def shoot_assignments_path(shoot_id: str) -> str:
    return f"{COLLECTION_SHOOTS}/{shoot_id}/assignments"


def script_versions_path(script_id: str) -> str:
    return f"{COLLECTION_SCRIPTS}/{script_id}/versions"
