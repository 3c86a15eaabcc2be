"""
Hook Name Constants

Events the host fires during admin page rendering and user registration.
Names follow the host platform's own action/filter names.
"""

from __future__ import annotations

# ── Registration form ─────────────────────────────────────────────────────────
HOOK_REGISTER_FORM = "register_form"  # action: render extra form fields
HOOK_REGISTRATION_ERRORS = "registration_errors"  # filter: (errors, login, email) -> errors

# ── Admin panel ───────────────────────────────────────────────────────────────
HOOK_ADMIN_MENU = "admin_menu"  # action: (navigation,)
HOOK_ADMIN_ENQUEUE_SCRIPTS = "admin_enqueue_scripts"  # action: (queue, page)

# ── Front end ─────────────────────────────────────────────────────────────────
HOOK_ENQUEUE_SCRIPTS = "enqueue_scripts"  # action: (queue,)

# ── Master list ───────────────────────────────────────────────────────────────
ALL_HOOKS: list[str] = [
    HOOK_REGISTER_FORM,
    HOOK_REGISTRATION_ERRORS,
    HOOK_ADMIN_MENU,
    HOOK_ADMIN_ENQUEUE_SCRIPTS,
    HOOK_ENQUEUE_SCRIPTS,
]
