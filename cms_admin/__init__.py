"""
CMS Admin Plugins

Plugin-registration layer for the CMS admin panel: registration-form fields,
admin menu pages and asset manifests wired into the host's hook lifecycle.
"""

__version__ = "1.0.0"
