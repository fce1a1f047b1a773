"""Event planner backend: event records, image attachments and a shared-password session gate."""

__version__ = "1.0.0"
