"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the SQL in ``services`` so the wire format
does not depend on how rows come back from the database driver.
"""
