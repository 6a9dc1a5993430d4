"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when the first document is written; this constant is the single source of
truth for the collection name.
"""

COLLECTION_STUDENTS = "students"
