"""Firestore integration (REST client and repositories)."""

from app.infrastructure.firebase.client import create_firestore_client

__all__ = ["create_firestore_client"]
