"""Textual rendering layer for the overlay."""
