# Services package init
"""
Notes App — Services Layer
==========================

Service Inventory:
    - NoteService: validation and CRUD for notes over the record store

Services know nothing about HTTP. They take an AsyncSession, raise the
exceptions from notesapp.exceptions, and return pydantic response models.
"""
