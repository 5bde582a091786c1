# Routes package init
"""
Notes App — API Routes Package
==============================

Route Inventory:
    - notes.py:   GET/POST/PUT/DELETE /api/notes   (note CRUD, ?id= selects)
    - health.py:  GET /health                     (record store probe)

The browser pages live in notesapp.ui.views.

Routes stay thin: read the request, call NoteService, return the model.
Status codes for failures come from the exception handlers in main.py.
"""
