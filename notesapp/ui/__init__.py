"""
Notes App — Browser UI
======================

    state.py       immutable UIState + reduce(state, event)
    client.py      httpx client for /api/notes
    controller.py  actions → API calls → events
    views.py       Jinja2 pages and form endpoints
"""
