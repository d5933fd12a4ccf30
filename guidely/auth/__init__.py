"""
Client-side authentication for the Guidely marketplace.

Design goals:
- One injectable Session per process, restored once at startup.
- Auth operations are the only code paths that mutate the Session.
- Credential and user record are persisted together (never one without the other).
"""
