"""
User profiles.

Responsibilities:
- Keep the list of known users (username + avatar).
- Encode profiles as shareable codes and decode them back.
- Expose the session user to request handlers.
"""
