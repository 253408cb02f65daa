"""
Place catalog core.

Responsibilities:
- Hold the place collection and the user's filter/sort criteria.
- Derive the ordered subset of places shown to the user.
- Provide distance and opening-hours helpers used by the derivation.
"""
